"""Tests for services.excel_service."""

import openpyxl
import pytest

from controllers.grid_controller import GridController
from services.excel_service import SHEET_NAME, ExcelServiceError, export_xlsx


def test_export_writes_header_and_rows(tmp_path):
    path = tmp_path / "reporte.xlsx"
    export_xlsx(str(path), [["Item", "Precio"], ["Tornillo", "0.5"], ["Tuerca larga", "12"]])

    ws = openpyxl.load_workbook(path)[SHEET_NAME]
    rows = [[c.value for c in r] for r in ws.iter_rows()]
    assert rows == [["Item", "Precio"], ["Tornillo", "0.5"], ["Tuerca larga", "12"]]
    assert ws.column_dimensions["A"].width == len("Tuerca larga") + 2


def test_export_empty_table_raises(tmp_path):
    with pytest.raises(ExcelServiceError):
        export_xlsx(str(tmp_path / "vacio.xlsx"), [])


def test_export_to_missing_directory_raises(tmp_path):
    with pytest.raises(ExcelServiceError):
        export_xlsx(str(tmp_path / "no_existe" / "r.xlsx"), [["a", "b"], ["c", "d"]])


def test_controller_exports_current_table(tmp_path):
    path = tmp_path / "sesion.xlsx"
    controller = GridController()
    controller.open([["a", "b"], ["c", "d"]], "x")
    controller.set_cell(1, 1, "editado")
    controller.export_excel(str(path))

    ws = openpyxl.load_workbook(path)[SHEET_NAME]
    assert ws["B2"].value == "editado"


def test_export_control_character_raises_service_error(tmp_path):
    with pytest.raises(ExcelServiceError):
        export_xlsx(str(tmp_path / "control.xlsx"), [["h1", "h2"], ["x\x01y", "z"]])


def test_controller_export_of_loaded_control_character(tmp_path):
    csv_path = tmp_path / "control.csv"
    csv_path.write_bytes(b"h1,h2\nx\x01y,z\n")
    controller = GridController()
    controller.open([["a", "b"], ["c", "d"]], "x")
    controller.load(str(csv_path))
    with pytest.raises(ExcelServiceError):
        controller.export_excel(str(tmp_path / "control.xlsx"))
