"""Tests for controllers.grid_controller."""

import pytest

from config.settings import GridSettings
from controllers.grid_controller import GridController, SessionState
from models.grid_model import InvalidShapeError, NullInputError, SessionClosedError
from services.csv_service import NotFoundError

TABLE = [
    ["Item", "Cantidad", "Precio"],
    ["Tornillo", "10", "0.5"],
    ["Tuerca", "20", "0.2"],
]


def _open(table=TABLE, last_col_only=False, title="Inventario"):
    controller = GridController(GridSettings(last_column_only_editable=last_col_only))
    controller.open(table, title)
    return controller


def test_open_then_exit_returns_equal_table():
    controller = _open()
    assert controller.exit() == TABLE
    assert controller.state is SessionState.EXITED


def test_open_copies_input():
    table = [row[:] for row in TABLE]
    controller = _open(table)
    controller.set_cell(1, 0, "Arandela")
    assert table == TABLE
    assert controller.exit()[1][0] == "Arandela"


def test_open_none_raises_null_input():
    with pytest.raises(NullInputError):
        GridController().open(None, "x")


@pytest.mark.parametrize("table", [
    [["a"]],
    [["a", "b"]],
    [["a"], ["b"]],
    [],
])
def test_open_small_table_raises_invalid_shape(table):
    with pytest.raises(InvalidShapeError):
        GridController().open(table, "x")


def test_open_ragged_table_raises_invalid_shape():
    with pytest.raises(InvalidShapeError):
        GridController().open([["a", "b"], ["c"]], "x")


def test_title_prefix():
    assert _open().title == "Griddle: Inventario"


def test_default_mask_all_editable():
    assert _open().mask == [True, True, True]


def test_last_column_only_mask():
    assert _open(last_col_only=True).mask == [False, False, True]


def test_read_only_edit_is_rejected():
    controller = _open(last_col_only=True)
    assert controller.set_cell(1, 0, "Clavo") is False
    assert controller.set_cell(2, 2, "0.3") is True
    snapshot = controller.exit()
    assert snapshot[1][0] == "Tornillo"
    assert snapshot[2][2] == "0.3"


def test_header_row_is_not_editable():
    controller = _open()
    assert controller.set_cell(0, 1, "Qty") is False
    assert controller.get_cell(0, 1) == "Cantidad"


def test_out_of_range_cell_raises():
    controller = _open()
    with pytest.raises(IndexError):
        controller.set_cell(5, 0, "x")
    with pytest.raises(IndexError):
        controller.get_cell(1, 3)


def test_load_replaces_table_and_recomputes_mask(tmp_path):
    path = tmp_path / "nuevo.csv"
    path.write_text("a,b\nc,d,e\n", encoding="utf-8")
    controller = _open(last_col_only=True)
    controller.load(str(path))
    assert controller.mask == [False, False, True]
    assert controller.title == "Griddle: nuevo.csv"
    assert controller.exit() == [["a", "b", ""], ["c", "d", "e"]]


def test_load_missing_file_keeps_table(tmp_path):
    controller = _open()
    with pytest.raises(NotFoundError):
        controller.load(str(tmp_path / "missing.csv"))
    assert controller.state is SessionState.EDITING
    assert controller.title == "Griddle: Inventario"
    assert controller.exit() == TABLE


def test_load_header_only_is_rejected(tmp_path):
    path = tmp_path / "solo_encabezado.csv"
    path.write_text("a,b,c\n", encoding="utf-8")
    controller = _open()
    with pytest.raises(InvalidShapeError):
        controller.load(str(path))
    assert controller.exit() == TABLE


def test_load_resets_search_cursor(tmp_path):
    path = tmp_path / "otro.csv"
    path.write_text("x,y\nTornillo,1\n", encoding="utf-8")
    controller = _open()
    assert controller.find_next("tornillo") == (1, 0)
    controller.load(str(path))
    assert controller.cursor.last_query == ""
    assert controller.find_next("tornillo") == (1, 0)


def test_save_writes_current_table(tmp_path):
    path = tmp_path / "salida.csv"
    controller = _open()
    controller.set_cell(1, 1, "15")
    controller.save(str(path))
    assert controller.title == "Griddle: salida.csv"
    content = path.read_text(encoding="utf-8").splitlines()
    assert content[0] == '"Item","Cantidad","Precio"'
    assert content[1] == '"Tornillo","15","0.5"'


def test_save_failure_keeps_session(tmp_path):
    controller = _open()
    with pytest.raises(NotFoundError):
        controller.save(str(tmp_path / "no_existe" / "salida.csv"))
    assert controller.state is SessionState.EDITING
    assert controller.title == "Griddle: Inventario"


def test_find_next_cycles_through_matches():
    controller = _open()
    assert controller.find_next("tu") == (2, 0)
    assert controller.find_next("0.") == (1, 2)
    assert controller.find_next("0.") == (2, 2)
    assert controller.find_next("0.") == (1, 2)
    assert controller.find_next("nada") is None


def test_events_after_exit_raise():
    controller = _open()
    controller.exit()
    with pytest.raises(SessionClosedError):
        controller.exit()
    with pytest.raises(SessionClosedError):
        controller.set_cell(1, 0, "x")
    with pytest.raises(SessionClosedError):
        controller.find_next("a")


def test_open_twice_raises():
    controller = _open()
    with pytest.raises(SessionClosedError):
        controller.open(TABLE, "otra")
