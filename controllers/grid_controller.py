import logging
import os
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from config.settings import APP_TITLE, GridSettings
from models.grid_model import (
    AccessViolationError, AllEditable, EditMode, GridData, InvalidShapeError,
    NullInputError, SearchCursor, SessionClosedError, SingleColumnEditable, Table,
)
from services import csv_service, excel_service
from services.edit_access import compute_mask
from services.search_service import find_next

logger = logging.getLogger(__name__)


class SessionState(Enum):
    OPENING = "opening"
    EDITING = "editing"
    EXITED = "exited"


def validate_table(table: Optional[Sequence[Sequence[str]]]):
    if table is None:
        raise NullInputError("La tabla de entrada es None.")
    rows = len(table)
    cols = len(table[0]) if rows else 0
    if rows < 2 or cols < 2:
        raise InvalidShapeError(
            f"Se requieren al menos 2 filas (encabezado + datos) y 2 columnas; recibido {rows}x{cols}."
        )
    if any(len(r) != cols for r in table):
        raise InvalidShapeError("Todas las filas deben tener el mismo número de columnas.")


class GridController:
    """
    Sesión de edición: dueña de una copia de la tabla, de la máscara de
    columnas editables y del cursor de búsqueda. Open -> Editing -> Exited.
    """
    def __init__(self, settings: Optional[GridSettings] = None):
        self.settings = settings or GridSettings()
        self.state = SessionState.OPENING
        self.data = GridData()
        self.mask: List[bool] = []
        self.cursor = SearchCursor()
        self.title = APP_TITLE

    @property
    def edit_mode(self) -> EditMode:
        if self.settings.last_column_only_editable:
            return SingleColumnEditable()
        return AllEditable()

    @property
    def column_count(self) -> int:
        return self.data.column_count

    @property
    def row_count(self) -> int:
        return self.data.row_count

    # --- CICLO DE VIDA ---
    def open(self, initial_table: Optional[Sequence[Sequence[str]]], title: str = ""):
        if self.state is not SessionState.OPENING:
            raise SessionClosedError("La sesión ya fue abierta.")
        validate_table(initial_table)
        self.data = GridData.from_table(initial_table)
        self._refresh_mask()
        self.title = APP_TITLE + (title or "")
        self.state = SessionState.EDITING
        logger.info("Sesión abierta: %dx%d, modo %s", self.row_count, self.column_count, self.edit_mode)

    def exit(self) -> Table:
        self._ensure_editing()
        snapshot = self.data.to_table()
        self.state = SessionState.EXITED
        logger.info("Sesión cerrada: %dx%d", len(snapshot), self.column_count)
        return snapshot

    # --- ARCHIVOS ---
    def load(self, path: str) -> Table:
        self._ensure_editing()
        table = csv_service.read_csv(path)
        validate_table(table)
        # Solo se reemplaza la tabla si la lectura fue válida
        self.data = GridData.from_table(table)
        self._refresh_mask()
        self.cursor = SearchCursor()
        self.title = APP_TITLE + os.path.basename(path)
        return table

    def save(self, path: str):
        self._ensure_editing()
        csv_service.write_csv(path, self.data.to_table())
        self.title = APP_TITLE + os.path.basename(path)

    def export_excel(self, path: str):
        self._ensure_editing()
        excel_service.export_xlsx(path, self.data.to_table())

    # --- CELDAS ---
    def is_editable(self, col: int) -> bool:
        return 0 <= col < len(self.mask) and self.mask[col]

    def get_cell(self, row: int, col: int) -> str:
        self._ensure_editing()
        return self.data.get(row, col)

    def set_cell(self, row: int, col: int, value: str) -> bool:
        self._ensure_editing()
        self.data.get(row, col)  # valida rango
        try:
            self._check_access(row, col)
        except AccessViolationError as e:
            logger.warning("Edición rechazada: %s", e)
            return False
        self.data.set(row, col, "" if value is None else str(value))
        return True

    def _check_access(self, row: int, col: int):
        if row == 0:
            raise AccessViolationError(f"La fila de encabezados no es editable (columna {col}).")
        if not self.is_editable(col):
            raise AccessViolationError(f"La columna {col} es de solo lectura.")

    # --- BÚSQUEDA ---
    def find_next(self, query: str) -> Optional[Tuple[int, int]]:
        self._ensure_editing()
        self.cursor, found = find_next(self.data.to_table(), query, self.cursor)
        if not found:
            return None
        return self.cursor.last_row, self.cursor.last_col

    def _refresh_mask(self):
        self.mask = compute_mask(self.column_count, self.edit_mode)

    def _ensure_editing(self):
        if self.state is not SessionState.EDITING:
            raise SessionClosedError(f"La sesión no admite eventos en estado '{self.state.value}'.")
