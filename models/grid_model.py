from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

Table = List[List[str]]


class GridError(Exception):
    pass

class NullInputError(GridError):
    pass

class InvalidShapeError(GridError):
    pass

class AccessViolationError(GridError):
    pass

class SessionClosedError(GridError):
    pass


class GridData:
    """
    Tabla en memoria:
      - columns: fila de encabezados (fila 0 de la tabla)
      - rows: filas de datos, todas con el mismo largo que columns
    """
    def __init__(self, columns=None, rows=None):
        self.columns: List[str] = list(columns or [])
        self.rows: List[List[str]] = [list(r) for r in (rows or [])]

    @classmethod
    def from_table(cls, table: Sequence[Sequence[str]]) -> "GridData":
        if not table:
            return cls()
        return cls(columns=table[0], rows=table[1:])

    def to_table(self) -> Table:
        return [list(self.columns)] + [list(r) for r in self.rows]

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def row_count(self) -> int:
        # incluye la fila de encabezados
        return len(self.rows) + 1 if self.columns else 0

    def get(self, row: int, col: int) -> str:
        self._check_bounds(row, col)
        if row == 0:
            return self.columns[col]
        return self.rows[row - 1][col]

    def set(self, row: int, col: int, value: str):
        self._check_bounds(row, col)
        if row == 0:
            self.columns[col] = value
        else:
            self.rows[row - 1][col] = value

    def _check_bounds(self, row: int, col: int):
        if not (0 <= row < self.row_count) or not (0 <= col < self.column_count):
            raise IndexError(f"Celda fuera de rango: ({row}, {col}) en tabla {self.row_count}x{self.column_count}")


@dataclass(frozen=True)
class AllEditable:
    pass


@dataclass(frozen=True)
class SingleColumnEditable:
    index: Optional[int] = None  # None = última columna


EditMode = Union[AllEditable, SingleColumnEditable]


@dataclass(frozen=True)
class SearchCursor:
    last_row: int = -1
    last_col: int = -1
    last_query: str = ""

    @property
    def has_match(self) -> bool:
        return self.last_row != -1 and self.last_col != -1
