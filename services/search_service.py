from typing import Sequence, Tuple

from models.grid_model import SearchCursor


def find_next(table: Sequence[Sequence[str]], query: str, cursor: SearchCursor) -> Tuple[SearchCursor, bool]:
    """
    Busca `query` (sin distinguir mayúsculas) en las filas de datos, recorriendo
    fila por fila. Si la búsqueda repite el texto anterior, continúa desde la
    celda siguiente al último hallazgo y da la vuelta al llegar al final.
    Las filas devueltas usan índices de la tabla (la fila 0 es el encabezado).
    """
    if not query:
        return cursor, False

    data_rows = len(table) - 1 if table else 0
    cols = len(table[0]) if table else 0
    total = data_rows * cols
    if total <= 0:
        return SearchCursor(last_query=query), False

    start = 0
    if query == cursor.last_query and cursor.has_match:
        start = ((cursor.last_row - 1) * cols + cursor.last_col + 1) % total

    needle = query.lower()
    for step in range(total):
        idx = (start + step) % total
        r, c = divmod(idx, cols)
        if needle in (table[r + 1][c] or "").lower():
            return SearchCursor(r + 1, c, query), True

    return SearchCursor(last_query=query), False
