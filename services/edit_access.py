from typing import List

from models.grid_model import AllEditable, EditMode, SingleColumnEditable


def compute_mask(column_count: int, mode: EditMode) -> List[bool]:
    """Devuelve, por columna, si es editable según el modo de restricción."""
    if column_count < 0:
        raise ValueError(f"Número de columnas inválido: {column_count}")
    if column_count == 0:
        return []

    if isinstance(mode, AllEditable):
        return [True] * column_count

    if isinstance(mode, SingleColumnEditable):
        index = column_count - 1 if mode.index is None else mode.index
        if index < 0:
            raise ValueError(f"Índice de columna inválido: {index}")
        index = min(index, column_count - 1)
        return [c == index for c in range(column_count)]

    raise TypeError(f"Modo de edición desconocido: {mode!r}")


def column_anchors(column_count: int, heading_column: int = -1) -> List[str]:
    # Todo alineado a la derecha salvo la columna de encabezado
    return ["w" if c == heading_column else "e" for c in range(column_count)]
