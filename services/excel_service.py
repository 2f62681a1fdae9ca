import logging
from typing import Sequence

import pandas as pd
from openpyxl.utils.exceptions import IllegalCharacterError

logger = logging.getLogger(__name__)

SHEET_NAME = 'Griddle'


class ExcelServiceError(Exception):
    pass


def export_xlsx(filename: str, table: Sequence[Sequence[str]]):
    if not table:
        raise ExcelServiceError("No hay datos para exportar.")

    df = pd.DataFrame([list(r) for r in table[1:]], columns=list(table[0]), dtype=str)

    try:
        with pd.ExcelWriter(filename, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name=SHEET_NAME, index=False)

            # Ajustar ancho de columnas al contenido
            sheet = writer.sheets[SHEET_NAME]
            for column in sheet.columns:
                cells = [cell for cell in column]
                max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in cells)
                sheet.column_dimensions[cells[0].column_letter].width = max_length + 2
    except OSError as e:
        raise ExcelServiceError(f"Error al exportar Excel: {e}") from e
    except (IllegalCharacterError, ValueError) as e:
        # openpyxl rechaza caracteres de control en las celdas
        raise ExcelServiceError(f"Contenido no válido para Excel: {e}") from e

    logger.info("Excel exportado: %s (%d filas de datos)", filename, len(df))
