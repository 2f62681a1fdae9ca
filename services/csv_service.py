import logging
import os
import shutil
import tempfile
from typing import List, Sequence

from models.grid_model import Table

logger = logging.getLogger(__name__)

ENCODINGS = ['utf-8-sig', 'utf-8', 'cp1252', 'latin-1']
DELIMITER = ','
QUOTE = '"'


class CSVServiceError(Exception):
    pass

class NotFoundError(CSVServiceError):
    pass

class CSVIOError(CSVServiceError):
    pass


def read_csv(path: str) -> Table:
    """
    Lector simple de CSV:
    - Separa cada línea por comas, sin soporte de comillas ni escapes.
    - Quita una capa de comillas dobles por campo y convierte "" en ".
    - Rellena con "" las filas cortas hasta el máximo de columnas encontrado.
    """
    if not os.path.isfile(path):
        raise NotFoundError(f"Archivo CSV no encontrado: {path}")

    lines = _read_lines(path)

    parsed: List[List[str]] = []
    max_columns = 0
    for line in lines:
        fields = [_unquote(f) for f in line.split(DELIMITER)]
        parsed.append(fields)
        if len(fields) > max_columns:
            max_columns = len(fields)

    # Normalizar forma: todas las filas al ancho máximo
    table = [fields + [""] * (max_columns - len(fields)) for fields in parsed]
    logger.info("CSV leído: %s (%d filas x %d columnas)", path, len(table), max_columns)
    return table


def write_csv(path: str, table: Sequence[Sequence[str]]):
    """Escribe la tabla (encabezados primero) con cada campo entre comillas dobles."""
    # Se escribe en un temporal junto al destino para no dejar el archivo truncado
    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".griddle-", suffix=".tmp", dir=directory)
    except FileNotFoundError as e:
        raise NotFoundError(f"Ruta no encontrada: {path}") from e
    except OSError as e:
        raise CSVIOError(f"Error de escritura: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            for row in table:
                f.write(DELIMITER.join(_quote(v) for v in row))
                f.write("\n")
        if os.path.isfile(path):
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except OSError as e:
        _discard(tmp_path)
        raise CSVIOError(f"Error de escritura: {e}") from e
    except Exception:
        _discard(tmp_path)
        raise
    logger.info("CSV guardado: %s (%d filas)", path, len(table))


def _read_lines(path: str) -> List[str]:
    # Intentar leer con diferentes codificaciones
    for enc in ENCODINGS:
        try:
            with open(path, "r", encoding=enc) as f:
                return [line[:-1] if line.endswith("\n") else line for line in f]
        except UnicodeDecodeError:
            continue
        except FileNotFoundError as e:
            raise NotFoundError(f"Archivo CSV no encontrado: {path}") from e
        except OSError as e:
            raise CSVIOError(f"Error de lectura: {e}") from e
    raise CSVIOError(f"No se pudo decodificar el archivo: {path}")


def _discard(tmp_path: str):
    try:
        os.unlink(tmp_path)
    except FileNotFoundError:
        pass


def _unquote(field: str) -> str:
    if len(field) >= 2 and field.startswith(QUOTE) and field.endswith(QUOTE):
        field = field[1:-1]
    return field.replace(QUOTE * 2, QUOTE)


def _quote(value) -> str:
    text = "" if value is None else str(value)
    return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
