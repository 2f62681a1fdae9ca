"""Configuración de Griddle leída desde variables de entorno."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

APP_TITLE = "Griddle: "
WINDOW_SIZE = (800, 500)
WINDOW_MIN_SIZE = (600, 400)

LAST_COL_ONLY_ENV_VAR = "GRIDDLE_LAST_COL_ONLY"
HEADING_COL_ENV_VAR = "GRIDDLE_HEADING_COL"
LOG_LEVEL_ENV_VAR = "GRIDDLE_LOG_LEVEL"


def _env_flag(name: str, *, default: bool = False) -> bool:
    """Devuelve un booleano del entorno con parseo tolerante."""
    raw = os.getenv(name)
    if raw is None:
        return default

    normalized = raw.strip().lower()
    if not normalized:
        return default
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False

    try:
        return bool(int(normalized))
    except ValueError:
        return default


def _env_int(name: str, *, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_log_level(name: str, *, default: str) -> str:
    raw = (os.getenv(name) or "").strip().upper()
    # getLevelName devuelve un entero solo para niveles registrados
    if raw and isinstance(logging.getLevelName(raw), int):
        return raw
    return default


@dataclass(frozen=True)
class GridSettings:
    last_column_only_editable: bool = False
    heading_column: int = -1  # -1 desactiva la columna de encabezado
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "GridSettings":
        return cls(
            last_column_only_editable=_env_flag(LAST_COL_ONLY_ENV_VAR, default=False),
            heading_column=_env_int(HEADING_COL_ENV_VAR, default=-1),
            log_level=_env_log_level(LOG_LEVEL_ENV_VAR, default="INFO"),
        )
