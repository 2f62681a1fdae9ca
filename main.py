import argparse
import logging

from dotenv import load_dotenv

from config.settings import GridSettings
from services.csv_service import read_csv
from ui.grid_window import show_grid

# Tabla de ejemplo cuando no se indica un CSV
PLACEHOLDER_TABLE = [
    ["Heading1", "Heading2", "Heading 3"],
    ["", "", ""],
    ["", "", ""],
    ["", "", ""],
]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Griddle: editor de tablas en una ventana modal.")
    parser.add_argument("csv_path", nargs="?", help="Archivo CSV a abrir (primera fila = encabezados)")
    args = parser.parse_args(argv)

    load_dotenv()
    settings = GridSettings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    table = read_csv(args.csv_path) if args.csv_path else PLACEHOLDER_TABLE
    result = show_grid(table, "", settings=settings)
    logging.getLogger(__name__).info("Tabla devuelta: %d filas", len(result or []))
    return result


if __name__ == "__main__":
    main()
