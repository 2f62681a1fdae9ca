import logging
import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from config.settings import WINDOW_MIN_SIZE, WINDOW_SIZE, GridSettings
from controllers.grid_controller import GridController
from models.grid_model import GridError
from services.csv_service import CSVServiceError
from services.edit_access import column_anchors
from services.excel_service import ExcelServiceError
from ui.table_view import TableView

logger = logging.getLogger(__name__)

CSV_FILETYPES = [("CSV Files", "*.csv"), ("All Files", "*.*")]


def show_grid(table, title="", settings=None, parent=None):
    """
    Muestra la tabla en una ventana modal y devuelve la tabla final
    (encabezados + datos) cuando el usuario sale.
    Lanza NullInputError / InvalidShapeError antes de crear la ventana.
    """
    controller = GridController(settings or GridSettings.from_env())
    controller.open(table, title)
    return GridWindow(controller, parent=parent).run()


class GridWindow:
    def __init__(self, controller: GridController, parent=None):
        self.controller = controller
        self.result = None
        self._owns_root = parent is None

        self.window = tk.Tk() if self._owns_root else tk.Toplevel(parent)
        self.window.title(controller.title)
        self.window.geometry("{}x{}".format(*WINDOW_SIZE))
        self.window.minsize(*WINDOW_MIN_SIZE)
        self.window.protocol("WM_DELETE_WINDOW", self.exit_action)

        self.status_frame = ttk.Frame(self.window, relief=tk.SUNKEN, padding=(5, 2))
        self.status_frame.pack(side="bottom", fill="x")
        self.lbl_status = ttk.Label(self.status_frame, text="Listo", anchor="w")
        self.lbl_status.pack(side="left", fill="x")
        self.progress = ttk.Progressbar(self.status_frame, mode='indeterminate', length=200)

        self.panel = ttk.Frame(self.window, padding=10)
        self.panel.pack(side="bottom", fill="x")
        self.search_var = tk.StringVar()
        self.search_entry = ttk.Entry(self.panel, textvariable=self.search_var, width=30)
        self.search_entry.pack(side="left", padx=(0, 10))
        ttk.Button(self.panel, text="🔍 Buscar", command=self.search_action).pack(side="left")
        ttk.Button(self.panel, text="🚪 Salir", command=self.exit_action).pack(side="right", padx=5)
        ttk.Button(self.panel, text="📊 Exportar Excel", command=self.export_action).pack(side="right", padx=5)
        ttk.Button(self.panel, text="💾 Guardar", command=self.save_action).pack(side="right", padx=5)
        ttk.Button(self.panel, text="📂 Cargar", command=self.load_action).pack(side="right", padx=5)

        self.table = TableView(self.window, on_commit=self.controller.set_cell, on_reject=self._on_reject)
        self.table.pack(fill="both", expand=True, padx=10, pady=(10, 0))

        self.window.bind("<Escape>", self._on_escape)
        self.window.bind("<Return>", self._on_return)

        if not self._owns_root:
            self.window.transient(parent)
            self.window.grab_set()

        self.refresh_table()

    def run(self):
        if self._owns_root:
            self.window.mainloop()
        else:
            self.window.wait_window()
        return self.result

    def run_task(self, description, func):
        self.window.config(cursor="watch")
        self.lbl_status.config(text=f"⏳ {description}...")
        self.progress.pack(side="right", padx=10)
        self.progress.start(10)
        self.window.update()
        try:
            func()
            self.lbl_status.config(text="✅ Listo")
        except (CSVServiceError, ExcelServiceError, GridError) as e:
            logger.error("%s falló: %s", description, e)
            self.lbl_status.config(text="❌ Error")
            messagebox.showerror("Error", f"{description} falló:\n{e}", parent=self.window)
        except Exception as e:
            logger.exception("Error inesperado en %s", description)
            self.lbl_status.config(text="❌ Error")
            messagebox.showerror("Error", f"{description} falló:\n{e}", parent=self.window)
        finally:
            self.progress.stop()
            self.progress.pack_forget()
            self.window.config(cursor="")

    def refresh_table(self):
        data = self.controller.data
        anchors = column_anchors(data.column_count, self.controller.settings.heading_column)
        self.table.update_table(data.columns, data.rows, self.controller.mask, anchors)
        self.window.title(self.controller.title)

    # --- ACCIONES ---
    def load_action(self):
        self.table.commit_edit()
        path = filedialog.askopenfilename(parent=self.window, title="Cargar archivo CSV", filetypes=CSV_FILETYPES)
        if not path: return
        def _load():
            self.controller.load(path)
            self.refresh_table()
        self.run_task("Cargando CSV", _load)

    def save_action(self):
        self.table.commit_edit()
        path = filedialog.asksaveasfilename(parent=self.window, title="Guardar archivo CSV",
                                            defaultextension=".csv", filetypes=CSV_FILETYPES)
        if not path: return
        def _save():
            self.controller.save(path)
            self.window.title(self.controller.title)
        self.run_task("Guardando CSV", _save)

    def export_action(self):
        self.table.commit_edit()
        path = filedialog.asksaveasfilename(parent=self.window, title="Exportar a Excel",
                                            defaultextension=".xlsx", filetypes=[("Excel", "*.xlsx")])
        if not path: return
        self.run_task("Exportando Excel", lambda: self.controller.export_excel(path))

    def search_action(self):
        query = self.search_var.get()
        if not query: return
        hit = self.controller.find_next(query)
        if hit is None:
            self.lbl_status.config(text=f"Sin coincidencias para \"{query}\"")
            messagebox.showinfo("Buscar", f"No se encontró \"{query}\".", parent=self.window)
            return
        row, col = hit
        self.table.select_cell(row, col)
        header = self.controller.data.columns[col]
        self.lbl_status.config(text=f"Coincidencia en fila {row}, columna \"{header}\"")

    def exit_action(self):
        self.table.commit_edit()
        self.result = self.controller.exit()
        if not self._owns_root:
            self.window.grab_release()
        self.window.destroy()

    def _on_reject(self, row, col):
        self.lbl_status.config(text=f"🔒 La columna \"{self.controller.data.columns[col]}\" es de solo lectura")

    def _on_escape(self, event=None):
        if self.table.editing: return
        self.exit_action()

    def _on_return(self, event=None):
        if self.table.editing: return
        self.search_action()
