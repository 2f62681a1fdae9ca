import tkinter as tk
from tkinter import ttk

class TableView(ttk.Frame):
    """
    Grilla editable sobre un Treeview. Las celdas de columnas editables se
    editan con doble clic; el valor se confirma al perder el foco o con Enter.
    on_commit recibe (row, col, value) y devuelve True si la edición se aceptó.
    on_reject recibe (row, col) cuando se intenta editar una columna de solo lectura.
    """

    def __init__(self, parent, on_commit=None, on_reject=None, *args, **kwargs):
        super().__init__(parent, *args, **kwargs)
        self.on_commit = on_commit
        self.on_reject = on_reject
        tree_frame = ttk.Frame(self)
        tree_frame.pack(fill="both", expand=True)
        self._tree = ttk.Treeview(tree_frame, show="headings", selectmode="browse")
        self._tree.pack(side="left", fill="both", expand=True)
        self._scroll_y = ttk.Scrollbar(tree_frame, orient="vertical", command=self._tree.yview)
        self._scroll_y.pack(side="right", fill="y")
        self._tree.configure(yscrollcommand=self._scroll_y.set)
        self._scroll_x = ttk.Scrollbar(self, orient="horizontal", command=self._tree.xview)
        self._scroll_x.pack(side="bottom", fill="x")
        self._tree.configure(xscrollcommand=self._scroll_x.set)
        self._tree.bind("<Double-1>", self._on_double_click)
        self._mask = []
        self._editor = None

    @property
    def editing(self):
        return self._editor is not None

    def clear(self):
        self.cancel_edit()
        for r in self._tree.get_children(): self._tree.delete(r)
        self._tree["columns"] = ()

    def update_table(self, columns, rows, mask, anchors):
        self.clear()
        self._mask = list(mask)
        col_ids = tuple(f"c{i}" for i in range(len(columns)))
        self._tree["columns"] = col_ids
        for col_id, header, anchor in zip(col_ids, columns, anchors):
            self._tree.heading(col_id, text=header)
            self._tree.column(col_id, anchor=anchor, width=120, stretch=True)
        # El iid de cada fila es su índice en la tabla (la fila 0 es el encabezado)
        for r, row in enumerate(rows, start=1):
            safe = ["" if v is None else str(v) for v in row]
            self._tree.insert("", "end", iid=str(r), values=tuple(safe))

    def select_cell(self, row, col):
        iid = str(row)
        if not self._tree.exists(iid): return
        self._tree.selection_set(iid)
        self._tree.focus(iid)
        self._tree.see(iid)
        self._tree.xview_moveto(col / max(len(self._mask), 1))

    # --- EDICIÓN EN LÍNEA ---
    def _on_double_click(self, event):
        if self._tree.identify("region", event.x, event.y) != "cell": return
        row_id = self._tree.identify_row(event.y)
        column = self._tree.identify_column(event.x)
        if not row_id or not column: return
        col = int(column[1:]) - 1
        if not (0 <= col < len(self._mask)) or not self._mask[col]:
            if self.on_reject: self.on_reject(int(row_id), col)
            return
        self.begin_edit(row_id, col)

    def begin_edit(self, row_id, col):
        column = f"#{col + 1}"
        bbox = self._tree.bbox(row_id, column)
        if not bbox: return
        self.commit_edit()
        entry = ttk.Entry(self._tree)
        entry.insert(0, self._tree.set(row_id, f"c{col}"))
        entry.select_range(0, "end")
        x, y, width, height = bbox
        entry.place(x=x, y=y, width=width, height=height)
        entry.focus_set()
        self._editor = (entry, row_id, col)

        def _commit(event=None):
            self.commit_edit()
            return "break"

        def _cancel(event=None):
            self.cancel_edit()
            return "break"

        entry.bind("<Return>", _commit)
        entry.bind("<KP_Enter>", _commit)
        entry.bind("<FocusOut>", _commit)
        entry.bind("<Escape>", _cancel)

    def commit_edit(self):
        if self._editor is None: return
        entry, row_id, col = self._editor
        self._editor = None
        value = entry.get()
        accepted = self.on_commit(int(row_id), col, value) if self.on_commit else True
        if accepted:
            self._tree.set(row_id, f"c{col}", value)
        entry.destroy()
        self._tree.focus_set()

    def cancel_edit(self):
        if self._editor is None: return
        entry = self._editor[0]
        self._editor = None
        entry.destroy()
        self._tree.focus_set()
