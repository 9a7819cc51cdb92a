import os

import pandas as pd

from cell_coercion import as_text, coerce_cell_value
from default_data_initializer import DefaultDataInitializer
from errors import DuplicateFieldKey
from row_store import ID_COLUMN


class FileTypeHandler:
    """CSV/XLSX bridge: populates a grid through the store API and writes it back out."""

    SUPPORTED = {".csv", ".xlsx"}
    DEFAULT_SHEET_NAME = "Sheet1"

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in self.SUPPORTED:
            raise ValueError("Unsupported file type (use .csv or .xlsx)")

    # ---------- read ----------
    def read_frame(self) -> pd.DataFrame:
        if not os.path.exists(self.path) or os.path.getsize(self.path) == 0:
            return pd.DataFrame()
        if self.ext == ".csv":
            try:
                return pd.read_csv(self.path, dtype=str, keep_default_na=False)
            except pd.errors.EmptyDataError:
                return pd.DataFrame()
        self._ensure_excel_engine()
        return pd.read_excel(self.path, sheet_name=0, dtype=str).fillna("")

    def load_into(self, editor) -> int:
        """Append every record of the file to ``editor``; returns the row count added."""
        frame = self.read_frame()
        if frame.empty:
            return 0
        mapping = {}
        for header in frame.columns:
            if str(header).strip().lower() == ID_COLUMN:
                continue
            key = self._resolve_field(editor.registry, header)
            if key is None:
                try:
                    key = editor.mutations.add_column(str(header))
                except (DuplicateFieldKey, ValueError):
                    continue
            mapping[header] = key

        store = editor.store
        kinds = editor.registry.kinds()
        for record in frame.to_dict("records"):
            store.insert_row(
                values={mapping[h]: self._coerce(kinds[mapping[h]], v) for h, v in record.items() if h in mapping}
            )
        editor.ctx._set_status(f"Loaded {len(frame)} row{'s' if len(frame) != 1 else ''}", 2)
        return len(frame)

    def load_or_create(self, editor) -> int:
        """Load the file, or seed the sample sheet when it is missing or empty."""
        loaded = self.load_into(editor)
        if loaded:
            return loaded
        DefaultDataInitializer().populate(editor.store)
        editor.ctx._set_status("New file: loaded sample data", 2)
        return len(editor.store)

    # ---------- write ----------
    def export_frame(self, registry, store) -> pd.DataFrame:
        keys = registry.keys()
        labels = {c.field_key: c.label for c in registry.columns}
        return store.df[keys].rename(columns=labels)

    def save(self, registry, store) -> None:
        frame = self.export_frame(registry, store)
        if self.ext == ".csv":
            frame.to_csv(self.path, index=False)
            return
        self._ensure_excel_engine()
        with pd.ExcelWriter(self.path) as writer:
            frame.to_excel(writer, index=False, sheet_name=self.DEFAULT_SHEET_NAME)

    # ---------- internals ----------
    @staticmethod
    def _coerce(kind, value):
        text = as_text(value)
        try:
            return coerce_cell_value(kind, text)
        except ValueError:
            return text

    @staticmethod
    def _resolve_field(registry, header):
        text = str(header).strip()
        for column in registry.columns:
            if text == column.field_key or text.lower() == column.label.lower():
                return column.field_key
        return None

    def _ensure_excel_engine(self):
        try:
            import openpyxl  # noqa: F401

            return
        except ImportError:
            pass
        raise ImportError("XLSX support requires openpyxl. Install via: pip install openpyxl")
