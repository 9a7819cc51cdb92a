from typing import Iterable, Optional

from errors import ProtectedColumn
from field_kinds import FieldKind


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


class MutationEngine:
    """Structural operations on the row store and column registry.

    Every operation validates before touching state and raises a GridError
    on failure. Before a structural change the active edit is either
    committed, or cancelled when the change removes the edited cell.
    """

    def __init__(self, ctx, view, cell):
        self.ctx = ctx
        self.view = view
        self.cell = cell

    # ---------- edit settlement ----------
    def _settle_edit(self, rows: Iterable[int] = (), field_key: Optional[str] = None):
        session = self.ctx.selection.edit
        if session is None:
            return
        if session.row_id in set(rows) or (field_key is not None and session.field_key == field_key):
            self.ctx.selection.clear()
            return
        self.cell.commit()

    # ---------- row operations ----------
    def insert_row(self, position: Optional[int] = None) -> int:
        self._settle_edit()
        row_id = self.ctx.store.insert_row(position)
        self.ctx._set_status("Inserted row", 2)
        return row_id

    def insert_row_relative(self, row_id: int, above: bool) -> int:
        pos = self.ctx.store.position_of(row_id)
        self._settle_edit()
        new_id = self.ctx.store.insert_row(pos if above else pos + 1)
        self.ctx._set_status(f"Inserted row {'above' if above else 'below'}", 2)
        return new_id

    def delete_row(self, row_id: int) -> bool:
        self._settle_edit(rows=[row_id])
        removed = self.ctx.store.delete_row(row_id)
        if removed:
            self.ctx.selection.forget_rows([row_id])
            self.ctx._set_status(f"Deleted row {row_id}", 2)
        return removed

    def duplicate_row(self, row_id: int) -> int:
        self.ctx.store.position_of(row_id)
        self._settle_edit()
        new_id = self.ctx.store.duplicate_row(row_id)
        self.ctx._set_status(f"Duplicated row {row_id}", 2)
        return new_id

    def clear_row(self, row_id: int) -> bool:
        self.ctx.store.position_of(row_id)
        session = self.ctx.selection.edit
        if session is not None and session.row_id == row_id:
            self.ctx.selection.end_edit()
        else:
            self._settle_edit()
        self.ctx.store.clear_row(row_id)
        self.ctx._set_status(f"Cleared row {row_id}", 2)
        return True

    def clear_cell(self, row_id: int, field_key: str) -> bool:
        self.ctx.store.get_field(row_id, field_key)
        self._settle_edit()
        self.ctx.store.set_field(row_id, field_key, "")
        self.ctx._set_status("Cleared cell", 2)
        return True

    # ---------- column operations ----------
    def add_column(self, label: str, position: Optional[int] = None, kind=FieldKind.TEXT) -> str:
        registry = self.ctx.registry
        registry.check_new_column(label, position)
        kind = FieldKind(kind)
        self._settle_edit()
        key = registry.add_column(label, position, kind)
        self.ctx.store.add_field(key, registry.index_of(key))
        self.ctx._set_status(f"Inserted column '{registry.get(key).label}'", 3)
        return key

    def delete_column(self, field_key: str) -> bool:
        column = self.ctx.registry.get(field_key)
        if column.is_built_in:
            raise ProtectedColumn(field_key, "delete")
        col = self.view.col_of(field_key)
        self._settle_edit(field_key=field_key)
        self.ctx.registry.remove_column(field_key)
        self.ctx.store.drop_field(field_key)
        if col is not None:
            self.ctx.selection.forget_column(col)
        self.ctx._set_status(f"Deleted column '{field_key}'", 3)
        return True

    def clear_column(self, field_key: str) -> bool:
        self.ctx.registry.get(field_key)
        self._settle_edit()
        self.ctx.store.clear_field(field_key)
        self.ctx._set_status(f"Cleared column '{field_key}'", 2)
        return True

    def rename_column(self, field_key: str, label: str) -> bool:
        column = self.ctx.registry.rename_column(field_key, label)
        self.ctx._set_status(f"Renamed column '{field_key}' to '{column.label}'", 3)
        return True

    def resize_column(self, field_key: str, width: int) -> int:
        return self.ctx.registry.resize_column(field_key, width)

    # ---------- batch operations over the multi-selection ----------
    def _selected_rows(self) -> list:
        store = self.ctx.store
        ids = [r for r in self.ctx.selection.selected_row_ids() if r in store]
        return sorted(ids, key=store.position_of)

    def batch_delete(self) -> int:
        row_ids = self._selected_rows()
        removed = self.ctx.store.delete_rows(row_ids)
        self.ctx.selection.clear()
        self.ctx._set_status(f"Deleted {_plural(removed, 'row')}", 2)
        return removed

    def batch_duplicate(self) -> list:
        row_ids = self._selected_rows()
        new_ids = self.ctx.store.duplicate_rows(row_ids)
        self.ctx.selection.clear()
        self.ctx._set_status(f"Duplicated {_plural(len(new_ids), 'row')}", 2)
        return new_ids

    def batch_clear(self) -> int:
        row_ids = self._selected_rows()
        cleared = self.ctx.store.clear_rows(row_ids)
        self.ctx.selection.clear()
        self.ctx._set_status(f"Cleared {_plural(cleared, 'row')}", 2)
        return cleared

    def clear_cells(self, cells) -> int:
        targets = [
            (cell.row_id, self.view.field_at(cell.col))
            for cell in cells
            if cell.row_id in self.ctx.store
        ]
        for row_id, field_key in targets:
            self.ctx.store.set_field(row_id, field_key, "")
        cleared = len(targets)
        self.ctx._set_status(f"Cleared {_plural(cleared, 'cell')}", 2)
        return cleared
