from cell_coercion import coerce_cell_value
from errors import GridError
from selection import CellRef


class GridEditorCell:
    """Edit-session lifecycle: begin, draft, commit back to the store, cancel."""

    def __init__(self, ctx, view):
        self.ctx = ctx
        self.view = view

    @property
    def active(self) -> bool:
        return self.ctx.selection.edit is not None

    def begin_edit(self, cell: CellRef) -> bool:
        cell = self.view.require_cell(cell)
        session = self.ctx.selection.edit
        if session is not None:
            if session.cell == cell:
                return True
            self.commit()
        field_key = self.view.field_at(cell.col)
        self.ctx.selection.begin_edit(cell, self.ctx.store.get_field(cell.row_id, field_key), field_key)
        return True

    def update_draft(self, text: str) -> bool:
        return self.ctx.selection.update_draft(text)

    def commit(self) -> bool:
        session = self.ctx.selection.edit
        if session is None:
            return False
        try:
            field_key = session.field_key or self.view.field_at(session.col)
            kind = self.ctx.registry.kind_of(field_key)
        except GridError:
            self.ctx.selection.clear()
            self.ctx._set_status("Edit target no longer exists", 3)
            return False

        try:
            value = coerce_cell_value(kind, session.draft)
        except ValueError:
            label = self.ctx.registry.get(field_key).label
            self.ctx.selection.end_edit()
            self.ctx._set_status(f"Invalid value for column '{label}'", 3)
            return False

        try:
            self.ctx.store.set_field(session.row_id, field_key, value)
        except GridError as exc:
            self.ctx.selection.clear()
            self.ctx._set_status(str(exc), 3)
            return False
        self.ctx.selection.end_edit()
        return True

    def cancel(self) -> bool:
        return self.ctx.selection.end_edit() is not None
