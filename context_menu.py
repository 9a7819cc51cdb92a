from enum import Enum
from typing import Optional

from field_kinds import FieldKind


class ContextMenuAction(str, Enum):
    ADD_ROW_ABOVE = "addRowAbove"
    ADD_ROW_BELOW = "addRowBelow"
    ADD_COLUMN_LEFT = "addColumnLeft"
    ADD_COLUMN_RIGHT = "addColumnRight"
    DELETE_ROW = "deleteRow"
    DELETE_COLUMN = "deleteColumn"
    DUPLICATE_ROW = "duplicateRow"
    CLEAR_CELL = "clearCell"
    CLEAR_ROW = "clearRow"
    CLEAR_COLUMN = "clearColumn"


ROW_ACTIONS = {
    ContextMenuAction.ADD_ROW_ABOVE,
    ContextMenuAction.ADD_ROW_BELOW,
    ContextMenuAction.DELETE_ROW,
    ContextMenuAction.DUPLICATE_ROW,
    ContextMenuAction.CLEAR_CELL,
    ContextMenuAction.CLEAR_ROW,
}

COLUMN_ACTIONS = {
    ContextMenuAction.ADD_COLUMN_LEFT,
    ContextMenuAction.ADD_COLUMN_RIGHT,
    ContextMenuAction.DELETE_COLUMN,
    ContextMenuAction.CLEAR_CELL,
    ContextMenuAction.CLEAR_COLUMN,
}


class ContextMenu:
    """Routes menu actions using the row/column index captured when the menu opened.

    ``row_index`` is a position in the processed view and ``col_index`` a
    visible column index; neither depends on the current selection.
    """

    def __init__(self, ctx, view, mutations):
        self.ctx = ctx
        self.view = view
        self.mutations = mutations

    def dispatch(self, action, row_index: Optional[int] = None, col_index: Optional[int] = None,
                 label: Optional[str] = None, kind=FieldKind.TEXT):
        action = ContextMenuAction(action)
        row_id = self.view.row_id_at(row_index) if action in ROW_ACTIONS else None
        field_key = self.view.field_at(col_index) if action in COLUMN_ACTIONS else None

        if action == ContextMenuAction.ADD_ROW_ABOVE:
            return self.mutations.insert_row_relative(row_id, above=True)
        if action == ContextMenuAction.ADD_ROW_BELOW:
            return self.mutations.insert_row_relative(row_id, above=False)
        if action in (ContextMenuAction.ADD_COLUMN_LEFT, ContextMenuAction.ADD_COLUMN_RIGHT):
            position = self.ctx.registry.index_of(field_key)
            if action == ContextMenuAction.ADD_COLUMN_RIGHT:
                position += 1
            name = label if label and label.strip() else self.ctx.registry.next_auto_label()
            return self.mutations.add_column(name, position, kind)
        if action == ContextMenuAction.DELETE_ROW:
            return self.mutations.delete_row(row_id)
        if action == ContextMenuAction.DELETE_COLUMN:
            return self.mutations.delete_column(field_key)
        if action == ContextMenuAction.DUPLICATE_ROW:
            return self.mutations.duplicate_row(row_id)
        if action == ContextMenuAction.CLEAR_CELL:
            return self.mutations.clear_cell(row_id, field_key)
        if action == ContextMenuAction.CLEAR_ROW:
            return self.mutations.clear_row(row_id)
        return self.mutations.clear_column(field_key)
