from selection import CellRef, SelectionMode


class NavigationController:
    """Arrow/Tab movement of the single selection across the processed view.

    Moving below the last row appends a row; if an active filter hides the new
    row the selection stays put. Moving right of the last visible column
    appends a custom column. Moving above/left of the first clamps.
    """

    def __init__(self, ctx, view, mutations):
        self.ctx = ctx
        self.view = view
        self.mutations = mutations

    def _current(self):
        selection = self.ctx.selection
        if selection.mode != SelectionMode.SINGLE:
            return None
        return selection.cell

    def move_up(self) -> bool:
        cell = self._current()
        if cell is None:
            return False
        ids = self.view.view_row_ids()
        if cell.row_id not in ids:
            return False
        pos = ids.index(cell.row_id)
        if pos == 0:
            return False
        self.ctx.selection.select(CellRef(ids[pos - 1], cell.col))
        return True

    def move_down(self) -> bool:
        cell = self._current()
        if cell is None:
            return False
        ids = self.view.view_row_ids()
        if cell.row_id not in ids:
            return False
        pos = ids.index(cell.row_id)
        if pos + 1 < len(ids):
            target = ids[pos + 1]
        else:
            target = self.mutations.insert_row()
            if target not in self.view.view_row_ids():
                # the blank row fails the active filter; stay on a visible row
                self.ctx._set_status(f"Inserted row {target} is hidden by the filter", 3)
                return False
        self.ctx.selection.select(CellRef(target, cell.col))
        return True

    def move_left(self) -> bool:
        cell = self._current()
        if cell is None or cell.col <= 0:
            return False
        self.ctx.selection.select(CellRef(cell.row_id, cell.col - 1))
        return True

    def move_right(self) -> bool:
        cell = self._current()
        if cell is None:
            return False
        total_cols = len(self.view.visible_fields())
        if cell.col + 1 < total_cols:
            self.ctx.selection.select(CellRef(cell.row_id, cell.col + 1))
            return True
        key = self.mutations.add_column(self.ctx.registry.next_auto_label())
        new_col = self.view.col_of(key)
        if new_col is None:
            return False
        self.ctx.selection.select(CellRef(cell.row_id, new_col))
        return True

    def move(self, direction: str) -> bool:
        handlers = {
            "up": self.move_up,
            "down": self.move_down,
            "left": self.move_left,
            "right": self.move_right,
        }
        handler = handlers.get(direction)
        return handler() if handler else False
