from typing import Optional

from column_registry import ColumnRegistry
from config_paths import load_config
from context_menu import ContextMenu
from errors import GridError
from field_kinds import FieldKind
from grid_editor_cell import GridEditorCell
from grid_editor_context import GridEditorContext
from grid_view import GridView
from mutation_engine import MutationEngine
from navigation import NavigationController
from row_store import RowStore
from selection import CellRef, SelectionMode, SelectionState
from view_spec import ViewSpec

ARROW_DIRECTIONS = {
    "ArrowUp": "up",
    "ArrowDown": "down",
    "ArrowLeft": "left",
    "ArrowRight": "right",
}


class GridEditor:
    """Handles grid selection/edit state, key interactions and mutations."""

    def __init__(self, registry=None, store=None, set_status_cb=None, config=None):
        config = config if config is not None else load_config()
        if registry is None:
            registry = ColumnRegistry(config["DEFAULT_COLUMN_WIDTH"], config["MIN_COLUMN_WIDTH"])
        if store is None:
            store = RowStore(registry)
        self.ctx = GridEditorContext(
            registry=registry,
            store=store,
            selection=SelectionState(),
            _set_status=set_status_cb or (lambda *_: None),
            config=config,
            view_spec=ViewSpec(view_mode=config.get("DEFAULT_VIEW_MODE", "normal")),
        )
        self.view = GridView(self.ctx)
        self.cell = GridEditorCell(self.ctx, self.view)
        self.mutations = MutationEngine(self.ctx, self.view, self.cell)
        self.nav = NavigationController(self.ctx, self.view, self.mutations)
        self.menu = ContextMenu(self.ctx, self.view, self.mutations)

    # ---------- accessors ----------
    @property
    def registry(self):
        return self.ctx.registry

    @property
    def store(self):
        return self.ctx.store

    @property
    def selection(self):
        return self.ctx.selection

    @property
    def mode(self) -> SelectionMode:
        return self.ctx.selection.mode

    @property
    def view_spec(self) -> ViewSpec:
        return self.ctx.view_spec

    def set_view_spec(self, spec: ViewSpec):
        """Swap the caller's view spec, keeping selection on the same fields."""
        old_fields = self.view.visible_fields()
        session = self.ctx.selection.edit
        if session is not None and session.field_key in spec.hidden_fields:
            self.cell.commit()
        self.ctx.view_spec = spec
        new_fields = self.view.visible_fields()
        if new_fields != old_fields:
            self.ctx.selection.remap_columns(
                {i: new_fields.index(k) if k in new_fields else None for i, k in enumerate(old_fields)}
            )

    def render(self, spec: Optional[ViewSpec] = None):
        if spec is not None:
            self.set_view_spec(spec)
        return self.view.project()

    # ---------- helpers ----------
    def _run(self, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (GridError, ValueError) as exc:
            self.ctx._set_status(str(exc), 3)
            return None

    def _modifiers(self, ctrl, meta, shift, alt):
        pressed = {"ctrl": ctrl, "meta": meta, "shift": shift, "alt": alt}
        multi = pressed.get(self.ctx.config.get("MULTI_SELECT_MODIFIER", "ctrl"), False)
        row_delete = pressed.get(self.ctx.config.get("ROW_DELETE_MODIFIER", "shift"), False)
        return multi, row_delete

    def _clear_selected_cell(self, cell: CellRef) -> bool:
        return self.mutations.clear_cell(cell.row_id, self.view.field_at(cell.col))

    # ---------- pointer commands ----------
    def click(self, row_id: int, col: int, modifier: bool = False) -> bool:
        try:
            cell = self.view.require_cell(CellRef(row_id, col))
        except GridError as exc:
            self.ctx._set_status(str(exc), 3)
            return False
        if self.cell.active:
            self.cell.commit()
        if modifier:
            self.ctx.selection.toggle(cell)
        else:
            self.ctx.selection.select(cell)
        return True

    def double_click(self, row_id: int, col: int) -> bool:
        return bool(self._run(self.cell.begin_edit, CellRef(row_id, col)))

    # ---------- edit session ----------
    def begin_edit(self, row_id: int, col: int) -> bool:
        return self.double_click(row_id, col)

    def update_draft(self, text: str) -> bool:
        return self.cell.update_draft(text)

    def commit_edit(self) -> bool:
        return self.cell.commit()

    def cancel_edit(self) -> bool:
        return self.cell.cancel()

    def select_all(self) -> int:
        if self.cell.active:
            self.cell.commit()
        ids = self.view.view_row_ids()
        total_cols = len(self.view.visible_fields())
        cells = [CellRef(r, c) for r in ids for c in range(total_cols)]
        self.ctx.selection.select_many(cells)
        self.ctx._set_status(f"Selected {len(cells)} cells", 2)
        return len(cells)

    # ---------- keyboard ----------
    def handle_key(self, key: str, ctrl=False, meta=False, shift=False, alt=False) -> bool:
        """Process a key event not captured by a text input. Returns True if handled."""
        multi_mod, row_delete_mod = self._modifiers(ctrl, meta, shift, alt)
        mode = self.ctx.selection.mode

        if mode == SelectionMode.EDITING:
            if key in ("Enter", "Tab"):
                self.cell.commit()
                return True
            if key == "Escape":
                self.cell.cancel()
                return True
            return False

        if multi_mod and key.lower() == "a":
            self.select_all()
            return True

        if key == "Escape":
            if mode == SelectionMode.IDLE:
                return False
            self.ctx.selection.clear()
            return True

        if key in ("Delete", "Backspace"):
            if mode == SelectionMode.SINGLE:
                cell = self.ctx.selection.cell
                if row_delete_mod:
                    self._run(self.mutations.delete_row, cell.row_id)
                    self.ctx.selection.clear()
                else:
                    self._run(self._clear_selected_cell, cell)
                return True
            if mode == SelectionMode.MULTI:
                if row_delete_mod:
                    self._run(self.mutations.batch_delete)
                else:
                    self._run(self.mutations.clear_cells, sorted(self.ctx.selection.multi))
                return True
            return False

        if mode != SelectionMode.SINGLE:
            return False

        if key in ARROW_DIRECTIONS:
            self._run(self.nav.move, ARROW_DIRECTIONS[key])
            return True

        if key == "Tab":
            self._run(self.nav.move, "left" if shift else "right")
            return True

        if key == "Enter":
            cell = self.ctx.selection.cell
            self._run(self.cell.begin_edit, cell)
            return True

        return False

    # ---------- row commands ----------
    def add_row(self, position: Optional[int] = None):
        return self._run(self.mutations.insert_row, position)

    def delete_row(self, row_id: int) -> bool:
        return bool(self._run(self.mutations.delete_row, row_id))

    def duplicate_row(self, row_id: int):
        return self._run(self.mutations.duplicate_row, row_id)

    def clear_row(self, row_id: int) -> bool:
        return bool(self._run(self.mutations.clear_row, row_id))

    # ---------- column commands ----------
    def add_column(self, label: str, position: Optional[int] = None, kind=FieldKind.TEXT):
        return self._run(self.mutations.add_column, label, position, kind)

    def delete_column(self, field_key: str) -> bool:
        return bool(self._run(self.mutations.delete_column, field_key))

    def clear_column(self, field_key: str) -> bool:
        return bool(self._run(self.mutations.clear_column, field_key))

    def rename_column(self, field_key: str, label: str) -> bool:
        return bool(self._run(self.mutations.rename_column, field_key, label))

    def resize_column(self, field_key: str, width: int):
        return self._run(self.mutations.resize_column, field_key, width)

    # ---------- batch commands ----------
    def batch_delete(self) -> int:
        return self._run(self.mutations.batch_delete) or 0

    def batch_duplicate(self) -> list:
        return self._run(self.mutations.batch_duplicate) or []

    def batch_clear(self) -> int:
        return self._run(self.mutations.batch_clear) or 0

    # ---------- context menu ----------
    def context_action(self, action, row_index: Optional[int] = None, col_index: Optional[int] = None,
                       label: Optional[str] = None, kind=FieldKind.TEXT):
        return self._run(self.menu.dispatch, action, row_index, col_index, label, kind)
