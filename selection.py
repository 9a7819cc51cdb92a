from dataclasses import dataclass
from enum import Enum
from typing import Iterable, NamedTuple, Optional


class CellRef(NamedTuple):
    row_id: int
    col: int  # index into the visible columns


class SelectionMode(str, Enum):
    IDLE = "idle"
    SINGLE = "single"
    MULTI = "multi"
    EDITING = "editing"


@dataclass
class EditSession:
    row_id: int
    col: int
    draft: str
    field_key: Optional[str] = None  # stable target; col may shift when columns are hidden

    @property
    def cell(self) -> CellRef:
        return CellRef(self.row_id, self.col)


class SelectionState:
    """Single cell, multi-cell set and in-flight edit; at most one is populated.

    This class only tracks references. Writing drafts back and resolving
    columns to field keys is done by the editor that owns the row store.
    """

    def __init__(self):
        self.cell: Optional[CellRef] = None
        self.multi: set[CellRef] = set()
        self.edit: Optional[EditSession] = None

    @property
    def mode(self) -> SelectionMode:
        if self.edit is not None:
            return SelectionMode.EDITING
        if self.multi:
            return SelectionMode.MULTI
        if self.cell is not None:
            return SelectionMode.SINGLE
        return SelectionMode.IDLE

    # ---------- transitions ----------
    def clear(self):
        self.cell = None
        self.multi = set()
        self.edit = None

    def select(self, cell: CellRef):
        self.multi = set()
        self.edit = None
        self.cell = CellRef(*cell)

    def toggle(self, cell: CellRef):
        cell = CellRef(*cell)
        self.cell = None
        self.edit = None
        if cell in self.multi:
            self.multi.discard(cell)
        else:
            self.multi.add(cell)

    def select_many(self, cells: Iterable[CellRef]):
        self.cell = None
        self.edit = None
        self.multi = {CellRef(*c) for c in cells}

    def begin_edit(self, cell: CellRef, value: str, field_key: Optional[str] = None):
        cell = CellRef(*cell)
        self.multi = set()
        self.cell = cell
        self.edit = EditSession(cell.row_id, cell.col, "" if value is None else str(value), field_key)

    def update_draft(self, text: str) -> bool:
        if self.edit is None:
            return False
        self.edit.draft = "" if text is None else str(text)
        return True

    def end_edit(self) -> Optional[EditSession]:
        """Drop the edit session, keeping its cell selected."""
        session = self.edit
        self.edit = None
        if session is not None:
            self.cell = session.cell
        return session

    # ---------- invalidation ----------
    def selected_row_ids(self) -> list:
        seen = []
        for cell in sorted(self.multi):
            if cell.row_id not in seen:
                seen.append(cell.row_id)
        return seen

    def forget_rows(self, row_ids: Iterable[int]) -> bool:
        """Drop references to deleted rows. Returns True if the selection changed."""
        gone = set(row_ids)
        changed = False
        if self.edit is not None and self.edit.row_id in gone:
            self.clear()
            return True
        if self.cell is not None and self.cell.row_id in gone:
            self.cell = None
            changed = True
        kept = {c for c in self.multi if c.row_id not in gone}
        if kept != self.multi:
            self.multi = kept
            changed = True
        return changed

    def forget_column(self, col: int) -> bool:
        """Drop references to a deleted visible column and shift those to its right."""
        if self.edit is not None and self.edit.col == col:
            self.clear()
            return True
        changed = False

        def shift(c: CellRef) -> CellRef:
            return CellRef(c.row_id, c.col - 1) if c.col > col else c

        if self.edit is not None and self.edit.col > col:
            self.edit.col -= 1
            changed = True
        if self.cell is not None:
            if self.cell.col == col:
                self.cell = None
            else:
                self.cell = shift(self.cell)
            changed = True
        if self.multi:
            self.multi = {shift(c) for c in self.multi if c.col != col}
            changed = True
        return changed

    def remap_columns(self, mapping: dict) -> bool:
        """Move visible column indexes after the visible set changed.

        ``mapping`` sends each old index to its new index, or to None when the
        column is no longer visible. Cells on hidden columns are dropped; an
        edit on a hidden column is dropped with its cell.
        """
        def move(c: CellRef) -> Optional[CellRef]:
            new = mapping.get(c.col)
            return None if new is None else CellRef(c.row_id, new)

        before = (self.cell, set(self.multi), self.edit.col if self.edit else None)
        if self.edit is not None:
            new = mapping.get(self.edit.col)
            if new is None:
                self.clear()
                return True
            self.edit.col = new
        if self.cell is not None:
            self.cell = move(self.cell)
        moved = (move(c) for c in self.multi)
        self.multi = {c for c in moved if c is not None}
        return before != (self.cell, self.multi, self.edit.col if self.edit else None)
