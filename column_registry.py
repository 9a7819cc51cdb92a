import re
from dataclasses import dataclass
from typing import Iterable, Optional

from errors import DuplicateFieldKey, FieldNotFound, ProtectedColumn
from field_kinds import ColumnOrigin, FieldKind

# (label, field key, kind)
BUILT_IN_COLUMNS = [
    ("Job Request", "jobRequest", FieldKind.TEXT),
    ("Submitted", "submitted", FieldKind.DATE),
    ("Status", "status", FieldKind.STATUS),
    ("Submitter", "submitter", FieldKind.TEXT),
    ("URL", "url", FieldKind.URL),
    ("Assigned", "assigned", FieldKind.TEXT),
    ("Priority", "priority", FieldKind.PRIORITY),
    ("Due Date", "dueDate", FieldKind.DATE),
    ("Est. Value", "estValue", FieldKind.NUMBER),
]

RESERVED_KEYS = {"id"}


def derive_field_key(label: str) -> str:
    """Lowercase the label and strip all whitespace: 'Due  Region' -> 'dueregion'."""
    text = "" if label is None else str(label).strip()
    if not text:
        raise ValueError("Name required")
    return re.sub(r"\s+", "", text.lower())


@dataclass(frozen=True)
class Column:
    field_key: str
    label: str
    origin: ColumnOrigin
    kind: FieldKind = FieldKind.TEXT

    @property
    def is_built_in(self) -> bool:
        return self.origin == ColumnOrigin.BUILT_IN


class ColumnRegistry:
    """Ordered column metadata plus a separately owned width table.

    Built-in columns always lead; custom columns follow in insertion or
    positional order. ``widths`` is keyed by field key and is updated in the
    same call as the metadata so the two never drift apart.
    """

    def __init__(self, default_width: int = 160, min_width: int = 80):
        self.min_width = max(1, int(min_width))
        self.default_width = max(self.min_width, int(default_width))
        self._columns: list[Column] = [
            Column(key, label, ColumnOrigin.BUILT_IN, kind)
            for label, key, kind in BUILT_IN_COLUMNS
        ]
        self.widths: dict[str, int] = {c.field_key: self.default_width for c in self._columns}
        self.version = 0

    # ---------- queries ----------
    def __len__(self):
        return len(self._columns)

    def __iter__(self):
        return iter(list(self._columns))

    def __contains__(self, field_key):
        return any(c.field_key == field_key for c in self._columns)

    @property
    def columns(self) -> list[Column]:
        return list(self._columns)

    @property
    def built_in_count(self) -> int:
        return sum(1 for c in self._columns if c.is_built_in)

    def keys(self) -> list[str]:
        return [c.field_key for c in self._columns]

    def get(self, field_key: str) -> Column:
        for column in self._columns:
            if column.field_key == field_key:
                return column
        raise FieldNotFound(field_key)

    def index_of(self, field_key: str) -> int:
        for idx, column in enumerate(self._columns):
            if column.field_key == field_key:
                return idx
        raise FieldNotFound(field_key)

    def kind_of(self, field_key: str) -> FieldKind:
        return self.get(field_key).kind

    def kinds(self) -> dict[str, FieldKind]:
        return {c.field_key: c.kind for c in self._columns}

    def width_of(self, field_key: str) -> int:
        if field_key not in self.widths:
            raise FieldNotFound(field_key)
        return self.widths[field_key]

    def visible_columns(self, hidden_fields: Optional[Iterable[str]] = None) -> list[Column]:
        hidden = set(hidden_fields or ())
        return [c for c in self._columns if c.field_key not in hidden]

    def has_key_collision(self, field_key: str) -> bool:
        lowered = field_key.lower()
        if lowered in RESERVED_KEYS:
            return True
        return any(c.field_key.lower() == lowered for c in self._columns)

    def next_auto_label(self) -> str:
        n = 1
        while self.has_key_collision(derive_field_key(f"Column {n}")):
            n += 1
        return f"Column {n}"

    # ---------- mutations ----------
    def check_new_column(self, label: str, position: Optional[int] = None) -> str:
        """Validate a prospective custom column and return its derived key."""
        key = derive_field_key(label)
        if self.has_key_collision(key):
            raise DuplicateFieldKey(key)
        if position is not None and position < self.built_in_count:
            raise ProtectedColumn(self._columns[max(0, position)].field_key, "insert before")
        return key

    def add_column(self, label: str, position: Optional[int] = None, kind=FieldKind.TEXT) -> str:
        """Metadata only: the row store is not backfilled here.

        Use ``MutationEngine.add_column`` to keep every row in step.
        """
        key = self.check_new_column(label, position)
        kind = FieldKind(kind)
        loc = len(self._columns) if position is None else min(position, len(self._columns))
        self._columns.insert(loc, Column(key, str(label).strip(), ColumnOrigin.CUSTOM, kind))
        self.widths[key] = self.default_width
        self.version += 1
        return key

    def remove_column(self, field_key: str) -> Column:
        """Metadata only; ``MutationEngine.delete_column`` also drops the field from rows."""
        column = self.get(field_key)
        if column.is_built_in:
            raise ProtectedColumn(field_key, "delete")
        self._columns.remove(column)
        self.widths.pop(field_key, None)
        self.version += 1
        return column

    def rename_column(self, field_key: str, label: str) -> Column:
        column = self.get(field_key)
        if column.is_built_in:
            raise ProtectedColumn(field_key, "rename")
        text = "" if label is None else str(label).strip()
        if not text:
            raise ValueError("Name required")
        renamed = Column(column.field_key, text, column.origin, column.kind)
        self._columns[self.index_of(field_key)] = renamed
        self.version += 1
        return renamed

    def resize_column(self, field_key: str, width: int) -> int:
        if field_key not in self.widths:
            raise FieldNotFound(field_key)
        new_width = max(self.min_width, int(width))
        self.widths[field_key] = new_width
        self.version += 1
        return new_width
