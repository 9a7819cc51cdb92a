from typing import Callable, Iterable, Optional

import numpy as np
import pandas as pd

from cell_coercion import as_text, today_text
from errors import FieldNotFound, RowNotFound
from field_kinds import Priority, Status

ID_COLUMN = "id"


class RowStore:
    """Ordered records backed by a DataFrame: ``id`` then one column per field key.

    Row ids are allocated as ``max(existing) + 1`` and never reused while a
    higher id exists. Position (DataFrame order) and identity (``id``) are
    independent.
    """

    def __init__(self, registry, today: Optional[Callable[[], str]] = None):
        self.registry = registry
        self._today = today if today is not None else today_text
        self._df = pd.DataFrame(
            {ID_COLUMN: pd.Series([], dtype="int64"),
             **{key: pd.Series([], dtype="object") for key in registry.keys()}}
        )
        self.version = 0

    # ---------- queries ----------
    @property
    def df(self) -> pd.DataFrame:
        return self._df

    def __len__(self):
        return len(self._df)

    def __contains__(self, row_id):
        return bool((self._df[ID_COLUMN] == row_id).any())

    def ids(self) -> list[int]:
        return [int(v) for v in self._df[ID_COLUMN].tolist()]

    def field_keys(self) -> list[str]:
        return [c for c in self._df.columns if c != ID_COLUMN]

    def next_id(self) -> int:
        if len(self._df) == 0:
            return 1
        return int(self._df[ID_COLUMN].max()) + 1

    def position_of(self, row_id) -> int:
        hits = np.flatnonzero(self._df[ID_COLUMN].to_numpy() == row_id)
        if len(hits) == 0:
            raise RowNotFound(row_id)
        return int(hits[0])

    def row_id_at(self, position: int) -> int:
        if position < 0 or position >= len(self._df):
            raise IndexError(f"Row position {position} out of range")
        return int(self._df[ID_COLUMN].iloc[position])

    def get_field(self, row_id, field_key: str) -> str:
        self._require_field(field_key)
        pos = self.position_of(row_id)
        return as_text(self._df[field_key].iloc[pos])

    def get_row(self, row_id) -> dict:
        pos = self.position_of(row_id)
        record = self._df.iloc[pos].to_dict()
        record[ID_COLUMN] = int(record[ID_COLUMN])
        return record

    def records(self) -> list[dict]:
        records = self._df.to_dict("records")
        for record in records:
            record[ID_COLUMN] = int(record[ID_COLUMN])
        return records

    # ---------- row operations ----------
    def build_default_row(self, row_id: int) -> dict:
        row = {ID_COLUMN: row_id}
        for key in self.field_keys():
            row[key] = ""
        defaults = {
            "status": Status.NEED_TO_START.value,
            "priority": Priority.MEDIUM.value,
            "submitted": self._today(),
        }
        for key, value in defaults.items():
            if key in row:
                row[key] = value
        return row

    def insert_row(self, position: Optional[int] = None, values: Optional[dict] = None) -> int:
        for key in (values or {}):
            self._require_field(key)
        row_id = self.next_id()
        row = self.build_default_row(row_id)
        if values:
            row.update({k: as_text(v) for k, v in values.items()})
        self._insert_frame(pd.DataFrame([row], columns=self._df.columns), position)
        return row_id

    def delete_row(self, row_id) -> bool:
        mask = self._df[ID_COLUMN] == row_id
        if not mask.any():
            return False
        self._df = self._df.loc[~mask].reset_index(drop=True)
        self.version += 1
        return True

    def delete_rows(self, row_ids: Iterable[int]) -> int:
        targets = set(row_ids)
        mask = self._df[ID_COLUMN].isin(targets)
        removed = int(mask.sum())
        if removed:
            self._df = self._df.loc[~mask].reset_index(drop=True)
            self.version += 1
        return removed

    def duplicate_row(self, row_id, position: Optional[int] = None) -> int:
        pos = self.position_of(row_id)
        copy = self._df.iloc[[pos]].copy()
        new_id = self.next_id()
        copy[ID_COLUMN] = new_id
        self._insert_frame(copy, pos + 1 if position is None else position)
        return new_id

    def duplicate_rows(self, row_ids: Iterable[int]) -> list[int]:
        """Duplicate each row in order; ids are assigned sequentially above the max."""
        targets = list(dict.fromkeys(row_ids))
        for row_id in targets:
            self.position_of(row_id)
        return [self.duplicate_row(row_id) for row_id in targets]

    def set_field(self, row_id, field_key: str, value) -> None:
        self._require_field(field_key)
        pos = self.position_of(row_id)
        self._df.iat[pos, self._df.columns.get_loc(field_key)] = as_text(value)
        self.version += 1

    def clear_row(self, row_id) -> None:
        pos = self.position_of(row_id)
        for key in self.field_keys():
            self._df.iat[pos, self._df.columns.get_loc(key)] = ""
        self.version += 1

    def clear_rows(self, row_ids: Iterable[int]) -> int:
        targets = set(row_ids)
        mask = self._df[ID_COLUMN].isin(targets)
        if not mask.any():
            return 0
        keys = self.field_keys()
        if keys:
            self._df.loc[mask, keys] = ""
        self.version += 1
        return int(mask.sum())

    def clear_field(self, field_key: str) -> None:
        self._require_field(field_key)
        self._df[field_key] = pd.Series([""] * len(self._df), dtype="object", index=self._df.index)
        self.version += 1

    # ---------- field (column) operations ----------
    def add_field(self, field_key: str, loc: Optional[int] = None) -> None:
        """Backfill ``field_key`` with "" on every row; ``loc`` is a registry index."""
        if field_key in self._df.columns:
            return
        col_loc = len(self._df.columns) if loc is None else min(loc + 1, len(self._df.columns))
        self._df.insert(col_loc, field_key, pd.Series([""] * len(self._df), dtype="object", index=self._df.index))
        self.version += 1

    def drop_field(self, field_key: str) -> None:
        self._require_field(field_key)
        self._df = self._df.drop(columns=[field_key])
        self.version += 1

    # ---------- internals ----------
    def _require_field(self, field_key: str) -> None:
        if field_key == ID_COLUMN or field_key not in self._df.columns:
            raise FieldNotFound(field_key)

    def _insert_frame(self, new_rows: pd.DataFrame, position: Optional[int]) -> None:
        total = len(self._df)
        insert_at = total if position is None else max(0, min(position, total))
        self._df = pd.concat(
            [self._df.iloc[:insert_at], new_rows, self._df.iloc[insert_at:]],
            ignore_index=True,
        )
        self._df[ID_COLUMN] = self._df[ID_COLUMN].astype("int64")
        self.version += 1
