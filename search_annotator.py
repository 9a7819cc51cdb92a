import re
from typing import Iterable

import numpy as np
import pandas as pd

from cell_coercion import as_text
from row_store import ID_COLUMN


class SearchAnnotation:
    """Per-cell match state over an already-derived view."""

    def __init__(self, term: str, mask: pd.DataFrame, row_ids: list):
        self.term = term
        self._mask = mask
        fields = list(mask.columns)
        rows, cols = np.nonzero(mask.to_numpy(dtype=bool))
        self._hits = {(row_ids[r], fields[c]) for r, c in zip(rows, cols)}
        self.match_count = int(len(rows))

    @property
    def active(self) -> bool:
        return bool(self.term.strip())

    def is_match(self, row_id, field_key: str) -> bool:
        return (row_id, field_key) in self._hits

    def row_has_match(self, row_id) -> bool:
        return any(r == row_id for r, _ in self._hits)

    def matched_cells(self) -> set:
        return set(self._hits)


def annotate(view: pd.DataFrame, visible_fields: Iterable[str], search_term: str) -> SearchAnnotation:
    term = search_term or ""
    fields = [f for f in visible_fields if f in view.columns and f != ID_COLUMN]
    row_ids = [int(v) for v in view[ID_COLUMN].tolist()] if ID_COLUMN in view.columns else []

    if not term.strip() or not fields or len(view) == 0:
        empty = pd.DataFrame(False, index=view.index, columns=fields)
        return SearchAnnotation(term, empty, row_ids)

    needle = term.lower()
    mask = pd.DataFrame(
        {
            f: view[f].map(as_text).astype("object").str.lower().str.contains(needle, regex=False)
            for f in fields
        },
        index=view.index,
    )
    return SearchAnnotation(term, mask.fillna(False).astype(bool), row_ids)


def highlight_segments(text, term: str) -> list:
    """Split ``text`` into ``(segment, is_match)`` pairs, matching case-insensitively."""
    text = as_text(text)
    if not term or not term.strip():
        return [(text, False)] if text else []
    parts = re.split(f"({re.escape(term)})", text, flags=re.IGNORECASE)
    lowered = term.lower()
    return [(part, part.lower() == lowered) for part in parts if part]


def describe_view(spec, annotation=None) -> list:
    """Status-strip lines describing the active search, filter and sort."""
    lines = []
    if spec.search_term:
        count = annotation.match_count if annotation is not None else 0
        lines.append(f'Found {count} match{"es" if count != 1 else ""} for "{spec.search_term}"')
    if spec.filter_field:
        lines.append(f"Filtered by {spec.filter_field}: {spec.filter_value}")
    if spec.sort_field:
        order = spec.sort_order.value.upper() if spec.sort_order is not None else ""
        lines.append(f"Sorted by {spec.sort_field} ({order})")
    return lines
