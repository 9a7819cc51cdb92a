"""Pure derivation of the processed view: filter, then stable typed sort.

Nothing in this module mutates its inputs; every function returns a new
DataFrame (or a scalar) so the row store can be shared read-only.
"""

from typing import Optional

import pandas as pd

from cell_coercion import DEFAULT_DATE_FORMAT, as_text, parse_date, parse_number, priority_rank
from column_registry import BUILT_IN_COLUMNS
from field_kinds import FieldKind, SortOrder

DATE_SENTINEL = pd.Timestamp.min

_BUILT_IN_KINDS = {key: kind for _label, key, kind in BUILT_IN_COLUMNS}


def field_kind(field_key: str, kinds: Optional[dict] = None) -> FieldKind:
    table = kinds if kinds is not None else _BUILT_IN_KINDS
    return FieldKind(table.get(field_key, FieldKind.TEXT))


def sort_key(kind, value, date_format: str = DEFAULT_DATE_FORMAT):
    kind = FieldKind(kind)
    if kind == FieldKind.DATE:
        parsed = parse_date(value, date_format)
        return DATE_SENTINEL if pd.isna(parsed) else parsed
    if kind == FieldKind.NUMBER:
        return parse_number(value)
    if kind == FieldKind.PRIORITY:
        return priority_rank(value)
    return as_text(value).lower()


def compare_values(kind, a, b, order=SortOrder.ASC, date_format: str = DEFAULT_DATE_FORMAT) -> int:
    ka = sort_key(kind, a, date_format)
    kb = sort_key(kind, b, date_format)
    result = -1 if ka < kb else (1 if ka > kb else 0)
    return -result if SortOrder(order) == SortOrder.DESC else result


def matches_filter(kind, value, filter_value: str) -> bool:
    text = as_text(value).lower()
    needle = str(filter_value).lower()
    if FieldKind(kind) == FieldKind.DATE:
        return text == needle
    return needle in text


def apply_filter(frame: pd.DataFrame, field_key: Optional[str], filter_value: str, kinds=None) -> pd.DataFrame:
    if not field_key or not filter_value:
        return frame
    if field_key not in frame.columns:
        return frame.iloc[0:0]
    texts = frame[field_key].map(as_text).astype("object").str.lower()
    needle = str(filter_value).lower()
    if field_kind(field_key, kinds) == FieldKind.DATE:
        mask = texts == needle
    else:
        mask = texts.str.contains(needle, regex=False)
    return frame.loc[mask.fillna(False).astype(bool)]


def apply_sort(frame: pd.DataFrame, field_key: Optional[str], order, kinds=None,
               date_format: str = DEFAULT_DATE_FORMAT) -> pd.DataFrame:
    if not field_key or order is None or field_key not in frame.columns or len(frame) < 2:
        return frame
    kind = field_kind(field_key, kinds)
    keys = frame[field_key].map(lambda v: sort_key(kind, v, date_format))
    ascending = SortOrder(order) == SortOrder.ASC
    # mergesort keeps equal keys in their filtered order in both directions
    ordered = keys.sort_values(ascending=ascending, kind="mergesort").index
    return frame.loc[ordered]


def derive_view(frame: pd.DataFrame, spec, kinds=None, date_format: str = DEFAULT_DATE_FORMAT) -> pd.DataFrame:
    view = apply_filter(frame, spec.filter_field, spec.filter_value, kinds)
    view = apply_sort(view, spec.sort_field, spec.sort_order, kinds, date_format)
    return view.copy()
