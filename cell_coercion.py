import math

import pandas as pd

from field_kinds import FieldKind, Priority, Status, PRIORITY_RANK, STATUS_ALIASES

DEFAULT_DATE_FORMAT = "%d-%m-%Y"


def as_text(value) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value)


def coerce_cell_value(kind, text):
    text = "" if text is None else str(text)
    kind = FieldKind(kind) if kind is not None else FieldKind.TEXT

    if kind not in (FieldKind.STATUS, FieldKind.PRIORITY):
        return text

    stripped = text.strip()
    if stripped == "":
        return ""

    if kind == FieldKind.STATUS:
        lowered = stripped.lower()
        lowered = STATUS_ALIASES.get(lowered, lowered)
        for status in Status:
            if status.value == lowered:
                return status.value
        raise ValueError(f"Cannot coerce '{text}' to status")

    lowered = stripped.lower()
    for priority in Priority:
        if priority.value.lower() == lowered:
            return priority.value
    raise ValueError(f"Cannot coerce '{text}' to priority")


def parse_date(text, fmt: str = DEFAULT_DATE_FORMAT):
    """Parse date text, returning NaT when it does not match ``fmt``."""
    raw = as_text(text).strip()
    if not raw:
        return pd.NaT
    return pd.to_datetime(raw, format=fmt, errors="coerce")


def parse_number(text) -> float:
    """Numeric-as-text with grouping commas; 0.0 when unparsable."""
    raw = as_text(text).replace(",", "").strip()
    try:
        value = float(raw)
    except ValueError:
        return 0.0
    if math.isnan(value):
        return 0.0
    return value


def priority_rank(text) -> int:
    return PRIORITY_RANK.get(as_text(text), 0)


def today_text(fmt: str = DEFAULT_DATE_FORMAT) -> str:
    return pd.Timestamp.today().strftime(fmt)
