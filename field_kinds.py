from enum import Enum


class FieldKind(str, Enum):
    TEXT = "text"
    DATE = "date"
    STATUS = "status"
    PRIORITY = "priority"
    NUMBER = "number"
    URL = "url"


class ColumnOrigin(str, Enum):
    BUILT_IN = "built_in"
    CUSTOM = "custom"


class Status(str, Enum):
    NEED_TO_START = "need-to-start"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    BLOCKED = "blocked"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ViewMode(str, Enum):
    COMPACT = "compact"
    NORMAL = "normal"
    EXPANDED = "expanded"


PRIORITY_RANK = {
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 1,
}

# Aliases accepted when committing text into a status cell
STATUS_ALIASES = {
    "need to start": Status.NEED_TO_START.value,
    "in progress": Status.IN_PROGRESS.value,
}
