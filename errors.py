class GridError(Exception):
    """Base class for grid engine failures. State is unchanged when raised."""


class RowNotFound(GridError, LookupError):
    def __init__(self, row_id):
        super().__init__(f"Row {row_id} not found")
        self.row_id = row_id


class FieldNotFound(GridError, LookupError):
    def __init__(self, field_key):
        super().__init__(f"Field '{field_key}' not found")
        self.field_key = field_key


class ProtectedColumn(GridError):
    def __init__(self, field_key, action: str = "modify"):
        super().__init__(f"Cannot {action} built-in column '{field_key}'")
        self.field_key = field_key
        self.action = action


class DuplicateFieldKey(GridError, ValueError):
    def __init__(self, field_key):
        super().__init__(f"Column '{field_key}' already exists")
        self.field_key = field_key
