from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from config_paths import default_config
from view_spec import ViewSpec


@dataclass
class GridEditorContext:
    registry: Any
    store: Any
    selection: Any
    _set_status: Callable[[str, float], None]
    config: dict = field(default_factory=default_config)

    # Last view spec supplied by the caller; navigation and select-all use it
    view_spec: ViewSpec = field(default_factory=ViewSpec)

    # Processed-view memo: (cache key, DataFrame)
    view_cache: Optional[tuple] = None
