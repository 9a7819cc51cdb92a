import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "gridl")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
DEFAULT_COLUMN_WIDTH_DEFAULT = 160
MIN_COLUMN_WIDTH_DEFAULT = 80
DEFAULT_VIEW_MODE_DEFAULT = "normal"
MULTI_SELECT_MODIFIER_DEFAULT = "ctrl"
ROW_DELETE_MODIFIER_DEFAULT = "shift"
DATE_FORMAT_DEFAULT = "%d-%m-%Y"

MODIFIERS = {"ctrl", "meta", "shift", "alt"}
VIEW_MODES = {"compact", "normal", "expanded"}


def default_config():
    return {
        "DEFAULT_COLUMN_WIDTH": DEFAULT_COLUMN_WIDTH_DEFAULT,
        "MIN_COLUMN_WIDTH": MIN_COLUMN_WIDTH_DEFAULT,
        "DEFAULT_VIEW_MODE": DEFAULT_VIEW_MODE_DEFAULT,
        "MULTI_SELECT_MODIFIER": MULTI_SELECT_MODIFIER_DEFAULT,
        "ROW_DELETE_MODIFIER": ROW_DELETE_MODIFIER_DEFAULT,
        "DATE_FORMAT": DATE_FORMAT_DEFAULT,
    }


def load_config():
    cfg = default_config()

    if os.path.exists(CONFIG_JSON):
        try:
            import json

            with open(CONFIG_JSON, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                min_width = data.get("min_column_width")
                if isinstance(min_width, int) and not isinstance(min_width, bool) and min_width > 0:
                    cfg["MIN_COLUMN_WIDTH"] = min_width

                width = data.get("default_column_width")
                if isinstance(width, int) and not isinstance(width, bool):
                    cfg["DEFAULT_COLUMN_WIDTH"] = max(cfg["MIN_COLUMN_WIDTH"], width)

                mode = data.get("default_view_mode")
                if isinstance(mode, str) and mode.lower() in VIEW_MODES:
                    cfg["DEFAULT_VIEW_MODE"] = mode.lower()

                for key, cfg_key in (
                    ("multi_select_modifier", "MULTI_SELECT_MODIFIER"),
                    ("row_delete_modifier", "ROW_DELETE_MODIFIER"),
                ):
                    mod = data.get(key)
                    if isinstance(mod, str) and mod.lower() in MODIFIERS:
                        cfg[cfg_key] = mod.lower()

                fmt = data.get("date_format")
                if isinstance(fmt, str) and "%" in fmt:
                    cfg["DATE_FORMAT"] = fmt
        except (OSError, ValueError):
            pass

    return cfg
