from .loader import DEFAULT_COLUMNS, DEFAULT_ROWS, apply_defaults, load_config, parse_config
from .validation import ConfigValidator, parse_coordinate

__all__ = [
    "ConfigValidator",
    "DEFAULT_COLUMNS",
    "DEFAULT_ROWS",
    "apply_defaults",
    "load_config",
    "parse_config",
    "parse_coordinate",
]
