from enum import Enum


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# -------------------------
# Parameter lookup defaults
# -------------------------

# Paths passed to get_in() to pull values out of the request parameters
DEFAULT_PAGE_KEYS = ["page"]
DEFAULT_PER_PAGE_KEYS = ["per_page"]
DEFAULT_SORT_KEYS = ["sort"]
DEFAULT_ORDER_KEYS = ["order"]

# Field the paginate step counts on when no count_by option is declared
DEFAULT_COUNT_BY = "id"
