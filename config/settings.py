import os


def env_bool(key, default=False):
    return os.getenv(key, str(default)).lower() in ("1", "true", "yes", "on")


def env_int(key, default):
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


# Import defaults (overridable per request)
IMPORT_LANGUAGE = os.getenv("IMPORT_LANGUAGE", "auto")
IMPORT_SKIP_EMPTY_ROWS = env_bool("IMPORT_SKIP_EMPTY_ROWS", True)
IMPORT_TRIM_WHITESPACE = env_bool("IMPORT_TRIM_WHITESPACE", True)
IMPORT_STRICT_MODE = env_bool("IMPORT_STRICT_MODE")

# Optional JSON file replacing the built-in header alias table
HEADER_ALIASES_PATH = os.getenv("HEADER_ALIASES_PATH", "")

MAX_UPLOAD_MB = env_int("MAX_UPLOAD_MB", 10)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
