"""Project-wide constants (default storage locations, backend names)."""

DEFAULT_DATABASE_PATH: str = "/app/data/fragments.db"
DEFAULT_PAYLOAD_PATH: str = "/app/data/payloads"

BACKEND_MEMORY: str = "memory"
BACKEND_SQLITE: str = "sqlite"
DEFAULT_BACKEND: str = BACKEND_MEMORY

PAYLOAD_FILE_SUFFIX: str = ".frag"
