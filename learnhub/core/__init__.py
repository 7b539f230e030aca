# Core infrastructure
from learnhub.core.context import (
    clear_context,
    get_client_id,
    get_context,
    get_request_id,
    get_user_id,
    set_client_id,
    set_request_id,
    set_user_id,
)
from learnhub.core.logging import configure_structlog, get_logger
from learnhub.core.storage import (
    FileStorage,
    KeyValueStorage,
    MemoryStorage,
    RedisStorage,
    ScopedStorage,
    create_storage,
)


__all__ = [
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "RedisStorage",
    "ScopedStorage",
    "clear_context",
    "configure_structlog",
    "create_storage",
    "get_client_id",
    "get_context",
    "get_logger",
    "get_request_id",
    "get_user_id",
    "set_client_id",
    "set_request_id",
    "set_user_id",
]
