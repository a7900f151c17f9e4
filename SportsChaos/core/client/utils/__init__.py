"""
Constants and exceptions shared by the session client.
"""

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_STORE_FILE,
    CONNECT_TIMEOUT_SECONDS,
    READ_TIMEOUT_SECONDS,
    WRITE_TIMEOUT_SECONDS,
)
from .exceptions import ClientError, AuthenticationError, PersistenceError

__all__ = [
    'ClientError',
    'AuthenticationError',
    'PersistenceError',
    'DEFAULT_BASE_URL',
    'DEFAULT_STORE_FILE',
    'CONNECT_TIMEOUT_SECONDS',
    'READ_TIMEOUT_SECONDS',
    'WRITE_TIMEOUT_SECONDS',
]
