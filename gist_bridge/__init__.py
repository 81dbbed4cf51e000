"""Gitee Gist Bridge - read and write a single file stored in a Gitee gist.

This package provides a small client for the Gitee gist API together with
the command surface a desktop application uses to call it.
"""

from .commands import CommandError, invoke
from .config import GiteeConfig, load_config
from .device import get_device_id
from .errors import (
    DecodeError,
    GistSyncError,
    RemoteError,
    TransportError,
    ValidationError,
)
from .gitee import GistSyncClient
from .redact import redact_token
from .store import GistStore

__version__ = "1.0.0"

__all__ = [
    "CommandError",
    "DecodeError",
    "GiteeConfig",
    "GistStore",
    "GistSyncClient",
    "GistSyncError",
    "RemoteError",
    "TransportError",
    "ValidationError",
    "get_device_id",
    "invoke",
    "load_config",
    "redact_token",
]
