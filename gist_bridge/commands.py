"""Command surface exposed to the host application.

Each command is a plain function. Errors crossing this boundary are
flattened to :class:`CommandError`, which carries only a text message.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Optional

from .device import get_device_id
from .errors import GistSyncError
from .gitee import GistSyncClient

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Plain-text error returned to the host application."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def gitee_get_gist_file(
    gist_id: str,
    file_name: str,
    access_token: str,
    client: Optional[GistSyncClient] = None,
) -> Optional[str]:
    """Return the content of a gist file, or None if it does not exist.

    Raises:
        CommandError: On any validation, transport, remote or decode failure
    """
    try:
        if client is not None:
            return client.fetch_file(gist_id, file_name, access_token)
        with GistSyncClient() as own_client:
            return own_client.fetch_file(gist_id, file_name, access_token)
    except GistSyncError as e:
        logger.error(f"gitee_get_gist_file failed: {e}")
        raise CommandError(str(e)) from e


def gitee_update_gist_file(
    gist_id: str,
    file_name: str,
    access_token: str,
    content: str,
    client: Optional[GistSyncClient] = None,
) -> None:
    """Write content to a gist file.

    Raises:
        CommandError: On any validation, transport or remote failure
    """
    try:
        if client is not None:
            client.update_file(gist_id, file_name, access_token, content)
            return
        with GistSyncClient() as own_client:
            own_client.update_file(gist_id, file_name, access_token, content)
    except GistSyncError as e:
        logger.error(f"gitee_update_gist_file failed: {e}")
        raise CommandError(str(e)) from e


COMMANDS: dict[str, Callable[..., Any]] = {
    "get_device_id": get_device_id,
    "gitee_get_gist_file": gitee_get_gist_file,
    "gitee_update_gist_file": gitee_update_gist_file,
}


def invoke(name: str, **kwargs: Any) -> Any:
    """Dispatch a command by name, as the host application does.

    Raises:
        CommandError: If the command is unknown or fails
    """
    handler = COMMANDS.get(name)
    if handler is None:
        raise CommandError(f"unknown command: {name}")
    try:
        inspect.signature(handler).bind(**kwargs)
    except TypeError as e:
        raise CommandError(f"invalid arguments for {name}: {e}") from e
    return handler(**kwargs)
