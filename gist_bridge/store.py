"""Terminal store kept as a JSON document inside one gist file.

This module loads and saves the shared terminal registry on top of
:class:`GistSyncClient`. A missing or unreadable document is treated as
an empty store; network and remote failures propagate.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from typing_extensions import TypedDict

from .gitee import GistSyncClient

logger = logging.getLogger(__name__)

DEPRECATED_TERMINAL_FIELDS = ("terminal_name", "app_id")


class Gps(TypedDict):
    """Geographic position of a terminal."""

    lat: float
    lng: float


class TerminalInfo(TypedDict, total=False):
    """Status record published by one terminal."""

    terminal_id: str
    platform: str
    device_model: str
    cpu: str
    memory: str
    gps: Optional[Gps]
    status: str  # "online" or "offline"
    last_update: str


class TerminalStore(TypedDict):
    """Document stored in the gist file, keyed by terminal id."""

    terminals: dict[str, TerminalInfo]


def empty_store() -> TerminalStore:
    """Return an empty terminal store."""
    return {"terminals": {}}


def sanitize_store(store: TerminalStore) -> TerminalStore:
    """Drop deprecated fields from every terminal record."""
    terminals: dict[str, TerminalInfo] = {}
    for key, info in (store.get("terminals") or {}).items():
        if not isinstance(info, dict):
            continue
        terminals[key] = {  # type: ignore[assignment]
            field: value
            for field, value in info.items()
            if field not in DEPRECATED_TERMINAL_FIELDS
        }
    return {"terminals": terminals}


def parse_store(content: Optional[str]) -> TerminalStore:
    """Parse gist file content into a store, falling back to an empty one."""
    if not content or not content.strip():
        return empty_store()
    try:
        data: Any = json.loads(content)
    except ValueError as e:
        logger.warning(f"Stored terminal document is not valid JSON: {e}")
        return empty_store()
    if not isinstance(data, dict) or not isinstance(data.get("terminals"), dict):
        logger.warning("Stored terminal document has unexpected shape")
        return empty_store()
    return sanitize_store(data)  # type: ignore[arg-type]


class GistStore:
    """Read-modify-write access to the terminal store in one gist file."""

    def __init__(
        self,
        client: GistSyncClient,
        gist_id: str,
        file_name: str,
        access_token: str,
    ):
        self.client = client
        self.gist_id = gist_id
        self.file_name = file_name
        self.access_token = access_token

    def load(self) -> TerminalStore:
        """Fetch the current store from the gist."""
        content = self.client.fetch_file(
            self.gist_id, self.file_name, self.access_token
        )
        store = parse_store(content)
        logger.info(f"Loaded {len(store['terminals'])} terminals from gist")
        return store

    def save(self, store: TerminalStore) -> None:
        """Overwrite the gist file with the given store."""
        content = json.dumps(store, indent=2, ensure_ascii=False)
        self.client.update_file(
            self.gist_id, self.file_name, self.access_token, content
        )

    def upsert_terminal(self, info: TerminalInfo) -> TerminalStore:
        """Insert or replace one terminal record against the latest remote state."""
        terminal_id = info.get("terminal_id", "")
        if not terminal_id:
            raise ValueError("terminal_id is required")

        store = self.load()
        store["terminals"][terminal_id] = info
        self.save(store)
        logger.info(f"Published terminal {terminal_id}")
        return store

    def remove_terminal(self, terminal_id: str) -> TerminalStore:
        """Remove one terminal record if present."""
        store = self.load()
        if store["terminals"].pop(terminal_id, None) is None:
            logger.debug(f"Terminal {terminal_id} not present, nothing to remove")
            return store
        self.save(store)
        logger.info(f"Removed terminal {terminal_id}")
        return store
