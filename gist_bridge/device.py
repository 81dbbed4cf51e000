"""Stable per-machine identifier."""

from __future__ import annotations

import hashlib
import platform
import socket


def get_device_id() -> str:
    """Return a 16-character hex identifier derived from hostname and OS name."""
    seed = f"{socket.gethostname()}-{platform.system()}"
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()[:16]
