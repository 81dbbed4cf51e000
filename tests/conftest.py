"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

GIST_ID = "abc123"
FILE_NAME = "notes.md"
GIST_URL = f"https://gitee.com/api/v5/gists/{GIST_ID}"


@pytest.fixture(autouse=True)
def clean_gitee_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep credentials from the developer's shell out of the tests."""
    for name in ("GITEE_ACCESS_TOKEN", "GITEE_GIST_ID", "GIST_FILE_NAME"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def gist_url() -> str:
    """Return the API URL of the test gist (without the token)."""
    return GIST_URL


@pytest.fixture
def gist_payload() -> dict[str, Any]:
    """Return a gist document as Gitee serves it."""
    return {
        "id": GIST_ID,
        "description": "terminal registry",
        "public": False,
        "files": {
            FILE_NAME: {
                "filename": FILE_NAME,
                "type": "text/plain",
                "size": 7,
                "content": "# Notes",
            },
            "other.txt": {"filename": "other.txt", "content": "other"},
        },
    }
