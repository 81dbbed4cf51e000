"""Tests for the terminal store module."""

import json
from typing import Any

import pytest
import responses

from gist_bridge.errors import RemoteError
from gist_bridge.gitee import GistSyncClient
from gist_bridge.store import GistStore, empty_store, parse_store, sanitize_store

TOKEN = "tok12345678"


@pytest.fixture
def store() -> GistStore:
    """Return a store bound to the test gist."""
    return GistStore(GistSyncClient(), "abc123", "app.json", TOKEN)


def _gist_with(content: Any) -> dict[str, Any]:
    return {"files": {"app.json": {"content": content}}}


def test_empty_store() -> None:
    """Test the empty store shape."""
    assert empty_store() == {"terminals": {}}
    assert empty_store() is not empty_store()


def test_sanitize_store_drops_deprecated_fields() -> None:
    """Test that terminal_name and app_id are removed."""
    raw = {
        "terminals": {
            "t1": {
                "terminal_id": "t1",
                "terminal_name": "old",
                "app_id": "legacy",
                "status": "online",
            }
        }
    }

    assert sanitize_store(raw) == {
        "terminals": {"t1": {"terminal_id": "t1", "status": "online"}}
    }


@pytest.mark.parametrize(
    "content",
    [None, "", "   ", "not json", "[]", '{"terminals": []}', '{"other": {}}'],
)
def test_parse_store_falls_back_to_empty(content: Any) -> None:
    """Test that unusable documents become an empty store."""
    assert parse_store(content) == empty_store()


class TestGistStore:
    """Test cases for GistStore."""

    @responses.activate
    def test_load_missing_file(self, store: GistStore, gist_url: str) -> None:
        """Test that a gist without the store file loads as empty."""
        responses.add(responses.GET, gist_url, json={"files": {}}, status=200)

        assert store.load() == empty_store()

    @responses.activate
    def test_load_existing_store(self, store: GistStore, gist_url: str) -> None:
        """Test loading a stored document."""
        document = {
            "terminals": {
                "t1": {"terminal_id": "t1", "status": "online", "app_id": "x"}
            }
        }
        responses.add(
            responses.GET, gist_url, json=_gist_with(json.dumps(document)), status=200
        )

        assert store.load() == {
            "terminals": {"t1": {"terminal_id": "t1", "status": "online"}}
        }

    @responses.activate
    def test_load_propagates_remote_errors(self, store: GistStore, gist_url: str) -> None:
        """Test that remote failures are not hidden behind an empty store."""
        responses.add(responses.GET, gist_url, status=500)

        with pytest.raises(RemoteError):
            store.load()

    @responses.activate
    def test_save_serializes_document(self, store: GistStore, gist_url: str) -> None:
        """Test that save writes indented JSON via PATCH."""
        responses.add(responses.PATCH, gist_url, status=200)
        document = {"terminals": {"t1": {"terminal_id": "t1", "status": "offline"}}}

        store.save(document)

        body = json.loads(responses.calls[0].request.body)
        content = body["files"]["app.json"]["content"]
        assert json.loads(content) == document
        assert content == json.dumps(document, indent=2, ensure_ascii=False)

    @responses.activate
    def test_upsert_terminal(self, store: GistStore, gist_url: str) -> None:
        """Test that upsert merges into the latest remote state."""
        existing = {"terminals": {"t1": {"terminal_id": "t1", "status": "online"}}}
        responses.add(
            responses.GET, gist_url, json=_gist_with(json.dumps(existing)), status=200
        )
        responses.add(responses.PATCH, gist_url, status=200)

        info = {"terminal_id": "t2", "status": "online", "gps": {"lat": 1.5, "lng": 2.5}}
        result = store.upsert_terminal(info)

        assert set(result["terminals"]) == {"t1", "t2"}
        saved = json.loads(
            json.loads(responses.calls[1].request.body)["files"]["app.json"]["content"]
        )
        assert saved["terminals"]["t2"]["gps"] == {"lat": 1.5, "lng": 2.5}

    def test_upsert_terminal_requires_id(self, store: GistStore) -> None:
        """Test that a record without terminal_id is rejected."""
        with pytest.raises(ValueError, match="terminal_id is required"):
            store.upsert_terminal({"status": "online"})

    @responses.activate
    def test_remove_terminal(self, store: GistStore, gist_url: str) -> None:
        """Test removing an existing terminal."""
        existing = {"terminals": {"t1": {"terminal_id": "t1"}}}
        responses.add(
            responses.GET, gist_url, json=_gist_with(json.dumps(existing)), status=200
        )
        responses.add(responses.PATCH, gist_url, status=200)

        assert store.remove_terminal("t1") == empty_store()
        assert [call.request.method for call in responses.calls] == ["GET", "PATCH"]

    @responses.activate
    def test_remove_absent_terminal_skips_write(
        self, store: GistStore, gist_url: str
    ) -> None:
        """Test that removing an unknown terminal does not write."""
        responses.add(responses.GET, gist_url, json={"files": {}}, status=200)

        assert store.remove_terminal("missing") == empty_store()
        assert len(responses.calls) == 1
