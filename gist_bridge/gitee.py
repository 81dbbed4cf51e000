"""Gitee gist API client for reading and writing a single gist file.

This module talks to the Gitee v5 REST API. Each call addresses one named
file inside one gist and authenticates with an access token passed as a
query parameter.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional
from urllib.parse import quote

import requests

from .errors import DecodeError, RemoteError, TransportError, ValidationError
from .redact import redact_token

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://gitee.com/api/v5"
DEFAULT_PROBE_FILE = "app.json"


def _require(value: Optional[str], field: str) -> str:
    """Return the stripped value, raising ValidationError when it is blank."""
    if value is None or not value.strip():
        raise ValidationError(field)
    return value.strip()


def _is_success(response: requests.Response) -> bool:
    """Return True only for 2xx statuses; unfollowed redirects are failures."""
    return 200 <= response.status_code < 300


def _scrub_token(text: str, access_token: str) -> str:
    """Replace every form of the token in text with its redacted form."""
    forms = {access_token, access_token.strip(), quote(access_token.strip(), safe="")}
    pattern = "|".join(
        re.escape(form) for form in sorted(forms, key=len, reverse=True) if form
    )
    if not pattern:
        return text
    redacted = redact_token(access_token)
    return re.sub(pattern, lambda _match: redacted, text)


def _response_text(response: requests.Response) -> str:
    """Best-effort read of a response body for error reporting."""
    try:
        return response.text
    except (requests.RequestException, UnicodeDecodeError):
        return ""


class GistSyncClient:
    """Client for a single file inside a Gitee gist.

    The client keeps no state between calls apart from its HTTP session.
    Nothing read from the remote is cached; every call re-fetches or
    re-sends the full content of the file it addresses.
    """

    def __init__(
        self,
        timeout: int = 30,
        api_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the gist client.

        Args:
            timeout: Request timeout in seconds
            api_url: Base URL of the Gitee v5 API
            session: Optional pre-configured requests session
        """
        self.timeout = timeout
        self.api_url = api_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "gitee-gist-bridge/1.0.0"})

    def gist_url(self, gist_id: str) -> str:
        """Return the API URL of a gist, without the token."""
        return f"{self.api_url}/gists/{quote(gist_id, safe='')}"

    def fetch_file(
        self, gist_id: str, file_name: str, access_token: str
    ) -> Optional[str]:
        """Fetch the content of one file from a gist.

        Args:
            gist_id: Gist identifier
            file_name: Name of the file inside the gist
            access_token: Gitee access token

        Returns:
            The file content, or None if the gist has no such file or the
            file entry carries no string content

        Raises:
            ValidationError: If any argument is blank
            TransportError: If the request could not be completed
            RemoteError: If Gitee answered with a non-success status
            DecodeError: If the response body is not valid JSON

        Example:
            >>> with GistSyncClient() as client:
            ...     client.fetch_file("abc123", "notes.md", token)
            '# Notes'
        """
        gist_id = _require(gist_id, "gist_id")
        _require(file_name, "file_name")
        _require(access_token, "access_token")

        response = self._send("GET", self.gist_url(gist_id), access_token)
        if not _is_success(response):
            raise RemoteError(
                "GET", response.status_code, access_token, _response_text(response)
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(str(e)) from e

        content = self._extract_content(data, file_name)
        if content is None:
            logger.info(f"File {file_name} not found in gist {gist_id}")
        else:
            logger.info(
                f"Fetched {file_name} from gist {gist_id} ({len(content)} chars)"
            )
        return content

    @staticmethod
    def _extract_content(data: Any, file_name: str) -> Optional[str]:
        """Pull files[file_name].content out of a gist document.

        Any missing level, or a content value that is not a string, yields None.
        """
        if not isinstance(data, dict):
            return None
        files = data.get("files")
        if not isinstance(files, dict):
            return None
        entry = files.get(file_name)
        if not isinstance(entry, dict):
            return None
        content = entry.get("content")
        return content if isinstance(content, str) else None

    def update_file(
        self, gist_id: str, file_name: str, access_token: str, content: str
    ) -> None:
        """Create or replace the content of one file in a gist.

        Sends a PATCH first. Servers that answer 405 Method Not Allowed get
        exactly one PUT with the same URL and body.

        Args:
            gist_id: Gist identifier
            file_name: Name of the file inside the gist
            access_token: Gitee access token
            content: New file content, sent verbatim (may be empty)

        Raises:
            ValidationError: If gist_id, file_name or access_token is blank
            TransportError: If either request could not be completed
            RemoteError: If the final attempt answered with a non-success status
        """
        gist_id = _require(gist_id, "gist_id")
        file_name = _require(file_name, "file_name")
        _require(access_token, "access_token")

        url = self.gist_url(gist_id)
        body = {"files": {file_name: {"content": content}}}

        response = self._send("PATCH", url, access_token, body)
        if _is_success(response):
            logger.info(f"Updated {file_name} in gist {gist_id} via PATCH")
            return

        if response.status_code != requests.codes.method_not_allowed:
            raise RemoteError(
                "PATCH", response.status_code, access_token, _response_text(response)
            )

        logger.info("PATCH not allowed by server, retrying with PUT")
        response = self._send("PUT", url, access_token, body)
        if _is_success(response):
            logger.info(f"Updated {file_name} in gist {gist_id} via PUT")
            return

        raise RemoteError(
            "PUT", response.status_code, access_token, _response_text(response)
        )

    def _send(
        self,
        method: str,
        url: str,
        access_token: str,
        body: Optional[dict[str, Any]] = None,
    ) -> requests.Response:
        """Send one request, mapping transport failures to TransportError.

        Exception text from requests embeds the full URL, so the token is
        scrubbed from it before it reaches the error.
        """
        logger.debug(f"{method} {url} (token={redact_token(access_token)})")
        try:
            return self.session.request(
                method,
                url,
                params={"access_token": access_token.strip()},
                json=body,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(_scrub_token(str(e), access_token)) from e

    def check_access(
        self, gist_id: str, access_token: str, probe_file: str = DEFAULT_PROBE_FILE
    ) -> None:
        """Verify that a gist is readable with the given token.

        Reads probe_file and discards the result; a missing probe file
        still counts as success.

        Raises:
            GistSyncError: Any error raised by fetch_file
        """
        self.fetch_file(gist_id, probe_file, access_token)
        logger.info(f"Gist {gist_id.strip()} is reachable")

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self) -> GistSyncClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
