"""Token redaction for log and error output.

Access tokens travel in the query string of every Gitee request, so any
message that mentions a token goes through :func:`redact_token` first.
"""

from __future__ import annotations

EMPTY_TOKEN_MARKER = "<empty>"
REDACTED_MARKER = "<redacted>"


def redact_token(token: str) -> str:
    """Return a display-safe form of an access token.

    Args:
        token: Raw access token

    Returns:
        ``"<empty>"`` for an empty token, ``"<redacted>"`` for tokens of
        eight characters or fewer, otherwise the first and last four
        characters joined by an ellipsis.

    Example:
        >>> redact_token("abcd1234efgh5678")
        'abcd…5678'
    """
    if not token:
        return EMPTY_TOKEN_MARKER
    if len(token) <= 8:
        return REDACTED_MARKER
    return f"{token[:4]}…{token[-4:]}"
