"""URI reference syntax check (RFC 3986 character level).

Pass/fail oracle only: no normalization, no scheme allow-list, no network.
"""

from __future__ import annotations

import re
import string
from urllib.parse import urlsplit

# unreserved / gen-delims / sub-delims / pct-encoding lead byte
_ALLOWED_CHARS = frozenset(string.ascii_letters + string.digits + "-._~:/?#[]@!$&'()*+,;=%")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


def url_error(value: str) -> str | None:
    """Check value is a syntactically well-formed URI reference.

    Args:
        value: Candidate URL (absolute or relative)

    Returns:
        None if valid, otherwise the reason it failed to parse
    """
    for index, char in enumerate(value):
        if char not in _ALLOWED_CHARS:
            return f"invalid character {char!r} at position {index}"

    bad_percent = _BAD_PERCENT.search(value)
    if bad_percent is not None:
        return f"invalid percent-encoding at position {bad_percent.start()}"

    if value.startswith(":"):
        return "missing protocol scheme"

    try:
        # bracketed hosts are checked by urlsplit, the port only on access
        _ = urlsplit(value).port
    except ValueError as exc:
        return str(exc)
    return None


def is_valid_url(value: str) -> bool:
    """Check value is a syntactically well-formed URI reference."""
    return url_error(value) is None
