"""Store identifiers: 24 lowercase hex characters, object-id style."""

import re
import secrets

from .exceptions import MalformedIdentifier

_IDENTIFIER_RE = re.compile(r"^[0-9a-f]{24}$")


def new_identifier() -> str:
    """Generate a fresh random identifier."""
    return secrets.token_hex(12)


def check_identifier(raw: str) -> str:
    """
    Return the identifier in canonical (lowercase) form.

    Raises:
        MalformedIdentifier: If raw is not 24 hex characters
    """
    candidate = raw.strip().lower() if isinstance(raw, str) else ""
    if not _IDENTIFIER_RE.match(candidate):
        raise MalformedIdentifier(raw)
    return candidate
