"""
Identifier Validation

Document identifiers are 32-character lowercase hex strings (UUID4 without
dashes). They arrive unvalidated through path parameters and are checked
here before reaching a query, so a malformed value fails the same way a
document store rejects a malformed key.
"""

import re
import uuid

from booking_api.core.exceptions import InvalidIdentifierError

_IDENTIFIER_RE = re.compile(r'^[0-9a-f]{32}$')


def new_identifier() -> str:
    """Generate a fresh document identifier."""
    return uuid.uuid4().hex


def parse_identifier(raw: str) -> str:
    """
    Normalise and validate a document identifier.

    Args:
        raw: Identifier as received from the client

    Returns:
        The identifier in canonical (lowercase, trimmed) form

    Raises:
        InvalidIdentifierError: If the value is not a 32-character hex string
    """
    if not raw or not isinstance(raw, str):
        raise InvalidIdentifierError(str(raw))

    identifier = raw.strip().lower()
    if not _IDENTIFIER_RE.match(identifier):
        raise InvalidIdentifierError(raw)

    return identifier
