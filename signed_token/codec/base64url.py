"""
Unpadded base64url (RFC 4648 section 5) used by every token segment.
"""

import base64
import re

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


class Base64urlError(ValueError):
    """Text is not unpadded base64url."""


def b64url_encode(data: bytes) -> str:
    """Encode bytes as base64url without ``=`` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """Decode unpadded base64url text.

    Only the URL-safe alphabet is accepted; padding characters, whitespace
    and the standard ``+``/``/`` characters are rejected.
    """
    if not _ALPHABET.fullmatch(text):
        raise Base64urlError("characters outside the base64url alphabet")
    if len(text) % 4 == 1:
        raise Base64urlError("truncated base64url input")
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
