"""
Canonical compact serialization.
"""

from .codec import b64url_encode, encode_object
from .model.token import Token, UnsignedToken


def to_text_unsigned(token: UnsignedToken) -> str:
    """``b64url(header) + "." + b64url(payload)``; also the signing input."""
    return b64url_encode(encode_object(token.header)) + "." + b64url_encode(encode_object(token.payload))


def to_bytes_unsigned(token: UnsignedToken) -> bytes:
    return to_text_unsigned(token).encode("ascii")


def to_text(token: Token) -> str:
    """Full compact form.

    Built from the current header and payload plus ``signature.value``;
    ``signature.message`` is not consulted, so a token whose claims were
    changed after signing serializes without complaint but will not verify.
    """
    return to_text_unsigned(token) + "." + b64url_encode(token.signature.value)


def to_bytes(token: Token) -> bytes:
    return to_text(token).encode("ascii")


def is_canonical(token: Token) -> bool:
    """Whether ``signature.message`` equals a fresh serialization of the claims."""
    return token.signature.message == to_bytes_unsigned(token)
