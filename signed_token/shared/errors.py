"""
Error taxonomy for signed-token.

Every failure surfaced by the library is a ``TokenError`` subclass carrying a
stable ``code`` so callers can branch on the kind of failure (for example to
answer 401 versus 500) instead of parsing message text.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class TokenError(Exception):
    """Base exception for signed-token."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class MalformedTokenError(TokenError):
    """The token text could not be turned into a token."""


class FormatError(MalformedTokenError):
    """Structural shape violations (segment count, missing required field)."""

    def __init__(self, message: str = "Malformed token", details: Optional[Dict[str, Any]] = None):
        super().__init__("FORMAT_ERROR", message, details)


class EncodingError(MalformedTokenError):
    """Base64url or text encoding failures."""

    def __init__(self, segment: str, message: Optional[str] = None):
        super().__init__(
            "ENCODING_ERROR",
            message or f"{segment} is not valid base64url",
            {"segment": segment}
        )
        self.segment = segment


class DecodeError(MalformedTokenError):
    """Header or payload is not a JSON object."""

    def __init__(self, segment: str, message: Optional[str] = None):
        super().__init__(
            "DECODE_ERROR",
            message or f"{segment} is not a JSON object",
            {"segment": segment}
        )
        self.segment = segment


class ClaimTypeError(TokenError):
    """A claim is present but has the wrong shape."""

    def __init__(self, claim: str, expected: str):
        super().__init__(
            "CLAIM_TYPE_ERROR",
            f"claim '{claim}' must be {expected}",
            {"claim": claim, "expected": expected}
        )
        self.claim = claim


class UnsupportedAlgorithm(TokenError):
    """The algorithm is unknown or disabled."""

    def __init__(self, algorithm: str):
        super().__init__(
            "UNSUPPORTED_ALGORITHM",
            f"algorithm '{algorithm}' is not supported",
            {"algorithm": algorithm}
        )
        self.algorithm = algorithm


class ValidationError(TokenError):
    """A well-formed token failed validation."""


class InvalidSignature(ValidationError):
    """No candidate key verified the signature."""

    def __init__(self, message: str = "Signature verification failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_SIGNATURE", message, details)


class ExpiredToken(ValidationError):
    """The exp claim is in the past."""

    def __init__(self, exp: float, now: float):
        super().__init__("TOKEN_EXPIRED", "Token has expired", {"exp": exp, "now": now})


class NotYetValid(ValidationError):
    """The nbf claim is in the future."""

    def __init__(self, nbf: float, now: float):
        super().__init__("TOKEN_NOT_YET_VALID", "Token is not yet valid", {"nbf": nbf, "now": now})


class AudienceMismatch(ValidationError):
    """The aud claim does not satisfy the audience rule."""

    def __init__(self, message: str = "Audience mismatch", details: Optional[Dict[str, Any]] = None):
        super().__init__("AUDIENCE_MISMATCH", message, details)


class IssuerMismatch(ValidationError):
    """The iss claim does not satisfy the issuer rule."""

    def __init__(self, message: str = "Issuer mismatch", details: Optional[Dict[str, Any]] = None):
        super().__init__("ISSUER_MISMATCH", message, details)


class KeySetError(TokenError):
    """A remote key set could not be fetched or understood."""

    def __init__(self, message: str = "Key set unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__("KEY_SET_ERROR", message, details)
