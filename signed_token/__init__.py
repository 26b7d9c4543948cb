"""
signed-token: parse, serialize and validate signed bearer tokens.

- parser / serializer: compact ``header.payload.signature`` form
- model: tokens, verification keys, standard claims, validation options
- signature: algorithm registry, verification engine, signer
- validation: ``validate`` and the ``TokenValidator`` facade
- jwks: remote key-set resolver
- shared: logging, errors, settings, retry

Importing the package performs no I/O.
"""

from .codec import JsonObject
from .jwks import JWKSClient
from .model import (
    AudienceRule,
    EdwardsKey,
    EllipticCurveKey,
    IssuerRule,
    KeyResolver,
    RsaKey,
    SignatureInfo,
    SignatureRule,
    StandardHeader,
    StandardPayload,
    SymmetricKey,
    Token,
    UnsignedToken,
    ValidationOptions,
    VerificationKey,
    key_from_jwk,
    key_from_pem,
    key_from_public_key,
    parse_standard_header,
    parse_standard_payload,
)
from .parser import parse
from .serializer import is_canonical, to_bytes, to_bytes_unsigned, to_text, to_text_unsigned
from .shared.errors import (
    AudienceMismatch,
    ClaimTypeError,
    DecodeError,
    EncodingError,
    ExpiredToken,
    FormatError,
    InvalidSignature,
    IssuerMismatch,
    KeySetError,
    MalformedTokenError,
    NotYetValid,
    TokenError,
    UnsupportedAlgorithm,
    ValidationError,
)
from .signature import sign, sign_claims, verify
from .validation import TokenValidator, TokenVerificationResponse, validate

__version__ = "1.0.0"

__all__ = [
    "JsonObject",
    "JWKSClient",
    "AudienceRule",
    "EdwardsKey",
    "EllipticCurveKey",
    "IssuerRule",
    "KeyResolver",
    "RsaKey",
    "SignatureInfo",
    "SignatureRule",
    "StandardHeader",
    "StandardPayload",
    "SymmetricKey",
    "Token",
    "UnsignedToken",
    "ValidationOptions",
    "VerificationKey",
    "key_from_jwk",
    "key_from_pem",
    "key_from_public_key",
    "parse_standard_header",
    "parse_standard_payload",
    "parse",
    "is_canonical",
    "to_bytes",
    "to_bytes_unsigned",
    "to_text",
    "to_text_unsigned",
    "AudienceMismatch",
    "ClaimTypeError",
    "DecodeError",
    "EncodingError",
    "ExpiredToken",
    "FormatError",
    "InvalidSignature",
    "IssuerMismatch",
    "KeySetError",
    "MalformedTokenError",
    "NotYetValid",
    "TokenError",
    "UnsupportedAlgorithm",
    "ValidationError",
    "sign",
    "sign_claims",
    "verify",
    "TokenValidator",
    "TokenVerificationResponse",
    "validate",
]
