"""
Token data model: tokens, verification keys, claims and validation options.
"""

from .claims import StandardHeader, StandardPayload, parse_standard_header, parse_standard_payload
from .keys import (
    EdwardsKey,
    EllipticCurveKey,
    KeyKind,
    RsaKey,
    SymmetricKey,
    VerificationKey,
    key_from_jwk,
    key_from_pem,
    key_from_public_key,
)
from .options import AudienceRule, IssuerRule, KeyResolver, RuleKind, SignatureRule, ValidationOptions
from .token import SignatureInfo, Token, UnsignedToken

__all__ = [
    "StandardHeader",
    "StandardPayload",
    "parse_standard_header",
    "parse_standard_payload",
    "EdwardsKey",
    "EllipticCurveKey",
    "KeyKind",
    "RsaKey",
    "SymmetricKey",
    "VerificationKey",
    "key_from_jwk",
    "key_from_pem",
    "key_from_public_key",
    "AudienceRule",
    "IssuerRule",
    "KeyResolver",
    "RuleKind",
    "SignatureRule",
    "ValidationOptions",
    "SignatureInfo",
    "Token",
    "UnsignedToken",
]
