"""
Token validation.

``validate`` runs the checks in a fixed order and raises the first failure;
``TokenValidator`` wraps it for services that authenticate bearer tokens.
"""

import time
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel

from ..codec import JsonObject
from ..model.claims import audience_claim, numeric_claim
from ..model.options import AudienceRule, IssuerRule, RuleKind, SignatureRule, ValidationOptions
from ..model.token import Token
from ..parser import parse
from ..shared.config import TokenSettings
from ..shared.errors import (
    AudienceMismatch,
    ExpiredToken,
    InvalidSignature,
    IssuerMismatch,
    NotYetValid,
    TokenError,
)
from ..shared.logging import get_logger
from ..signature.engine import token_issuer, verify

Clock = Callable[[], float]


def check_expiration(payload: JsonObject, now: float) -> None:
    exp = numeric_claim(payload, "exp")
    if exp is not None and now >= exp:
        raise ExpiredToken(exp, now)


def check_not_before(payload: JsonObject, now: float) -> None:
    nbf = numeric_claim(payload, "nbf")
    if nbf is not None and now < nbf:
        raise NotYetValid(nbf, now)


def check_audience(payload: JsonObject, rule: AudienceRule) -> None:
    aud = audience_claim(payload)
    if aud is None:
        audiences = frozenset()
    elif isinstance(aud, str):
        audiences = frozenset((aud,))
    else:
        audiences = frozenset(aud)

    if rule.kind is RuleKind.SKIP:
        return

    if rule.kind is RuleKind.EXACTLY_ONE:
        ok = rule.values[0] in audiences
    elif rule.kind is RuleKind.ANY_OF:
        ok = not audiences.isdisjoint(rule.values)
    elif rule.kind is RuleKind.ALL_OF:
        ok = audiences.issuperset(rule.values)
    else:
        raise ValueError(f"not an audience rule: {rule.kind}")

    if not ok:
        raise AudienceMismatch(details={"rule": rule.kind.value, "expected": list(rule.values)})


def check_issuer(payload: JsonObject, rule: IssuerRule) -> None:
    if rule.kind is RuleKind.SKIP:
        return

    issuer = token_issuer(payload)
    if rule.kind in (RuleKind.EXACTLY_ONE, RuleKind.ANY_OF):
        ok = issuer is not None and issuer in rule.values
    else:
        raise ValueError(f"not an issuer rule: {rule.kind}")

    if not ok:
        raise IssuerMismatch(details={"rule": rule.kind.value, "expected": list(rule.values)})


def validate(token: Token, options: ValidationOptions, clock: Clock = time.time) -> None:
    """
    Validate a parsed token.

    Checks, first failure wins: expiration (``now >= exp`` fails), not-before
    (``now < nbf`` fails), signature, audience, issuer. Absent time claims
    pass.

    Raises:
        ExpiredToken, NotYetValid, InvalidSignature, AudienceMismatch,
        IssuerMismatch: the check failed.
        ClaimTypeError: a checked claim has the wrong shape.
        UnsupportedAlgorithm: the token's algorithm cannot be verified.
    """
    payload = token.payload
    now = clock()

    if options.expiration:
        check_expiration(payload, now)

    if options.not_before:
        check_not_before(payload, now)

    if not verify(token, options.signature):
        raise InvalidSignature(details={"alg": token.signature.algorithm})

    check_audience(payload, options.audience)
    check_issuer(payload, options.issuer)


class TokenVerificationResponse(BaseModel):
    """Response model for token verification."""
    valid: bool
    claims: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    code: Optional[str] = None


class TokenValidator:
    """Token validation service."""

    def __init__(self, options: ValidationOptions, clock: Clock = time.time):
        self.options = options
        self.clock = clock
        self.logger = get_logger("signed_token.validator")

    @classmethod
    def from_settings(cls, signature: SignatureRule, settings: TokenSettings, clock: Clock = time.time) -> "TokenValidator":
        """Build a validator whose time/issuer/audience checks follow ``settings``."""
        options = ValidationOptions(
            signature=signature,
            expiration=settings.check_expiration,
            not_before=settings.check_not_before,
            issuer=IssuerRule.exactly_one(settings.issuer) if settings.issuer else IssuerRule.skip(),
            audience=AudienceRule.exactly_one(settings.audience) if settings.audience else AudienceRule.skip(),
        )
        return cls(options, clock=clock)

    @staticmethod
    def _strip_bearer(token: str) -> str:
        if token.startswith("Bearer "):
            return token[7:]
        return token

    def validate_text(self, token: str) -> Token:
        """Parse and validate; raise the first ``TokenError`` encountered."""
        parsed = parse(self._strip_bearer(token))
        validate(parsed, self.options, self.clock)
        self.logger.info(
            "Token validated",
            alg=parsed.signature.algorithm,
            kid=parsed.header.get("kid"),
            iss=parsed.payload.get("iss")
        )
        return parsed

    def verify_token(self, token: str) -> TokenVerificationResponse:
        """Validate a token and report the outcome instead of raising."""
        try:
            parsed = self.validate_text(token)
        except TokenError as e:
            self.logger.warning("Token verification failed", code=e.code, error=e.message)
            return TokenVerificationResponse(
                valid=False,
                error=e.message,
                code=e.code
            )

        return TokenVerificationResponse(
            valid=True,
            claims=parsed.payload.to_dict()
        )

    def extract_claims(self, token: str) -> Dict[str, Any]:
        """Extract claims from a valid token."""
        return self.validate_text(token).payload.to_dict()
