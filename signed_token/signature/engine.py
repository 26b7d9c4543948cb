"""
Signature verification engine.

Resolves candidate keys from a ``SignatureRule`` and tries them in order
until one verifies. Offering a key of the wrong family is a failed trial,
not an error, so a key list may freely mix kinds (and old and new keys
during rotation).
"""

from typing import Iterator, Optional

from ..codec import JsonObject
from ..model.claims import string_claim
from ..model.keys import VerificationKey
from ..model.options import RuleKind, SignatureRule
from ..model.token import Token
from ..shared.logging import get_logger
from .registry import get_algorithm

logger = get_logger("signed_token.signature")


def token_issuer(payload: JsonObject) -> Optional[str]:
    """The ``iss`` claim, which must be a string when present."""
    return string_claim(payload, "iss")


def candidate_keys(rule: SignatureRule, issuer: Optional[str]) -> Iterator[VerificationKey]:
    """Lazily produce the keys a rule offers for ``issuer``."""
    if rule.kind in (RuleKind.SINGLE_KEY, RuleKind.KEY_LIST):
        yield from rule.keys
    elif rule.kind is RuleKind.RESOLVER:
        yield from rule.resolver(issuer)
    elif rule.kind is not RuleKind.SKIP:
        raise ValueError(f"not a signature rule: {rule.kind}")


def verify(token: Token, rule: SignatureRule) -> bool:
    """
    Check the token's signature against the keys offered by ``rule``.

    Returns ``True`` on the first key that verifies and ``False`` when every
    candidate has been tried without success.

    Raises:
        UnsupportedAlgorithm: the algorithm is unknown or ``none``; raised
            before any key is resolved, and also under a skip rule.
        ClaimTypeError: ``iss`` is present but not a string.
    """
    algorithm = get_algorithm(token.signature.algorithm)

    if rule.kind is RuleKind.SKIP:
        return True

    issuer = token_issuer(token.payload)
    message = token.signature.message
    signature = token.signature.value

    trials = 0
    for key in candidate_keys(rule, issuer):
        trials += 1
        if not algorithm.accepts(key):
            logger.debug(
                "Skipping key of another family",
                alg=algorithm.name,
                key_kind=getattr(key, "kind", None),
                trial=trials
            )
            continue
        if algorithm.verify(key, message, signature):
            logger.debug("Signature verified", alg=algorithm.name, kid=getattr(key, "kid", None), trial=trials)
            return True

    logger.debug("No candidate key verified the signature", alg=algorithm.name, iss=issuer, trials=trials)
    return False
