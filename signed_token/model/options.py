"""
Validation options: which checks run and what they accept.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Protocol, Sequence, Tuple

from .keys import VerificationKey


class RuleKind(str, Enum):
    """How a rule is applied."""

    SKIP = "skip"
    EXACTLY_ONE = "exactly_one"
    ANY_OF = "any_of"
    ALL_OF = "all_of"
    SINGLE_KEY = "single_key"
    KEY_LIST = "key_list"
    RESOLVER = "resolver"


class KeyResolver(Protocol):
    """Maps the token's issuer (or ``None``) to candidate keys.

    The returned iterable is consumed lazily and abandoned at the first key
    that verifies, so it may be backed by a slow or paginated source.
    """

    def __call__(self, issuer: Optional[str]) -> Iterable[VerificationKey]:
        ...


def _strings(values: Sequence[str], what: str) -> Tuple[str, ...]:
    if isinstance(values, str):
        raise TypeError(f"{what} expects a sequence of strings, not a single string")
    values = tuple(values)
    if not all(isinstance(value, str) for value in values):
        raise TypeError(f"{what} expects strings")
    return values


@dataclass(frozen=True)
class IssuerRule:
    """Accepted ``iss`` values."""

    kind: RuleKind = RuleKind.SKIP
    values: Tuple[str, ...] = ()

    @classmethod
    def skip(cls) -> "IssuerRule":
        return cls(RuleKind.SKIP)

    @classmethod
    def exactly_one(cls, issuer: str) -> "IssuerRule":
        return cls(RuleKind.EXACTLY_ONE, _strings([issuer], "exactly_one"))

    @classmethod
    def any_of(cls, issuers: Sequence[str]) -> "IssuerRule":
        return cls(RuleKind.ANY_OF, _strings(issuers, "any_of"))


@dataclass(frozen=True)
class AudienceRule:
    """Accepted ``aud`` values."""

    kind: RuleKind = RuleKind.SKIP
    values: Tuple[str, ...] = ()

    @classmethod
    def skip(cls) -> "AudienceRule":
        return cls(RuleKind.SKIP)

    @classmethod
    def exactly_one(cls, audience: str) -> "AudienceRule":
        return cls(RuleKind.EXACTLY_ONE, _strings([audience], "exactly_one"))

    @classmethod
    def any_of(cls, audiences: Sequence[str]) -> "AudienceRule":
        return cls(RuleKind.ANY_OF, _strings(audiences, "any_of"))

    @classmethod
    def all_of(cls, audiences: Sequence[str]) -> "AudienceRule":
        return cls(RuleKind.ALL_OF, _strings(audiences, "all_of"))


@dataclass(frozen=True)
class SignatureRule:
    """Where verification keys come from."""

    kind: RuleKind = RuleKind.SKIP
    keys: Tuple[VerificationKey, ...] = ()
    resolver: Optional[KeyResolver] = None

    @classmethod
    def skip(cls) -> "SignatureRule":
        return cls(RuleKind.SKIP)

    @classmethod
    def single_key(cls, key: VerificationKey) -> "SignatureRule":
        if not isinstance(key, VerificationKey):
            raise TypeError("single_key expects a VerificationKey")
        return cls(RuleKind.SINGLE_KEY, keys=(key,))

    @classmethod
    def key_list(cls, keys: Iterable[VerificationKey]) -> "SignatureRule":
        keys = tuple(keys)
        if not all(isinstance(key, VerificationKey) for key in keys):
            raise TypeError("key_list expects VerificationKey items")
        return cls(RuleKind.KEY_LIST, keys=keys)

    @classmethod
    def from_resolver(cls, resolver: KeyResolver) -> "SignatureRule":
        if not callable(resolver):
            raise TypeError("resolver must be callable")
        return cls(RuleKind.RESOLVER, resolver=resolver)


@dataclass(frozen=True)
class ValidationOptions:
    """Checks applied by ``validate``, in a fixed order."""

    signature: SignatureRule
    expiration: bool = True
    not_before: bool = True
    issuer: IssuerRule = field(default_factory=IssuerRule.skip)
    audience: AudienceRule = field(default_factory=AudienceRule.skip)
