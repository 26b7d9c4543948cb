"""
Typed projections of the registered header parameters and payload claims.
"""

from dataclasses import dataclass
from typing import Any, FrozenSet, Optional, Tuple, Union

from ..codec import JsonObject
from ..shared.errors import ClaimTypeError, FormatError

_MISSING = object()


@dataclass(frozen=True)
class StandardHeader:
    """Registered JOSE header parameters."""

    alg: str
    typ: Optional[str] = None
    cty: Optional[str] = None
    kid: Optional[str] = None
    x5c: Optional[Tuple[str, ...]] = None
    x5u: Optional[str] = None
    crit: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class StandardPayload:
    """Registered claims; times are float seconds since the epoch."""

    iss: Optional[str] = None
    sub: Optional[str] = None
    aud: Optional[Union[str, Tuple[str, ...]]] = None
    exp: Optional[float] = None
    nbf: Optional[float] = None
    iat: Optional[float] = None
    jti: Optional[str] = None

    @property
    def audiences(self) -> FrozenSet[str]:
        if self.aud is None:
            return frozenset()
        if isinstance(self.aud, str):
            return frozenset((self.aud,))
        return frozenset(self.aud)


def string_claim(fields: JsonObject, name: str) -> Optional[str]:
    value = fields.get(name, _MISSING)
    if value is _MISSING:
        return None
    if not isinstance(value, str):
        raise ClaimTypeError(name, "a string")
    return value


def string_list_claim(fields: JsonObject, name: str) -> Optional[Tuple[str, ...]]:
    value = fields.get(name, _MISSING)
    if value is _MISSING:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ClaimTypeError(name, "an array of strings")
    return tuple(value)


def numeric_claim(fields: JsonObject, name: str) -> Optional[float]:
    """Read a NumericDate claim; integers and floats both become ``float``."""
    value = fields.get(name, _MISSING)
    if value is _MISSING:
        return None
    # bool is an int subclass but never a NumericDate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ClaimTypeError(name, "a number")
    try:
        return float(value)
    except OverflowError as exc:
        raise ClaimTypeError(name, "a number within float range") from exc


def audience_claim(fields: JsonObject) -> Optional[Union[str, Tuple[str, ...]]]:
    """Read ``aud``; an absent or null claim reads as ``None``."""
    value = fields.get("aud")
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise ClaimTypeError("aud", "a string or an array of strings")


def parse_standard_header(fields: JsonObject) -> StandardHeader:
    """Project a header object onto ``StandardHeader``.

    Raises:
        FormatError: ``alg`` is absent.
        ClaimTypeError: a registered parameter has the wrong shape.
    """
    if "alg" not in fields:
        raise FormatError("header is missing 'alg'", {"claim": "alg"})

    return StandardHeader(
        alg=string_claim(fields, "alg"),
        typ=string_claim(fields, "typ"),
        cty=string_claim(fields, "cty"),
        kid=string_claim(fields, "kid"),
        x5c=string_list_claim(fields, "x5c"),
        x5u=string_claim(fields, "x5u"),
        crit=string_list_claim(fields, "crit"),
    )


def parse_standard_payload(fields: JsonObject) -> StandardPayload:
    """Project a payload object onto ``StandardPayload``."""
    return StandardPayload(
        iss=string_claim(fields, "iss"),
        sub=string_claim(fields, "sub"),
        aud=audience_claim(fields),
        exp=numeric_claim(fields, "exp"),
        nbf=numeric_claim(fields, "nbf"),
        iat=numeric_claim(fields, "iat"),
        jti=string_claim(fields, "jti"),
    )
