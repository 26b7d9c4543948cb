"""
Token value objects.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from ..codec import JsonObject

Fields = Union[JsonObject, Mapping[str, Any]]


def _as_object(value: Fields) -> JsonObject:
    if isinstance(value, JsonObject):
        return value
    if isinstance(value, Mapping):
        return JsonObject.from_mapping(value)
    return JsonObject(value)


@dataclass(frozen=True)
class UnsignedToken:
    """Header and payload claims, in their original order."""

    header: JsonObject
    payload: JsonObject

    def __post_init__(self):
        object.__setattr__(self, "header", _as_object(self.header))
        object.__setattr__(self, "payload", _as_object(self.payload))

    @property
    def algorithm(self) -> Any:
        """The raw ``alg`` header value, if any."""
        return self.header.get("alg")


@dataclass(frozen=True)
class SignatureInfo:
    """Signature bytes and the exact message they were computed over.

    ``message`` is the ASCII text ``<header>.<payload>`` as it appeared in
    the token; ``value`` is the raw (decoded) signature.
    """

    algorithm: str
    value: bytes = field(repr=False)
    message: bytes = field(repr=False)


@dataclass(frozen=True)
class Token(UnsignedToken):
    """A parsed or freshly signed token.

    ``signature.algorithm`` must equal the header's ``alg``; verification
    trusts ``signature.algorithm`` and never re-reads the header.
    """

    signature: SignatureInfo

    def __post_init__(self):
        super().__post_init__()
        if not isinstance(self.signature, SignatureInfo):
            raise TypeError("Token requires a SignatureInfo")
        if self.header.get("alg") != self.signature.algorithm:
            raise ValueError(
                f"signature algorithm {self.signature.algorithm!r} does not match header alg {self.header.get('alg')!r}"
            )

    @property
    def unsigned(self) -> UnsignedToken:
        return UnsignedToken(header=self.header, payload=self.payload)
