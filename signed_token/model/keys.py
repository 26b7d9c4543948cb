"""
Signature verification keys.

The set of key kinds is closed: symmetric secrets, elliptic-curve (ECDSA)
public keys, RSA public keys and Edwards-curve (EdDSA) public keys. Each
algorithm accepts exactly one kind; any other kind is a failed trial.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed448, ed25519, rsa
from jose.utils import base64_to_long, base64url_decode, base64url_encode, long_to_base64


class KeyKind(str, Enum):
    """Verification key families."""

    SYMMETRIC = "symmetric"
    ELLIPTIC_CURVE = "elliptic_curve"
    RSA = "rsa"
    EDWARDS = "edwards"


# JOSE curve id -> cryptography curve class
EC_CURVES: Dict[str, type] = {
    "P-256": ec.SECP256R1,
    "secp256k1": ec.SECP256K1,
}

EDWARDS_CURVES: Dict[str, type] = {
    "Ed25519": ed25519.Ed25519PublicKey,
    "Ed448": ed448.Ed448PublicKey,
}


class VerificationKey:
    """Base class of all verification keys."""

    kind: ClassVar[KeyKind]

    def to_jwk(self) -> Dict[str, Any]:
        raise NotImplementedError

    def _with_kid(self, jwk: Dict[str, Any]) -> Dict[str, Any]:
        kid = getattr(self, "kid", None)
        if kid is not None:
            jwk["kid"] = kid
        return jwk


@dataclass(frozen=True)
class SymmetricKey(VerificationKey):
    """Shared HMAC secret."""

    kind: ClassVar[KeyKind] = KeyKind.SYMMETRIC

    secret: bytes = field(repr=False)
    kid: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.secret, str):
            object.__setattr__(self, "secret", self.secret.encode("utf-8"))
        if not isinstance(self.secret, (bytes, bytearray)):
            raise TypeError("secret must be bytes or str")
        object.__setattr__(self, "secret", bytes(self.secret))

    def to_jwk(self) -> Dict[str, Any]:
        return self._with_kid({"kty": "oct", "k": base64url_encode(self.secret).decode("ascii")})


@dataclass(frozen=True)
class EllipticCurveKey(VerificationKey):
    """ECDSA public key on a named curve (``P-256`` or ``secp256k1``)."""

    kind: ClassVar[KeyKind] = KeyKind.ELLIPTIC_CURVE

    curve: str
    public_key: ec.EllipticCurvePublicKey = field(repr=False)
    kid: Optional[str] = None

    def __post_init__(self):
        curve_class = EC_CURVES.get(self.curve)
        if curve_class is None:
            raise ValueError(f"unsupported elliptic curve '{self.curve}'")
        if not isinstance(self.public_key, ec.EllipticCurvePublicKey):
            raise TypeError("public_key must be an EllipticCurvePublicKey")
        if self.public_key.curve.name != curve_class.name:
            raise ValueError(f"public key is on {self.public_key.curve.name}, not {self.curve}")

    @classmethod
    def from_coordinates(cls, curve: str, x: int, y: int, kid: Optional[str] = None) -> "EllipticCurveKey":
        curve_class = EC_CURVES.get(curve)
        if curve_class is None:
            raise ValueError(f"unsupported elliptic curve '{curve}'")
        public_key = ec.EllipticCurvePublicNumbers(x=x, y=y, curve=curve_class()).public_key()
        return cls(curve=curve, public_key=public_key, kid=kid)

    @classmethod
    def from_public_key(cls, public_key: ec.EllipticCurvePublicKey, kid: Optional[str] = None) -> "EllipticCurveKey":
        for curve, curve_class in EC_CURVES.items():
            if public_key.curve.name == curve_class.name:
                return cls(curve=curve, public_key=public_key, kid=kid)
        raise ValueError(f"unsupported elliptic curve '{public_key.curve.name}'")

    @property
    def x(self) -> int:
        return self.public_key.public_numbers().x

    @property
    def y(self) -> int:
        return self.public_key.public_numbers().y

    @property
    def coordinate_size(self) -> int:
        return (self.public_key.curve.key_size + 7) // 8

    def to_jwk(self) -> Dict[str, Any]:
        size = self.coordinate_size
        return self._with_kid({
            "kty": "EC",
            "crv": self.curve,
            "x": long_to_base64(self.x, size=size).decode("ascii"),
            "y": long_to_base64(self.y, size=size).decode("ascii"),
        })


@dataclass(frozen=True)
class RsaKey(VerificationKey):
    """RSA public key."""

    kind: ClassVar[KeyKind] = KeyKind.RSA

    public_key: rsa.RSAPublicKey = field(repr=False)
    kid: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.public_key, rsa.RSAPublicKey):
            raise TypeError("public_key must be an RSAPublicKey")

    @classmethod
    def from_numbers(cls, modulus: int, exponent: int, kid: Optional[str] = None) -> "RsaKey":
        return cls(public_key=rsa.RSAPublicNumbers(e=exponent, n=modulus).public_key(), kid=kid)

    @property
    def modulus(self) -> int:
        return self.public_key.public_numbers().n

    @property
    def exponent(self) -> int:
        return self.public_key.public_numbers().e

    def to_jwk(self) -> Dict[str, Any]:
        return self._with_kid({
            "kty": "RSA",
            "n": long_to_base64(self.modulus).decode("ascii"),
            "e": long_to_base64(self.exponent).decode("ascii"),
        })


EdwardsPublicKey = Union[ed25519.Ed25519PublicKey, ed448.Ed448PublicKey]


@dataclass(frozen=True)
class EdwardsKey(VerificationKey):
    """EdDSA public key (``Ed25519`` or ``Ed448``)."""

    kind: ClassVar[KeyKind] = KeyKind.EDWARDS

    curve: str
    public_key: EdwardsPublicKey = field(repr=False)
    kid: Optional[str] = None

    def __post_init__(self):
        key_class = EDWARDS_CURVES.get(self.curve)
        if key_class is None:
            raise ValueError(f"unsupported Edwards curve '{self.curve}'")
        if not isinstance(self.public_key, key_class):
            raise TypeError(f"public_key must be an {key_class.__name__}")

    @classmethod
    def from_bytes(cls, curve: str, point: bytes, kid: Optional[str] = None) -> "EdwardsKey":
        key_class = EDWARDS_CURVES.get(curve)
        if key_class is None:
            raise ValueError(f"unsupported Edwards curve '{curve}'")
        return cls(curve=curve, public_key=key_class.from_public_bytes(point), kid=kid)

    @classmethod
    def from_public_key(cls, public_key: EdwardsPublicKey, kid: Optional[str] = None) -> "EdwardsKey":
        for curve, key_class in EDWARDS_CURVES.items():
            if isinstance(public_key, key_class):
                return cls(curve=curve, public_key=public_key, kid=kid)
        raise ValueError("not an Edwards-curve public key")

    @property
    def point(self) -> bytes:
        return self.public_key.public_bytes(serialization.Encoding.Raw, serialization.PublicFormat.Raw)

    def to_jwk(self) -> Dict[str, Any]:
        return self._with_kid({
            "kty": "OKP",
            "crv": self.curve,
            "x": base64url_encode(self.point).decode("ascii"),
        })


def key_from_public_key(public_key: Any, kid: Optional[str] = None) -> VerificationKey:
    """Wrap a ``cryptography`` public key object."""
    if isinstance(public_key, rsa.RSAPublicKey):
        return RsaKey(public_key=public_key, kid=kid)
    if isinstance(public_key, ec.EllipticCurvePublicKey):
        return EllipticCurveKey.from_public_key(public_key, kid=kid)
    if isinstance(public_key, (ed25519.Ed25519PublicKey, ed448.Ed448PublicKey)):
        return EdwardsKey.from_public_key(public_key, kid=kid)
    raise ValueError(f"unsupported public key type {type(public_key).__name__}")


def key_from_pem(pem: Union[str, bytes], kid: Optional[str] = None) -> VerificationKey:
    """Load a PEM ``SubjectPublicKeyInfo`` into a verification key."""
    if isinstance(pem, str):
        pem = pem.encode("ascii")
    return key_from_public_key(serialization.load_pem_public_key(pem), kid=kid)


def _member(jwk: Mapping[str, Any], name: str) -> str:
    value = jwk.get(name)
    if not isinstance(value, str) or not value:
        raise ValueError(f"JWK member '{name}' must be a non-empty string")
    return value


def key_from_jwk(jwk: Mapping[str, Any]) -> VerificationKey:
    """Build a verification key from a JSON Web Key (RFC 7517) mapping.

    Raises:
        ValueError: unsupported ``kty``/``crv`` or malformed members.
    """
    kty = jwk.get("kty")
    kid = jwk.get("kid") if isinstance(jwk.get("kid"), str) else None

    if kty == "oct":
        return SymmetricKey(secret=base64url_decode(_member(jwk, "k").encode("ascii")), kid=kid)

    if kty == "RSA":
        return RsaKey.from_numbers(
            modulus=base64_to_long(_member(jwk, "n")),
            exponent=base64_to_long(_member(jwk, "e")),
            kid=kid
        )

    if kty == "EC":
        return EllipticCurveKey.from_coordinates(
            _member(jwk, "crv"),
            base64_to_long(_member(jwk, "x")),
            base64_to_long(_member(jwk, "y")),
            kid=kid
        )

    if kty == "OKP":
        return EdwardsKey.from_bytes(
            _member(jwk, "crv"),
            base64url_decode(_member(jwk, "x").encode("ascii")),
            kid=kid
        )

    raise ValueError(f"unsupported JWK key type '{kty}'")
