"""
Token signing.

Produces tokens whose ``signature.message`` is the canonical serialization
of their header and payload, so ``to_text(sign(...))`` always verifies.
"""

import hmac
from typing import Any, Union

from cryptography.hazmat.primitives.asymmetric import ec, ed448, ed25519, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, decode_dss_signature

from ..codec import JsonObject
from ..model.keys import EC_CURVES, KeyKind
from ..model.token import SignatureInfo, Token, UnsignedToken
from ..serializer import to_bytes_unsigned
from .registry import get_algorithm

SigningKey = Union[bytes, str, ec.EllipticCurvePrivateKey, rsa.RSAPrivateKey,
                   ed25519.Ed25519PrivateKey, ed448.Ed448PrivateKey]


def _with_algorithm(header: JsonObject, algorithm: str) -> JsonObject:
    if "alg" not in header:
        return JsonObject((("alg", algorithm),) + tuple(header))
    if header.get("alg") != algorithm:
        raise ValueError(f"header alg {header.get('alg')!r} does not match {algorithm!r}")
    return header


def sign(unsigned: UnsignedToken, algorithm: str, key: SigningKey) -> Token:
    """
    Sign ``unsigned`` with ``algorithm``.

    ``alg`` is prepended to the header when absent and must match
    ``algorithm`` when present.

    Raises:
        UnsupportedAlgorithm: ``algorithm`` is not in the registry.
        TypeError: ``key`` is not a private key of the algorithm's family.
    """
    entry = get_algorithm(algorithm)
    header = _with_algorithm(unsigned.header, algorithm)
    message = to_bytes_unsigned(UnsignedToken(header=header, payload=unsigned.payload))

    if entry.key_kind is KeyKind.SYMMETRIC:
        if isinstance(key, str):
            key = key.encode("utf-8")
        if not isinstance(key, (bytes, bytearray)):
            raise TypeError(f"{algorithm} needs a byte secret")
        value = hmac.new(bytes(key), message, entry.hash_algorithm.name).digest()

    elif entry.key_kind is KeyKind.ELLIPTIC_CURVE:
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise TypeError(f"{algorithm} needs an EllipticCurvePrivateKey")
        if key.curve.name != EC_CURVES[entry.curve].name:
            raise TypeError(f"{algorithm} needs a key on {entry.curve}")
        der = key.sign(entry.digest(message), ec.ECDSA(Prehashed(entry.hash_algorithm)))
        r, s = decode_dss_signature(der)
        size = (key.curve.key_size + 7) // 8
        value = r.to_bytes(size, "big") + s.to_bytes(size, "big")

    elif entry.key_kind is KeyKind.RSA:
        if not isinstance(key, rsa.RSAPrivateKey):
            raise TypeError(f"{algorithm} needs an RSAPrivateKey")
        value = key.sign(entry.digest(message), padding.PKCS1v15(), Prehashed(entry.hash_algorithm))

    else:
        if not isinstance(key, (ed25519.Ed25519PrivateKey, ed448.Ed448PrivateKey)):
            raise TypeError(f"{algorithm} needs an Ed25519 or Ed448 private key")
        value = key.sign(message)

    return Token(
        header=header,
        payload=unsigned.payload,
        signature=SignatureInfo(algorithm=algorithm, value=value, message=message),
    )


def sign_claims(header: Any, payload: Any, algorithm: str, key: SigningKey) -> Token:
    """Convenience wrapper taking plain mappings."""
    return sign(UnsignedToken(header=header, payload=payload), algorithm, key)
