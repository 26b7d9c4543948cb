"""
Algorithm registry.

Maps each supported ``alg`` identifier to the key kind it accepts, the hash
it uses and its verification procedure. ``none`` is deliberately absent:
an unsigned token can never be looked up, whatever keys are offered.
"""

import hmac
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, encode_dss_signature

from ..model.keys import EdwardsKey, EllipticCurveKey, KeyKind, RsaKey, SymmetricKey, VerificationKey
from ..shared.errors import UnsupportedAlgorithm

# (algorithm, key, data, signature) -> bool; data is the digest when the
# algorithm prehashes, else the raw message
VerifyProcedure = Callable[["Algorithm", VerificationKey, bytes, bytes], bool]


@dataclass(frozen=True)
class Algorithm:
    """One registry entry."""

    name: str
    key_kind: KeyKind
    hash_algorithm: Optional[hashes.HashAlgorithm]
    prehash: bool
    procedure: VerifyProcedure
    curve: Optional[str] = None

    def accepts(self, key: VerificationKey) -> bool:
        """Whether ``key`` belongs to this algorithm's family (and curve)."""
        if getattr(key, "kind", None) is not self.key_kind:
            return False
        if self.curve is not None and getattr(key, "curve", None) != self.curve:
            return False
        return True

    def digest(self, message: bytes) -> bytes:
        hasher = hashes.Hash(self.hash_algorithm)
        hasher.update(message)
        return hasher.finalize()

    def verify(self, key: VerificationKey, message: bytes, signature: bytes) -> bool:
        """Run the procedure for an accepted key."""
        data = self.digest(message) if self.prehash else message
        return self.procedure(self, key, data, signature)


def _verify_hmac(algorithm: Algorithm, key: SymmetricKey, message: bytes, signature: bytes) -> bool:
    expected = hmac.new(key.secret, message, algorithm.hash_algorithm.name).digest()
    return hmac.compare_digest(expected, signature)


def _verify_ecdsa(algorithm: Algorithm, key: EllipticCurveKey, digest: bytes, signature: bytes) -> bool:
    # JWS carries r || s as fixed-width big-endian integers, not DER
    size = key.coordinate_size
    if len(signature) != 2 * size:
        return False
    r = int.from_bytes(signature[:size], "big")
    s = int.from_bytes(signature[size:], "big")
    try:
        key.public_key.verify(
            encode_dss_signature(r, s),
            digest,
            ec.ECDSA(Prehashed(algorithm.hash_algorithm))
        )
    except InvalidSignature:
        return False
    return True


def _verify_rsa_pkcs1(algorithm: Algorithm, key: RsaKey, digest: bytes, signature: bytes) -> bool:
    try:
        key.public_key.verify(signature, digest, padding.PKCS1v15(), Prehashed(algorithm.hash_algorithm))
    except InvalidSignature:
        return False
    return True


def _verify_eddsa(algorithm: Algorithm, key: EdwardsKey, message: bytes, signature: bytes) -> bool:
    try:
        key.public_key.verify(signature, message)
    except InvalidSignature:
        return False
    return True


ALGORITHMS: Mapping[str, Algorithm] = MappingProxyType({
    "HS256": Algorithm("HS256", KeyKind.SYMMETRIC, hashes.SHA256(), False, _verify_hmac),
    "ES256": Algorithm("ES256", KeyKind.ELLIPTIC_CURVE, hashes.SHA256(), True, _verify_ecdsa, curve="P-256"),
    "ES256K": Algorithm("ES256K", KeyKind.ELLIPTIC_CURVE, hashes.SHA256(), True, _verify_ecdsa, curve="secp256k1"),
    "RS256": Algorithm("RS256", KeyKind.RSA, hashes.SHA256(), True, _verify_rsa_pkcs1),
    "EdDSA": Algorithm("EdDSA", KeyKind.EDWARDS, None, False, _verify_eddsa),
})


def get_algorithm(name: str) -> Algorithm:
    """Look up an algorithm; unknown identifiers (including ``none``) raise."""
    algorithm = ALGORITHMS.get(name)
    if algorithm is None:
        raise UnsupportedAlgorithm(name)
    return algorithm
