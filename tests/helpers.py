"""
Test helper functions and factory methods for signed-token.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from signed_token import EdwardsKey, EllipticCurveKey, RsaKey, SymmetricKey

# jwt.io sample token, signed with SAMPLE_SECRET
SAMPLE_TOKEN = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkpvaG4gRG9lIiwiYWRtaW4iOnRydWUsImlhdCI6MTUxNjIzOTAyMn0"
    ".KMUFsIDTnFmyG3nMiGM6H9FNFUROf3wh7SmqJp-QV30"
)
SAMPLE_SECRET = "a-string-secret-at-least-256-bits-long"

HS256_SECRET = "unit-test-secret-that-is-at-least-32-bytes"
ISSUER = "https://idp.example.com/"


@dataclass
class KeyPair:
    """Private signing key plus the matching verification key."""

    algorithm: str
    private_key: Any
    public_key: Any


class KeyFactory:
    """Generate one key pair per algorithm."""

    @staticmethod
    def hs256(secret: str = HS256_SECRET) -> KeyPair:
        return KeyPair("HS256", secret, SymmetricKey(secret))

    @staticmethod
    def rs256(kid: Optional[str] = None) -> KeyPair:
        private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        return KeyPair("RS256", private_key, RsaKey(private_key.public_key(), kid=kid))

    @staticmethod
    def es256(kid: Optional[str] = None) -> KeyPair:
        private_key = ec.generate_private_key(ec.SECP256R1())
        return KeyPair("ES256", private_key, EllipticCurveKey("P-256", private_key.public_key(), kid=kid))

    @staticmethod
    def es256k(kid: Optional[str] = None) -> KeyPair:
        private_key = ec.generate_private_key(ec.SECP256K1())
        return KeyPair("ES256K", private_key, EllipticCurveKey("secp256k1", private_key.public_key(), kid=kid))

    @staticmethod
    def eddsa(kid: Optional[str] = None) -> KeyPair:
        private_key = ed25519.Ed25519PrivateKey.generate()
        return KeyPair("EdDSA", private_key, EdwardsKey("Ed25519", private_key.public_key(), kid=kid))


def mint_token(pair: KeyPair, payload: Dict[str, Any], headers: Optional[Dict[str, Any]] = None) -> str:
    """Sign ``payload`` with PyJWT so tests exercise a second implementation."""
    return jwt.encode(payload, pair.private_key, algorithm=pair.algorithm, headers=headers)


def default_claims(now: float, expires_in: int = 3600, **extra: Any) -> Dict[str, Any]:
    """Standard claims for a user token."""
    claims = {
        "iss": ISSUER,
        "sub": "user1",
        "aud": "access-layer",
        "iat": int(now),
        "exp": int(now) + expires_in,
    }
    claims.update(extra)
    return claims
