"""
Signature verification and signing.
"""

from .engine import candidate_keys, token_issuer, verify
from .registry import ALGORITHMS, Algorithm, get_algorithm
from .signer import sign, sign_claims

__all__ = [
    "candidate_keys",
    "token_issuer",
    "verify",
    "ALGORITHMS",
    "Algorithm",
    "get_algorithm",
    "sign",
    "sign_claims",
]
