"""
Shared fixtures for signed-token tests.
"""

import pytest

from helpers import KeyFactory

FIXED_NOW = 1_700_000_000.0


@pytest.fixture
def now():
    """Fixed wall-clock time used by validation tests."""
    return FIXED_NOW


@pytest.fixture
def clock(now):
    """Clock returning the fixed time."""
    return lambda: now


@pytest.fixture(scope="session")
def hs256_pair():
    return KeyFactory.hs256()


@pytest.fixture(scope="session")
def rs256_pair():
    return KeyFactory.rs256(kid="rsa-1")


@pytest.fixture(scope="session")
def es256_pair():
    return KeyFactory.es256(kid="ec-1")


@pytest.fixture(scope="session")
def es256k_pair():
    return KeyFactory.es256k(kid="k1-1")


@pytest.fixture(scope="session")
def eddsa_pair():
    return KeyFactory.eddsa(kid="ed-1")


@pytest.fixture(scope="session")
def all_pairs(hs256_pair, rs256_pair, es256_pair, es256k_pair, eddsa_pair):
    """One key pair per supported algorithm."""
    return [hs256_pair, rs256_pair, es256_pair, es256k_pair, eddsa_pair]
