"""
Unit tests for the JWKS client.
"""

import httpx
import pytest
from structlog.testing import capture_logs

from signed_token import JWKSClient, KeySetError, SignatureRule, parse, verify
from signed_token.shared.config import TokenSettings
from signed_token.shared.retry import RetryConfig

from helpers import ISSUER, mint_token

JWKS_URL = "https://idp.example.com/.well-known/jwks.json"


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class JwksServer:
    """httpx transport handler serving a configurable JWKS document."""

    def __init__(self, document=None, status_code: int = 200):
        self.document = document if document is not None else {"keys": []}
        self.status_code = status_code
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(str(request.url))
        if isinstance(self.document, bytes):
            return httpx.Response(self.status_code, content=self.document)
        return httpx.Response(self.status_code, json=self.document)


@pytest.fixture
def fake_clock():
    """Clock the tests can advance."""
    return FakeClock()


@pytest.fixture
def server(rs256_pair, es256_pair):
    """JWKS endpoint publishing the RSA and EC test keys."""
    return JwksServer({"keys": [rs256_pair.public_key.to_jwk(), es256_pair.public_key.to_jwk()]})


@pytest.fixture
def jwks_client(server, fake_clock):
    """JWKS client wired to the fake endpoint without retry delays."""
    client = JWKSClient(
        JWKS_URL,
        cache_ttl=300,
        retry_config=RetryConfig(max_attempts=2, base_delay=0, jitter=False),
        client=httpx.Client(transport=httpx.MockTransport(server)),
        clock=fake_clock,
    )
    yield client
    client.close()


class TestJWKSClient:
    """Test cases for JWKSClient."""

    def test_get_keys(self, jwks_client, server):
        """Test fetching and converting a key set."""
        keys = jwks_client.get_keys(JWKS_URL)

        # Assertions
        assert [key.kid for key in keys] == ["rsa-1", "ec-1"]
        assert server.requests == [JWKS_URL]

    def test_cache_hit(self, jwks_client, server, fake_clock):
        """Test that fresh documents are served from cache."""
        jwks_client.get_keys(JWKS_URL)
        fake_clock.now += 299
        jwks_client.get_keys(JWKS_URL)

        assert len(server.requests) == 1

    def test_cache_expiry(self, jwks_client, server, fake_clock):
        """Test that documents are refetched after the TTL."""
        jwks_client.get_keys(JWKS_URL)
        fake_clock.now += 300
        jwks_client.get_keys(JWKS_URL)

        assert len(server.requests) == 2

    def test_invalidate(self, jwks_client, server):
        """Test that invalidate forces a refetch."""
        jwks_client.get_keys(JWKS_URL)
        jwks_client.invalidate()
        jwks_client.get_keys(JWKS_URL)

        assert len(server.requests) == 2

    def test_stale_cache_on_failure(self, jwks_client, server, fake_clock):
        """Test that a failed refresh falls back to the cached document."""
        first = jwks_client.get_keys(JWKS_URL)
        server.status_code = 503
        fake_clock.now += 301

        assert jwks_client.get_keys(JWKS_URL) == first
        assert len(server.requests) == 3

    def test_failure_without_cache(self, jwks_client, server):
        """Test that a failed first fetch raises KeySetError after retrying."""
        server.status_code = 500

        with pytest.raises(KeySetError) as exc_info:
            jwks_client.get_keys(JWKS_URL)

        assert exc_info.value.code == "KEY_SET_ERROR"
        assert exc_info.value.details == {"url": JWKS_URL}
        assert len(server.requests) == 2

    @pytest.mark.parametrize("document", [b"not json", [1, 2], {"keys": "nope"}, {"other": []}])
    def test_malformed_document(self, jwks_client, server, document):
        """Test that documents without a keys array are rejected."""
        server.document = document

        with pytest.raises(KeySetError):
            jwks_client.get_keys(JWKS_URL)

    def test_skips_unusable_and_encryption_keys(self, jwks_client, server, eddsa_pair):
        """Test that only usable signature keys are kept."""
        server.document = {"keys": [
            {"kty": "RSA", "use": "enc", "n": "AQAB", "e": "AQAB", "kid": "enc-1"},
            {"kty": "foo", "kid": "bad-1"},
            "not-a-key",
            dict(eddsa_pair.public_key.to_jwk(), use="sig"),
        ]}

        keys = jwks_client.get_keys(JWKS_URL)

        assert [key.kid for key in keys] == ["ed-1"]

    def test_skipped_keys_are_logged(self, server, fake_clock):
        """Test that every skipped JWK produces a warning naming its kid."""
        client = JWKSClient(JWKS_URL, client=httpx.Client(transport=httpx.MockTransport(server)), clock=fake_clock)
        document = {"keys": [
            {"kty": "RSA", "use": "enc", "n": "AQAB", "e": "AQAB", "kid": "enc-1"},
            {"kty": "foo", "kid": "bad-1"},
        ]}

        with capture_logs() as logs:
            keys = client.prepare_keys(document)

        warnings = [entry for entry in logs if entry["log_level"] == "warning"]
        assert keys == []
        assert [entry["kid"] for entry in warnings] == ["enc-1", "bad-1"]
        assert all(entry["event"] == "Skipping unusable JWK" for entry in warnings)
        assert "enc" in warnings[0]["error"]
        client.close()

    def test_per_issuer_urls(self, server, fake_clock):
        """Test that issuers can map to their own key set."""
        other_url = "https://other.example.com/jwks.json"
        client = JWKSClient(
            JWKS_URL,
            issuer_urls={"https://other.example.com/": other_url},
            client=httpx.Client(transport=httpx.MockTransport(server)),
            clock=fake_clock,
        )

        assert client.url_for("https://other.example.com/") == other_url
        assert client.url_for(ISSUER) == JWKS_URL
        assert client.url_for(None) == JWKS_URL

        list(client("https://other.example.com/"))
        assert server.requests == [other_url]

    def test_no_url_yields_nothing(self, server, fake_clock):
        """Test that an issuer without a key set yields no keys."""
        client = JWKSClient(client=httpx.Client(transport=httpx.MockTransport(server)), clock=fake_clock)

        assert list(client(ISSUER)) == []
        assert server.requests == []

    def test_as_resolver(self, jwks_client, rs256_pair, es256_pair):
        """Test verification with the client as a key resolver."""
        rule = SignatureRule.from_resolver(jwks_client)

        assert verify(parse(mint_token(rs256_pair, {"iss": ISSUER})), rule)
        assert verify(parse(mint_token(es256_pair, {"iss": ISSUER})), rule)

    def test_resolver_is_lazy(self, jwks_client, server, hs256_pair):
        """Test that the key set is only fetched when a signature is checked."""
        rule = SignatureRule.from_resolver(jwks_client)

        assert server.requests == []
        assert not verify(parse(mint_token(hs256_pair, {"sub": "user1"})), rule)
        assert server.requests == [JWKS_URL]

    def test_from_settings(self):
        """Test building a client from settings."""
        settings = TokenSettings(_env_file=None, jwks_url=JWKS_URL, jwks_cache_ttl=60, jwks_max_attempts=5)

        with JWKSClient.from_settings(settings) as client:
            assert client.jwks_url == JWKS_URL
            assert client.cache_ttl == 60
            assert client._retry_config.max_attempts == 5
