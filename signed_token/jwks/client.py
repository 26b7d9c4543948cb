"""
JWKS-backed key resolver.
"""

import threading
import time
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

import httpx

from ..model.keys import VerificationKey, key_from_jwk
from ..shared.config import TokenSettings
from ..shared.errors import KeySetError
from ..shared.logging import get_logger
from ..shared.retry import RetryConfig, RetryError, retry_on_exception


class JWKSClient:
    """Fetch and cache JSON Web Key Sets; usable as a ``KeyResolver``.

    Calling the client with a token's issuer yields the keys published at
    the issuer's JWKS URL (``issuer_urls``) or at the default ``jwks_url``.
    Documents are cached per URL for ``cache_ttl`` seconds; when a refresh
    fails, a stale cached document is used rather than failing validation.
    """

    def __init__(
        self,
        jwks_url: Optional[str] = None,
        *,
        issuer_urls: Optional[Mapping[str, str]] = None,
        cache_ttl: int = 3600,
        http_timeout: float = 5.0,
        retry_config: Optional[RetryConfig] = None,
        client: Optional[httpx.Client] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.jwks_url = jwks_url
        self.issuer_urls = dict(issuer_urls or {})
        self.cache_ttl = cache_ttl
        self.clock = clock
        self.logger = get_logger("signed_token.jwks")

        self._client = client or httpx.Client(timeout=http_timeout)
        self._owns_client = client is None
        self._retry_config = retry_config or RetryConfig(max_attempts=3, base_delay=0.5, max_delay=5.0)

        # url -> (fetched_at, keys)
        self._cache: Dict[str, Tuple[float, List[VerificationKey]]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: TokenSettings, **kwargs: Any) -> "JWKSClient":
        return cls(
            settings.jwks_url,
            cache_ttl=settings.jwks_cache_ttl,
            http_timeout=settings.jwks_http_timeout,
            retry_config=RetryConfig(
                max_attempts=settings.jwks_max_attempts,
                base_delay=settings.jwks_retry_base_delay,
            ),
            **kwargs
        )

    def __enter__(self) -> "JWKSClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __call__(self, issuer: Optional[str]) -> Iterator[VerificationKey]:
        url = self.url_for(issuer)
        if url is None:
            self.logger.warning("No JWKS URL for issuer", iss=issuer)
            return
        yield from self.get_keys(url)

    def url_for(self, issuer: Optional[str]) -> Optional[str]:
        if issuer is not None and issuer in self.issuer_urls:
            return self.issuer_urls[issuer]
        return self.jwks_url

    def get_keys(self, url: str) -> List[VerificationKey]:
        """Keys published at ``url``, from cache when fresh."""
        now = self.clock()
        with self._lock:
            cached = self._cache.get(url)
        if cached is not None and now - cached[0] < self.cache_ttl:
            return cached[1]

        try:
            document = self.fetch_raw(url)
        except KeySetError:
            if cached is not None:
                self.logger.warning("Using stale JWKS cache due to fetch failure", url=url)
                return cached[1]
            raise

        keys = self.prepare_keys(document)
        with self._lock:
            self._cache[url] = (now, keys)
        self.logger.info("JWKS refreshed successfully", url=url, keys_count=len(keys))
        return keys

    def fetch_raw(self, url: str) -> Dict[str, Any]:
        """GET a JWKS document, retrying transport and HTTP errors."""

        @retry_on_exception((httpx.HTTPError,), self._retry_config)
        def _fetch_jwks() -> httpx.Response:
            response = self._client.get(url)
            response.raise_for_status()
            return response

        try:
            response = _fetch_jwks()
        except RetryError as exc:
            raise KeySetError(f"failed to fetch JWKS: {exc.last_exception}", {"url": url}) from exc

        try:
            document = response.json()
        except ValueError as exc:
            raise KeySetError("failed to parse JWKS JSON", {"url": url}) from exc

        if not isinstance(document, dict) or not isinstance(document.get("keys"), list):
            raise KeySetError("malformed JWKS document", {"url": url})
        return document

    def prepare_keys(self, jwks: Mapping[str, Any]) -> List[VerificationKey]:
        """Convert the usable signing keys of a JWKS document."""
        keys: List[VerificationKey] = []
        for key_dict in jwks.get("keys", []):
            if not isinstance(key_dict, dict):
                continue
            use = key_dict.get("use")
            if use and use != "sig":
                self.logger.warning(
                    "Skipping unusable JWK",
                    kid=key_dict.get("kid"),
                    kty=key_dict.get("kty"),
                    error=f"use is {use!r}, not 'sig'"
                )
                continue
            try:
                keys.append(key_from_jwk(key_dict))
            except (TypeError, ValueError) as exc:
                self.logger.warning(
                    "Skipping unusable JWK",
                    kid=key_dict.get("kid"),
                    kty=key_dict.get("kty"),
                    error=str(exc)
                )
        return keys

    def invalidate(self) -> None:
        """Clear all caches."""
        with self._lock:
            self._cache.clear()
        self.logger.info("JWKS cache cleared")
