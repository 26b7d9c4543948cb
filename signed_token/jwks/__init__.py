"""
JWKS client package.

Retrieves and caches JSON Web Key Sets and exposes them as a key resolver
for ``SignatureRule.from_resolver``.

Key points:
- Keep network fetches resilient (timeouts, retries, caching).
- Cache keys for a reasonable TTL to avoid hammering the IdP.
- Keys are yielded lazily; verification stops at the first match.
"""

from .client import JWKSClient

__all__ = ["JWKSClient"]
