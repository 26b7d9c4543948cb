"""
Token validation package.

Combines time checks, signature verification and audience/issuer checks
into one pass/fail decision, plus the ``TokenValidator`` facade used by
services that authenticate bearer tokens.
"""

from .token_validator import TokenValidator, TokenVerificationResponse, validate

__all__ = ["TokenValidator", "TokenVerificationResponse", "validate"]
