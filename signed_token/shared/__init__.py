"""
Shared utilities for signed-token.

Cross-cutting building blocks consumed by every part of the package:

- config: Settings via pydantic-settings
- logging: Structured logging via structlog
- errors: Error taxonomy with stable codes
- retry: Retry decorator for remote key-set fetches

Nothing here may import from the token modules to avoid import cycles.
"""
