"""Core infrastructure components for ccienv."""

from ccienv.core.provider import DEFAULT_HOST, ApiKeyAuth, CircleCIProvider

__all__ = ["DEFAULT_HOST", "ApiKeyAuth", "CircleCIProvider"]
