"""Authentication providers."""

from .api_token import APITokenAuth

__all__ = ["APITokenAuth"]
