"""
Service lifetime scopes.
"""

from enum import Enum


class ServiceScope(str, Enum):
    """Service lifetime scopes."""

    SINGLETON = "singleton"  # One instance per app lifecycle
    APP = "app"              # Alias for singleton
    REQUEST = "request"      # One instance per request scope
    TRANSIENT = "transient"  # New instance every resolve


# Scopes whose instances are cached by the container that resolved them
CACHEABLE_SCOPES = frozenset(("singleton", "app", "request"))

# Scopes that always resolve on the root (app) container
APP_SCOPES = frozenset(("singleton", "app"))


def normalize_scope(scope: "ServiceScope | str") -> str:
    """
    Return the plain string value of a scope.

    Raises:
        ValueError: If scope is not a known ServiceScope
    """
    return ServiceScope(scope).value
