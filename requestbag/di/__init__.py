"""
Request Bag Dependency Injection

Minimal async-first DI used to hand out one RequestBag per request.

Key Features:
- Explicit scopes: singleton, app, request, transient
- Request-scoped child containers with isolated instance caches
- LIFO finalizers on container shutdown
- Optional diagnostics events routed to logging
"""

from .core import (
    Provider,
    ProviderMeta,
    Container,
    ResolveCtx,
)

from .providers import (
    ClassProvider,
    ValueProvider,
)

from .scopes import ServiceScope

from .diagnostics import (
    DIDiagnostics,
    DIEvent,
    DIEventType,
    LoggingDiagnosticListener,
)

from .errors import (
    DIError,
    ProviderNotFoundError,
)

__all__ = [
    # Core types
    "Provider",
    "ProviderMeta",
    "Container",
    "ResolveCtx",

    # Providers
    "ClassProvider",
    "ValueProvider",

    # Scopes
    "ServiceScope",

    # Diagnostics
    "DIDiagnostics",
    "DIEvent",
    "DIEventType",
    "LoggingDiagnosticListener",

    # Errors
    "DIError",
    "ProviderNotFoundError",
]
