"""
Core DI types and the Container.

The container caches app-scoped instances on the root container and
request-scoped instances on the child created per request, so every
resolution inside one request scope returns the same object.
"""

from typing import (
    Any,
    Callable,
    Coroutine,
    Dict,
    List,
    Optional,
    Protocol,
    Type,
    TypeVar,
    runtime_checkable,
)
from dataclasses import dataclass, field
import asyncio
import logging
import time

from .diagnostics import DIDiagnostics, DIEventType
from .errors import ProviderNotFoundError
from .scopes import APP_SCOPES, CACHEABLE_SCOPES

logger = logging.getLogger("requestbag.di")

# Module-level cache: type -> "module.qualname" string
_type_key_cache: Dict[type, str] = {}


T = TypeVar("T")


def token_to_key(token: Any) -> str:
    """Convert a type or string token to its registry key."""
    if isinstance(token, str):
        return token

    if isinstance(token, type):
        key = _type_key_cache.get(token)
        if key is None:
            key = f"{token.__module__}.{token.__qualname__}"
            _type_key_cache[token] = key
        return key

    return str(token)


@dataclass(frozen=True, slots=True)
class ProviderMeta:
    """Provider metadata."""
    name: str
    token: str  # Type name or string key
    scope: str  # "singleton", "app", "request", "transient"
    tags: tuple[str, ...] = field(default_factory=tuple)
    module: str = ""
    qualname: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "token": self.token,
            "scope": self.scope,
            "tags": list(self.tags),
            "module": self.module,
            "qualname": self.qualname,
        }


class ResolveCtx:
    """
    Context for one resolution.

    Tracks the resolution stack for diagnostics.
    """
    __slots__ = ("container", "stack")

    def __init__(self, container: "Container"):
        self.container = container
        self.stack: List[str] = []

    def push(self, token: str) -> None:
        self.stack.append(token)

    def pop(self) -> None:
        self.stack.pop()

    def get_trace(self) -> List[str]:
        return self.stack.copy()


@runtime_checkable
class Provider(Protocol):
    """
    Provider protocol - how to instantiate a dependency.
    """

    @property
    def meta(self) -> ProviderMeta:
        ...

    async def instantiate(self, ctx: ResolveCtx) -> Any:
        ...

    async def shutdown(self) -> None:
        ...


class Container:
    """
    DI Container - manages provider instances and scopes.

    The root container is app-scoped. ``create_request_scope()`` returns a
    child that shares the provider registry but owns a fresh instance cache.
    """

    __slots__ = (
        "_providers",
        "_cache",
        "_scope",
        "_parent",
        "_finalizers",
        "_diagnostics",
    )

    def __init__(
        self,
        scope: str = "app",
        parent: Optional["Container"] = None,
        diagnostics: Optional[DIDiagnostics] = None,
    ):
        self._providers: Dict[str, Provider] = {}  # {cache_key: provider}
        self._cache: Dict[str, Any] = {}  # {cache_key: instance}
        self._scope = scope
        self._parent = parent
        self._finalizers: List[Callable[[], Coroutine]] = []  # LIFO cleanup
        self._diagnostics = diagnostics or DIDiagnostics()

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def parent(self) -> Optional["Container"]:
        return self._parent

    @property
    def diagnostics(self) -> DIDiagnostics:
        return self._diagnostics

    def register(self, provider: Provider, tag: Optional[str] = None) -> None:
        """
        Register a provider.

        Args:
            provider: Provider instance
            tag: Optional tag for disambiguation

        Raises:
            ValueError: If a different provider is already registered
                for the same token and tag
        """
        meta = provider.meta
        key = self._make_cache_key(meta.token, tag)

        existing = self._providers.get(key)
        if existing is not None:
            if existing == provider:
                return
            raise ValueError(
                f"Provider for {meta.token} (tag={tag}) already registered: {existing.meta.name}"
            )

        self._providers[key] = provider
        self._diagnostics.emit(
            DIEventType.REGISTRATION,
            token=meta.token,
            tag=tag,
            provider_name=meta.name,
        )

    def is_registered(self, token: Type | str, tag: Optional[str] = None) -> bool:
        """Check if a provider is registered for the token."""
        return self._lookup_provider(token_to_key(token), tag) is not None

    def resolve(
        self,
        token: Type[T] | str,
        *,
        tag: Optional[str] = None,
        optional: bool = False,
    ) -> T:
        """
        Resolve a dependency synchronously.

        Already cached instances are returned directly. Anything else is
        instantiated in a fresh event loop, which is not possible from
        inside a running loop.

        Raises:
            ProviderNotFoundError: If provider not found and not optional
            RuntimeError: If instantiation is needed inside a running loop
        """
        cache_key = self._make_cache_key(token_to_key(token), tag)
        if cache_key in self._cache:
            return self._cache[cache_key]

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.resolve_async(token, tag=tag, optional=optional))

        raise RuntimeError(
            "resolve() called from async context; use await resolve_async() instead"
        )

    async def resolve_async(
        self,
        token: Type[T] | str,
        *,
        tag: Optional[str] = None,
        optional: bool = False,
    ) -> T:
        """
        Resolve a dependency (primary resolution path).

        Args:
            token: Type or string key
            tag: Optional tag for disambiguation
            optional: If True, return None if not found instead of raising

        Raises:
            ProviderNotFoundError: If provider not found and not optional
        """
        token_key = token_to_key(token)
        cache_key = self._make_cache_key(token_key, tag)

        # Fast path. Cached objects may be falsy (an empty bag), so test membership.
        if cache_key in self._cache:
            return self._cache[cache_key]

        provider = self._lookup_provider(token_key, tag)
        if provider is None:
            if optional:
                return None
            self._raise_not_found(token_key, tag)

        # singleton/app instances live on the root container
        if self._parent is not None and provider.meta.scope in APP_SCOPES:
            return await self._parent.resolve_async(token, tag=tag, optional=optional)

        ctx = ResolveCtx(container=self)
        ctx.push(cache_key)
        start = time.perf_counter()

        try:
            instance = await provider.instantiate(ctx)
        except Exception as exc:
            self._diagnostics.emit(
                DIEventType.RESOLUTION_FAILURE,
                token=token_key,
                tag=tag,
                provider_name=provider.meta.name,
                duration=time.perf_counter() - start,
                error=exc,
            )
            raise
        finally:
            ctx.pop()

        if provider.meta.scope in CACHEABLE_SCOPES:
            self._cache[cache_key] = instance
            self._register_finalizer(instance)

        self._diagnostics.emit(
            DIEventType.RESOLUTION_SUCCESS,
            token=token_key,
            tag=tag,
            provider_name=provider.meta.name,
            duration=time.perf_counter() - start,
            metadata={"scope": self._scope},
        )
        return instance

    def create_request_scope(self) -> "Container":
        """
        Create a request-scoped child container.

        Providers and diagnostics are shared by reference; the instance
        cache and finalizers are fresh.
        """
        child = Container.__new__(Container)
        child._providers = self._providers
        child._cache = {}
        child._scope = "request"
        child._parent = self
        child._finalizers = []
        child._diagnostics = self._diagnostics
        return child

    async def shutdown(self) -> None:
        """
        Shutdown container - run finalizers in LIFO order and drop cached
        instances.
        """
        # Nothing to clean up for an untouched request container
        if self._scope == "request" and not self._finalizers and not self._cache:
            return

        self._diagnostics.emit(
            DIEventType.LIFECYCLE_SHUTDOWN,
            metadata={"scope": self._scope},
        )

        for finalizer in reversed(self._finalizers):
            try:
                await finalizer()
            except Exception as e:
                logger.error("Error during finalizer: %s", e)

        self._finalizers.clear()
        self._cache.clear()

    def _make_cache_key(self, token: str, tag: Optional[str]) -> str:
        if tag:
            return f"{token}#{tag}"
        return token

    def _lookup_provider(
        self,
        token: str,
        tag: Optional[str],
    ) -> Optional[Provider]:
        """Lookup provider in current container or parent."""
        key = self._make_cache_key(token, tag)
        if key in self._providers:
            return self._providers[key]

        if self._parent is not None:
            return self._parent._lookup_provider(token, tag)

        return None

    def _register_finalizer(self, instance: Any) -> None:
        if hasattr(instance, "__aexit__"):
            self._finalizers.append(
                lambda: instance.__aexit__(None, None, None)
            )
        elif hasattr(instance, "shutdown"):
            self._finalizers.append(instance.shutdown)

    def _raise_not_found(self, token: str, tag: Optional[str]) -> None:
        """Raise ProviderNotFoundError with similarly named candidates."""
        short_name = token.rsplit(".", 1)[-1]
        candidates = [key for key in self._providers if short_name in key]

        raise ProviderNotFoundError(
            token=token,
            tag=tag,
            candidates=candidates,
        )

    def __repr__(self) -> str:
        return (
            f"Container(scope={self._scope!r}, providers={len(self._providers)}, "
            f"cached={len(self._cache)})"
        )
