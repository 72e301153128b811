"""
Provider implementations for different instantiation strategies.
"""

from typing import Any, Dict, Optional, Type, TypeVar
import inspect

from .core import ProviderMeta, ResolveCtx, token_to_key
from .errors import DIError
from .scopes import normalize_scope


T = TypeVar("T")


class ClassProvider:
    """
    Provider that instantiates a class by resolving constructor dependencies.

    Every ``__init__`` parameter without a default must carry a type
    annotation; the annotation is the token resolved from the container.
    Parameters with a default are resolved optionally.
    """

    __slots__ = ("_meta", "_cls", "_dependencies")

    def __init__(
        self,
        cls: Type[T],
        scope: str = "app",
        tags: tuple[str, ...] = (),
    ):
        self._cls = cls
        self._dependencies = self._extract_dependencies(cls)
        self._meta = ProviderMeta(
            name=cls.__name__,
            token=token_to_key(cls),
            scope=normalize_scope(scope),
            tags=tags,
            module=cls.__module__,
            qualname=cls.__qualname__,
        )

    @property
    def meta(self) -> ProviderMeta:
        return self._meta

    @property
    def cls(self) -> Type:
        return self._cls

    async def instantiate(self, ctx: ResolveCtx) -> Any:
        """Instantiate class by resolving dependencies."""
        resolved_deps = {}
        for dep_name, dep_info in self._dependencies.items():
            resolved_deps[dep_name] = await ctx.container.resolve_async(
                dep_info["token"],
                optional=dep_info["optional"],
            )

        return self._cls(**resolved_deps)

    async def shutdown(self) -> None:
        """No-op (instances handle their own shutdown)."""
        pass

    def _extract_dependencies(self, cls: Type) -> Dict[str, Dict[str, Any]]:
        """Map __init__ parameter names to dependency info."""
        deps: Dict[str, Dict[str, Any]] = {}

        if cls.__init__ is object.__init__:
            return deps

        try:
            sig = inspect.signature(cls.__init__)
        except ValueError:
            return deps

        try:
            type_hints = inspect.get_annotations(cls.__init__, eval_str=True)
        except Exception:
            type_hints = {}

        for param_name, param in sig.parameters.items():
            if param_name in ("self", "cls"):
                continue

            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            annotation = type_hints.get(param_name, param.annotation)
            has_default = param.default is not inspect.Parameter.empty

            if annotation is inspect.Parameter.empty:
                if has_default:
                    continue
                raise DIError(
                    f"Missing type annotation for parameter '{param_name}' "
                    f"in {cls.__qualname__}.__init__"
                )

            deps[param_name] = {"token": annotation, "optional": has_default}

        return deps

    def __repr__(self) -> str:
        return f"ClassProvider({self._cls.__qualname__}, scope={self._meta.scope!r})"


class ValueProvider:
    """Provider that returns a pre-bound object."""

    __slots__ = ("_meta", "_value")

    def __init__(
        self,
        value: Any,
        token: Type | str,
        name: Optional[str] = None,
        scope: str = "singleton",
        tags: tuple[str, ...] = (),
    ):
        self._value = value
        self._meta = ProviderMeta(
            name=name or "value",
            token=token_to_key(token),
            scope=normalize_scope(scope),
            tags=tags,
        )

    @property
    def meta(self) -> ProviderMeta:
        return self._meta

    async def instantiate(self, ctx: ResolveCtx) -> Any:
        return self._value

    async def shutdown(self) -> None:
        pass
