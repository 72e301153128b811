"""
Accessor - forwards bag operations to the bag of one request scope.

The accessor is bound explicitly to a request-scoped container instead of
looking one up globally, so code that needs the bag receives either the bag
itself or an accessor as a parameter.
"""

from typing import Any, Dict, Mapping

from .bag import RequestBag
from .di import Container


class RequestBagAccessor:
    """
    Resolves the request bag from a container and forwards calls to it.

    Mutators return the resolved bag, so chains continue on the bag:

        >>> accessor = RequestBagAccessor(request_container)
        >>> accessor.add("a", 1).add("b", 2)
        RequestBag({'a': 1, 'b': 2})
    """

    __slots__ = ("_container",)

    def __init__(self, container: Container):
        self._container = container

    @property
    def container(self) -> Container:
        return self._container

    def root(self) -> RequestBag:
        """Return the bag of the bound scope (same object on every call)."""
        return self._container.resolve(RequestBag)

    async def aroot(self) -> RequestBag:
        """Async variant of root() for use inside a running event loop."""
        return await self._container.resolve_async(RequestBag)

    def add(self, key: str, value: Any) -> RequestBag:
        return self.root().add(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        return self.root().get(key, default)

    def has(self, key: str) -> bool:
        return self.root().has(key)

    def exists(self, key: str) -> bool:
        return self.root().exists(key)

    def remove(self, key: str) -> RequestBag:
        return self.root().remove(key)

    def all(self) -> Dict[str, Any]:
        return self.root().all()

    def clear(self) -> RequestBag:
        return self.root().clear()

    def merge(self, data: Mapping) -> RequestBag:
        return self.root().merge(data)

    def __repr__(self) -> str:
        return f"RequestBagAccessor({self._container!r})"
