"""
requestbag - request-scoped key/value storage for ASGI applications.

Example:
    >>> from requestbag import RequestBag
    >>> bag = RequestBag()
    >>> bag.add("a", "x").add("b", "")
    RequestBag({'a': 'x', 'b': ''})
    >>> bag.has("b"), bag.exists("b")
    (False, True)
"""

__version__ = "0.1.0"

from .bag import RequestBag, is_empty_value
from .accessor import RequestBagAccessor
from .config import BagConfig, ConfigError
from .middleware import RequestBagMiddleware, get_request_bag
from .provider import RequestBagServiceProvider, register_bag

__all__ = [
    "RequestBag",
    "is_empty_value",
    "RequestBagAccessor",
    "BagConfig",
    "ConfigError",
    "RequestBagMiddleware",
    "get_request_bag",
    "RequestBagServiceProvider",
    "register_bag",
]
