"""
Request Bag Middleware - opens a request scope with its own bag.

For each request:
1. Creates a request-scoped child of the app container
2. Resolves the RequestBag in that child
3. Stores both in scope["state"]
4. Executes the wrapped app
5. Shuts the child container down, discarding the bag
"""

import logging
from typing import Any, Callable, Optional

from .bag import RequestBag
from .config import BagConfig
from .di import Container, LoggingDiagnosticListener
from .provider import register_bag

logger = logging.getLogger("requestbag.middleware")


class RequestBagMiddleware:
    """
    ASGI middleware that gives every HTTP request its own RequestBag.

    Usage:
        container = Container(scope="app")
        app = RequestBagMiddleware(app, container)

    Handlers read the bag with ``get_request_bag(scope)``.
    """

    def __init__(
        self,
        app: Callable,
        container: Container,
        config: Optional[BagConfig] = None,
    ):
        self.app = app
        self.container = container
        self.config = config or BagConfig()

        register_bag(container)
        if self.config.diagnostics and not container.diagnostics.has_listener(
            LoggingDiagnosticListener
        ):
            container.diagnostics.add_listener(LoggingDiagnosticListener())

    def _handles(self, scope_type: str) -> bool:
        if scope_type == "http":
            return True
        return scope_type == "websocket" and self.config.include_websockets

    async def __call__(self, scope: dict, receive: Callable, send: Callable):
        if not self._handles(scope["type"]):
            await self.app(scope, receive, send)
            return

        request_container = self.container.create_request_scope()
        bag = await request_container.resolve_async(RequestBag)

        if "state" not in scope:
            scope["state"] = {}
        scope["state"][self.config.state_key] = bag
        scope["state"]["di_container"] = request_container

        try:
            await self.app(scope, receive, send)
        finally:
            try:
                await request_container.shutdown()
            except Exception as cleanup_err:
                logger.debug("Container cleanup error (non-fatal): %s", cleanup_err)


def get_request_bag(scope: dict, key: str = "request_bag") -> Optional[RequestBag]:
    """
    Get the RequestBag stored in an ASGI scope.

    Returns:
        RequestBag or None if the scope was not handled by the middleware
    """
    state: Any = scope.get("state")
    if not state:
        return None
    return state.get(key)
