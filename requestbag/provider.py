"""
Service provider - registers RequestBag into a DI container.
"""

import logging

from .bag import RequestBag
from .di import ClassProvider, Container, ServiceScope

logger = logging.getLogger("requestbag.provider")


class RequestBagServiceProvider:
    """
    Registers RequestBag as a request-scoped service.

    Each request-scoped child container builds its own bag on first
    resolution and drops it when the child container shuts down.
    """

    def __init__(self, container: Container):
        self.container = container

    def register(self) -> None:
        if self.container.is_registered(RequestBag):
            logger.debug("RequestBag already registered on %r", self.container)
            return

        self.container.register(
            ClassProvider(RequestBag, scope=ServiceScope.REQUEST)
        )
        logger.debug("Registered RequestBag (scope=request) on %r", self.container)

    def boot(self) -> None:
        """No-op: the bag needs no setup once registered."""
        pass


def register_bag(container: Container) -> RequestBagServiceProvider:
    """
    Register and boot the RequestBag service provider.

    Example:
        >>> container = Container(scope="app")
        >>> register_bag(container)
        >>> request_container = container.create_request_scope()
        >>> bag = await request_container.resolve_async(RequestBag)
    """
    provider = RequestBagServiceProvider(container)
    provider.register()
    provider.boot()
    return provider
