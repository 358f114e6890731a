from types import MappingProxyType
from typing import Any, Mapping

from .handlers.handler import Handler
from .handlers.hello import HELLO_PATH, HELLO_VERB, HelloHandler
from .route import Route
from .router import Router


def build_routes() -> Mapping[Route, Handler]:
    """Returns the routing table of the server.

    The table is read-only. It's created once at startup and shared by all request threads.
    """
    return MappingProxyType(
        {
            Route(verb=HELLO_VERB, path=HELLO_PATH): HelloHandler(),
        }
    )


class RouterFactory:
    """Creates a Router per connection, all Routers share the same routing table."""

    def __init__(self, routes: Mapping[Route, Handler], logger: Any):
        self._routes: Mapping[Route, Handler] = routes
        self._logger: Any = logger

    @property
    def routes(self) -> Mapping[Route, Handler]:
        return self._routes

    def __call__(self, *args, **kwargs) -> Router:
        # Called by the HTTP server for every accepted connection from the connection's thread.
        # So it has to be stateless and support multi-threading.
        return Router(self._routes, self._logger, *args, **kwargs)
