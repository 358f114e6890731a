import http.server
import sys
import threading
from typing import Any, Callable

from ..config import ServerConfig
from ..exceptions import ServerStartupError


class _ThreadingHTTPServer(http.server.ThreadingHTTPServer):
    """Serves each connection in its own daemon thread, reports errors to the server logger."""

    # Binding a port that another process listens on must fail.
    allow_reuse_port = False

    def __init__(
        self,
        server_address: tuple[str, int],
        router_factory: Callable[..., Any],
        logger: Any,
    ):
        self._hello_logger: Any = logger
        super().__init__(server_address, router_factory)

    def handle_error(self, request, client_address):
        # Called from the connection thread when an exception escapes the Router.
        exc: BaseException | None = sys.exc_info()[1]
        if isinstance(exc, ConnectionError):
            # The client went away, nothing to deliver the response to.
            return
        self._hello_logger.error(
            "unexpected error while serving connection",
            client_address=client_address,
            exc_info=exc,
        )


class HelloHTTPServer:
    """HTTP server that dispatches every connection to its own thread."""

    def __init__(
        self,
        router_factory: Callable[..., Any],
        logger: Any,
        config: ServerConfig = ServerConfig(),
    ):
        """Binds the listen address from the config.

        Raises ServerStartupError if the address can't be bound.
        """
        self._logger: Any = logger.bind(module=__name__)
        try:
            self._httpd: _ThreadingHTTPServer = _ThreadingHTTPServer(
                (config.host, config.port), router_factory, self._logger
            )
        except OSError as e:
            raise ServerStartupError(config.address, e) from e
        self._running: bool = False
        self._started: threading.Event = threading.Event()

    @property
    def host(self) -> str:
        return self._httpd.server_address[0]

    @property
    def port(self) -> int:
        """Returns the bound port, it differs from the configured one if the configured one is 0."""
        return self._httpd.server_address[1]

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def wait_started(self, timeout: float | None = None) -> bool:
        """Blocks until start() is called from another thread.

        Returns False on timeout.
        """
        return self._started.wait(timeout)

    def start(self) -> None:
        """Starts the HTTP server in the current thread.

        Blocks until the server is stopped.
        """
        if self._running:
            raise RuntimeError("Server is already running.")

        self._running = True
        self._logger.info("HTTP server started", address=self.address)
        self._started.set()
        try:
            self._httpd.serve_forever()
        finally:
            self._running = False
            self._started.clear()
            self._logger.info("HTTP server stopped", address=self.address)

    def stop(self) -> None:
        """Stops the HTTP server and releases its resources.

        Blocks until the server is fully stopped.
        Does nothing if the server is not running.
        """
        if self._running:
            # self._running must be checked, otherwise shutdown() will deadlock.
            # shutdown() called right before serve_forever() starts is fine, serve_forever()
            # returns immediately then.
            self._httpd.shutdown()

        self._httpd.server_close()
