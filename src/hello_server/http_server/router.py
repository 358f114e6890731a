import http.server
import urllib.parse
from typing import Any, Mapping

from .handlers.handler import Handler, Request, Response
from .remote_addr import format_remote_addr
from .route import Route

# Request bodies are never used by handlers, they are read in chunks of this size and dropped.
_DISCARD_CHUNK_SIZE: int = 64 * 1024


class _BadRequest(Exception):
    pass


class Router(http.server.BaseHTTPRequestHandler):
    """An HTTP request handler that routes the requests to appropriate handlers based on preconfigured routes.

    Requests with any HTTP method are routed, including non-standard ones.
    """

    # Allows keep-alive connections. Requires Content-Length in every response.
    protocol_version = "HTTP/1.1"

    def __init__(
        self,
        hello_routes: Mapping[Route, Handler],
        hello_logger: Any,
        *args,
        **kwargs,
    ):
        # All self.fields must be initialized before calling super().__init__() because it
        # handles the request. Prefixed with "hello_" to avoid name collisions with base class fields.
        self._hello_routes: Mapping[Route, Handler] = hello_routes
        self._hello_logger: Any = hello_logger.bind(module=__name__)
        super().__init__(*args, **kwargs)

    def __getattr__(self, name: str):
        # BaseHTTPRequestHandler dispatches a request with method X to self.do_X
        # and replies 501 if there's no such attribute.
        if name.startswith("do_"):
            return self._handle
        raise AttributeError(
            f"'{type(self).__name__}' object has no attribute '{name}'"
        )

    def _find_handler(self, request: Request) -> Handler | None:
        """Finds the handler of the most specific route matching the request.

        Doesn't raise any exceptions. Returns None if no handler is found.
        """
        best_route: Route | None = None
        for route in self._hello_routes.keys():
            if not route.matches(request.method, request.path):
                continue
            if best_route is None or len(route.path) > len(best_route.path):
                best_route = route

        if best_route is None:
            return None
        return self._hello_routes[best_route]

    def _content_length(self) -> int:
        """Returns Content-Length of the request, 0 if not set.

        Raises _BadRequest if the header value isn't a non-negative integer.
        """
        value: str | None = self.headers.get("Content-Length")
        if value is None:
            return 0
        value = value.strip()
        if not value.isdigit():
            raise _BadRequest(f"invalid Content-Length: {value!r}")
        return int(value)

    def _discard_body(self, content_length: int) -> None:
        """Reads the request body and drops it so the connection can serve the next request.

        Keeps at most one chunk of the body in memory.
        """
        remaining: int = content_length
        while remaining > 0:
            chunk: bytes = self.rfile.read(min(remaining, _DISCARD_CHUNK_SIZE))
            if not chunk:
                raise ConnectionResetError("client closed connection while sending body")
            remaining -= len(chunk)

    def _read_request(self) -> Request:
        content_length: int = self._content_length()
        if content_length == 0 and "Transfer-Encoding" in self.headers:
            # Chunked bodies are not supported, drop the connection after the response
            # so the unread body isn't parsed as the next request.
            self.close_connection = True
        self._discard_body(content_length)

        return Request(
            method=self.command,
            path=urllib.parse.urlsplit(self.path).path,
            headers=dict(self.headers.items()),
            remote_addr=format_remote_addr(self.client_address),
        )

    def _handle(self):
        try:
            request: Request = self._read_request()
        except ConnectionError:
            self.close_connection = True
            return
        except _BadRequest as e:
            # The rest of the connection can't be parsed reliably.
            self.close_connection = True
            self._send(Response(status_code=400, body=f"Bad Request: {e}".encode("utf-8")))
            return
        except Exception as e:
            self._internal_server_error(e)
            return

        handler: Handler | None = self._find_handler(request)
        if handler is None:
            self._hello_logger.error(
                "No handler found", verb=self.command, path=self.path
            )
            self._send(Response(status_code=404))
            return

        try:
            response: Response = handler.handle(request)
        except Exception as e:
            self._internal_server_error(e)
            return

        self._send(response)

    def _internal_server_error(self, exception: BaseException) -> None:
        message: str = f"Internal Server Error: {exception}"
        self._hello_logger.error(message, exc_info=exception)
        self._send(Response(status_code=500, body=message.encode("utf-8")))

    def _send(self, response: Response) -> None:
        """Writes the response to the client.

        The client might have disconnected already, the write failure is ignored then.
        """
        try:
            self.send_response(response.status_code)
            for header_name, header_value in response.headers:
                self.send_header(header_name, header_value)
            self.send_header("Content-Length", str(len(response.body)))
            if self.close_connection:
                self.send_header("Connection", "close")
            self.end_headers()
            # Responses to HEAD requests never have a body.
            if self.command != "HEAD":
                self.wfile.write(response.body)
        except ConnectionError:
            self.close_connection = True

    # Disable all default request logging done by BaseHTTPRequestHandler.
    def log_message(self, *args, **kwargs):
        pass

    def log_request(self, *args, **kwargs):
        pass

    def log_error(self, *args, **kwargs):
        pass
