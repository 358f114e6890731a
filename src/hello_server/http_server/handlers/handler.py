from dataclasses import dataclass, field


@dataclass
class Request:
    method: str
    # URL path without the query string.
    path: str
    headers: dict[str, str]
    # Peer address of the connection as seen by the server, "host:port".
    # The request body is not kept, the router reads and drops it.
    remote_addr: str


@dataclass
class Response:
    status_code: int = 200
    # A list and not a dict so the same header can have multiple values.
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    def add_header(self, name: str, value: str) -> None:
        """Adds the header value, keeps the values already added for the same name."""
        self.headers.append((name, value))

    def header_values(self, name: str) -> list[str]:
        """Returns all values of the header, header name is case-insensitive."""
        return [
            value
            for header_name, value in self.headers
            if header_name.lower() == name.lower()
        ]


class Handler:
    def handle(self, request: Request) -> Response:
        """Handles an incoming HTTP request and returns a response.

        Any exception raised by the handler will result in a 500 Internal Server Error
        being returned to the client with the exception message in the response body.
        """
        raise NotImplementedError("Handler subclasses must implement handle method.")
