from .config import HELLO_BODY, REMOTE_ADDR_HEADER, RESPONSE_DELAY_SEC, ServerConfig
from .exceptions import HelloServerError, ServerStartupError
from .http_server.server import HelloHTTPServer

__all__ = [
    "HELLO_BODY",
    "REMOTE_ADDR_HEADER",
    "RESPONSE_DELAY_SEC",
    "HelloHTTPServer",
    "HelloServerError",
    "ServerConfig",
    "ServerStartupError",
]
