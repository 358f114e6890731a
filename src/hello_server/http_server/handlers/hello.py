import time

from ...config import HELLO_BODY, REMOTE_ADDR_HEADER, RESPONSE_DELAY_SEC
from .handler import Handler, Request, Response

HELLO_PATH: str = "/"
# Any HTTP method.
HELLO_VERB: None = None


class HelloHandler(Handler):
    """Responds with a fixed greeting after a fixed delay.

    The delay blocks only the thread serving the current request.
    Stateless, so a single instance is shared by all request threads.
    """

    def handle(self, request: Request) -> Response:
        time.sleep(RESPONSE_DELAY_SEC)
        response: Response = Response()
        response.add_header(REMOTE_ADDR_HEADER, request.remote_addr)
        response.body = HELLO_BODY
        return response
