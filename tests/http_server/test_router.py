import unittest
from types import MappingProxyType

from testing import HTTPResult, ServerThreadContextManager, send_request

from hello_server.http_server.handlers.handler import Handler, Request, Response
from hello_server.http_server.route import Route


class EchoPathHandler(Handler):
    def __init__(self, name: str):
        self._name: str = name

    def handle(self, request: Request) -> Response:
        response: Response = Response()
        response.add_header("X-Handler", self._name)
        response.add_header("X-Path", request.path)
        response.add_header("X-Multi", "first")
        response.add_header("X-Multi", "second")
        response.body = request.method.encode("utf-8")
        return response


class FailingHandler(Handler):
    def handle(self, request: Request) -> Response:
        raise ValueError("handler failed")


def _routes() -> MappingProxyType:
    return MappingProxyType(
        {
            Route(verb=None, path="/"): EchoPathHandler("root"),
            Route(verb=None, path="/api/"): EchoPathHandler("api"),
            Route(verb="POST", path="/api/exact"): EchoPathHandler("exact"),
            Route(verb="GET", path="/fail"): FailingHandler(),
        }
    )


def _exact_routes() -> MappingProxyType:
    return MappingProxyType({Route(verb="GET", path="/only"): EchoPathHandler("only")})


class TestRouter(unittest.TestCase):
    def test_most_specific_route_wins(self):
        with ServerThreadContextManager(routes=_routes()) as server:
            root: HTTPResult = send_request(server.port, path="/other")
            api: HTTPResult = send_request(server.port, path="/api/items")
            exact: HTTPResult = send_request(
                server.port, method="POST", path="/api/exact", body=b"payload"
            )

        self.assertEqual(root.headers["X-Handler"], "root")
        self.assertEqual(api.headers["X-Handler"], "api")
        self.assertEqual(exact.headers["X-Handler"], "exact")
        self.assertEqual(exact.body, b"POST")

    def test_query_string_is_not_part_of_path(self):
        with ServerThreadContextManager(routes=_routes()) as server:
            result: HTTPResult = send_request(server.port, path="/api/items?a=1&b=2")

        self.assertEqual(result.headers["X-Path"], "/api/items")

    def test_repeated_headers_are_all_sent(self):
        with ServerThreadContextManager(routes=_routes()) as server:
            result: HTTPResult = send_request(server.port)

        self.assertEqual(result.headers.get_all("X-Multi"), ["first", "second"])

    def test_no_matching_route_returns_404(self):
        with ServerThreadContextManager(routes=_exact_routes()) as server:
            wrong_path: HTTPResult = send_request(server.port, path="/other")
            wrong_verb: HTTPResult = send_request(
                server.port, method="POST", path="/only"
            )

        self.assertEqual(wrong_path.status, 404)
        self.assertEqual(wrong_path.body, b"")
        self.assertEqual(wrong_verb.status, 404)

    def test_handler_exception_returns_500(self):
        with ServerThreadContextManager(routes=_routes()) as server:
            result: HTTPResult = send_request(server.port, path="/fail")

        self.assertEqual(result.status, 500)
        self.assertEqual(result.body, b"Internal Server Error: handler failed")


class TestRoute(unittest.TestCase):
    def test_subtree_route(self):
        route: Route = Route(verb=None, path="/")
        self.assertTrue(route.matches("GET", "/"))
        self.assertTrue(route.matches("DELETE", "/a/b"))

    def test_exact_route(self):
        route: Route = Route(verb="GET", path="/health")
        self.assertTrue(route.matches("GET", "/health"))
        self.assertFalse(route.matches("GET", "/health/live"))
        self.assertFalse(route.matches("POST", "/health"))

    def test_routes_are_hashable_dict_keys(self):
        routes = {Route(verb=None, path="/"): 1}
        self.assertEqual(routes[Route(verb=None, path="/")], 1)


if __name__ == "__main__":
    unittest.main()
