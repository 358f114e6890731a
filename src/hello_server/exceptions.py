class HelloServerError(Exception):
    """Base class for all hello server errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ServerStartupError(HelloServerError):
    """Raised when the server can't bind its listen address.

    I.e. when the port is already in use or binding it requires privileges.
    """

    def __init__(self, address: str, cause: OSError) -> None:
        super().__init__(f"Failed to listen on {address}: {cause}")
        self.address: str = address
        self.cause: OSError = cause
