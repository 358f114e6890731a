from pydantic import BaseModel, ConfigDict, Field

# Every request is delayed by this many seconds before the response is produced.
RESPONSE_DELAY_SEC: float = 1.0
HELLO_BODY: bytes = b"Hello, world!\n"
REMOTE_ADDR_HEADER: str = "X-Remote-Addr"


class ServerConfig(BaseModel):
    """Listen address of the server.

    The values are fixed. They are not read from command line flags or environment.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(default="0.0.0.0", description="Address to listen on")
    port: int = Field(default=5000, description="TCP port to listen on")

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"
