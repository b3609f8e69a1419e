class EchoClientError(Exception):
    """Base class for errors raised by the echo client."""


class ConnectError(EchoClientError):
    """The TCP connection to the server could not be established."""

    def __init__(self, address: str, cause: BaseException) -> None:
        super().__init__(f"Unable to connect to {address}: {cause}")
        self.address = address
        self.cause = cause
