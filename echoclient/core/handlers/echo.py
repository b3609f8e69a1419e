import logging

from echoclient.core.transport.connection import Connection

DEFAULT_MESSAGE = "Netty rocks!"


class EchoClientHandler:
    """
    Sends a greeting as soon as the connection is up and logs whatever the
    server sends back, one log record per received chunk.

    The handler keeps no per-connection state and can be shared by any
    number of connections.
    """
    def __init__(self, message: str = DEFAULT_MESSAGE) -> None:
        self._payload = message.encode("utf-8")
        self._logger = logging.getLogger("core.handlers.echo")

    @property
    def payload(self) -> bytes:
        return self._payload

    def on_connection_established(self, connection: Connection) -> None:
        connection.write_and_flush(self._payload)

    def on_data_received(self, connection: Connection, data: bytes) -> None:
        # No reassembly: a multi-byte character split across chunks is
        # replaced rather than raising.
        text = data.decode("utf-8", errors="replace")
        self._logger.info(f"Client received: {text}")

    def on_error(self, connection: Connection, cause: BaseException) -> None:
        self._logger.error(f"{connection!r} - Transport fault: {cause}", exc_info=cause)
        connection.close()
