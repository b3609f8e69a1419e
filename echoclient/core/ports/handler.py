from typing import Protocol

from echoclient.core.transport.connection import Connection


class ConnectionHandler(Protocol):
    """
    Callback contract invoked by ClientProtocol for each connection.

    The three methods map to the lifecycle of a TCP session: the transport
    became writable, a chunk of bytes arrived, the transport reported a
    fault. For a given connection they are called sequentially on the event
    loop thread, never concurrently.

    Implementations must not block and must not keep a reference to the
    received data after `on_data_received` returns. A handler may be shared
    between connections, so per-connection state should not live on it.
    """

    def on_connection_established(self, connection: Connection) -> None:
        """Called exactly once, when the connection is ready for writing."""

    def on_data_received(self, connection: Connection, data: bytes) -> None:
        """
        Called once per chunk delivered by the transport.

        Chunk boundaries are whatever the transport produced; they do not
        follow application message boundaries. Chunks arrive in stream order.
        """

    def on_error(self, connection: Connection, cause: BaseException) -> None:
        """Called when the transport reports a fault."""
