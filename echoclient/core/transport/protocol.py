import asyncio
import logging

from echoclient.core.ports.handler import ConnectionHandler
from echoclient.core.transport.connection import Connection
from echoclient.core.transport.flow import FlowControl


class ClientProtocol(asyncio.Protocol):
    """
    Adapts asyncio's transport callbacks to a ConnectionHandler for a
    single outgoing TCP connection.

    When the connection is made, ClientProtocol creates a FlowControl and a
    Connection around the transport and notifies the handler that the
    connection is established. Every chunk passed to `data_received` is
    forwarded as is: no buffering, framing or reassembly happens here, so the
    handler observes exactly the chunk boundaries produced by the transport.

    Faults reach the handler through `on_error`. A fault is either an
    exception raised by the handler while processing a chunk, a write
    failure reported by the Connection, or a non-clean `connection_lost`.
    Only the first fault is dispatched; after it, the protocol drops any
    further events for the connection.

    The `closed` future resolves once the transport is gone, which lets
    EchoClient wait for the end of the session.
    """
    def __init__(
        self,
        handler: ConnectionHandler,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._transport: asyncio.Transport = None   # type: ignore[assignment]
        self._flow: FlowControl = None  # type: ignore[assignment]
        self.connection: Connection = None  # type: ignore[assignment]

        self._handler = handler
        self._loop = loop or asyncio.get_event_loop()
        self._failed = False
        self.closed: asyncio.Future[None] = self._loop.create_future()
        self._logger = logging.getLogger("core.transport.protocol")

    @property
    def failed(self) -> bool:
        return self._failed

    def connection_made(self, transport: asyncio.Transport) -> None:  # type: ignore[override]
        self._transport = transport
        self._flow = FlowControl()
        self.connection = Connection(
            transport=transport,
            flow=self._flow,
            on_fault=self.fault,
            loop=self._loop,
        )
        self._logger.debug(f"{self.connection!r} - Connection made")

        try:
            self._handler.on_connection_established(self.connection)
        except Exception as exc:
            self.fault(exc)

    def connection_lost(self, exc: Exception | None) -> None:
        self._logger.debug(f"{self.connection!r} - Connection lost")

        if self._flow is not None:
            self._flow.resume_writing()
        if exc is not None:
            self.fault(exc)

        if not self.closed.done():
            self.closed.set_result(None)

    def eof_received(self) -> None:
        pass

    def data_received(self, data: bytes) -> None:
        if self._failed:
            return

        try:
            self._handler.on_data_received(self.connection, bytes(data))
        except Exception as exc:
            self.fault(exc)

    def pause_writing(self) -> None:
        self._flow.pause_writing()

    def resume_writing(self) -> None:
        self._flow.resume_writing()

    def fault(self, exc: BaseException) -> None:
        if self._failed:
            self._logger.debug(f"{self.connection!r} - Ignoring fault after failure: {exc}")
            return

        self._failed = True
        try:
            self._handler.on_error(self.connection, exc)
        except Exception as ex:
            self._logger.error(f"Error handler failed: {ex}", exc_info=ex)
            self.shutdown()

    def shutdown(self) -> None:
        if self._transport is not None:
            self._transport.close()
