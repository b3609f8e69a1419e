import asyncio
import logging
from collections.abc import Callable

from echoclient.core.transport.flow import FlowControl


def get_remote_addr(transport: asyncio.BaseTransport) -> tuple[str, int] | None:
    info = transport.get_extra_info("peername")
    if isinstance(info, (list, tuple)) and len(info) >= 2:
        return str(info[0]), int(info[1])
    return None


class Connection:
    """
    Handler-facing view of a single TCP session.

    A Connection wraps the asyncio transport handed to the protocol and
    exposes the small surface a ConnectionHandler is allowed to use:
    write, flush, close. Writes are staged until `flush()` pushes them to
    the transport; if the transport has paused writing, the flush is
    deferred until FlowControl reports that writing resumed.

    Write and flush never raise. A failure is handed to `on_fault` on the
    next loop iteration, so the handler learns about it through its error
    callback rather than at the call site.

    The Connection does not own the session lifecycle. It is created by
    ClientProtocol in `connection_made` and becomes unusable once the
    transport is closed.
    """
    def __init__(
        self,
        transport: asyncio.Transport,
        flow: FlowControl,
        on_fault: Callable[[BaseException], None],
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._transport = transport
        self._flow = flow
        self._on_fault = on_fault
        self._loop = loop or asyncio.get_event_loop()
        self._pending: list[bytes] = []
        self._flush_scheduled = False
        self.remote_address = get_remote_addr(transport)
        self._logger = logging.getLogger("core.transport.connection")

    def __repr__(self) -> str:
        who = "%s:%d" % self.remote_address if self.remote_address else "?"
        return f"<Connection {who}>"

    @property
    def pending(self) -> int:
        """Number of bytes written but not flushed yet."""
        return sum(len(chunk) for chunk in self._pending)

    def write(self, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            self._report(TypeError(f"data must be bytes-like, got {type(data).__name__}"))
            return
        if self._transport.is_closing():
            self._report(ConnectionError("Cannot write to a closed connection"))
            return

        self._pending.append(bytes(data))

    def flush(self) -> None:
        if not self._pending:
            return

        if self._flow.write_paused:
            if not self._flush_scheduled:
                self._flush_scheduled = True
                self._flow.on_resume(self._flush_deferred)
            return

        data = b"".join(self._pending)
        self._pending.clear()
        try:
            self._transport.write(data)
        except Exception as exc:
            self._report(exc)

    def write_and_flush(self, data: bytes) -> None:
        self.write(data)
        self.flush()

    def close(self) -> None:
        self._pending.clear()
        self._transport.close()

    def is_closing(self) -> bool:
        return self._transport.is_closing()

    def _flush_deferred(self) -> None:
        self._flush_scheduled = False
        if not self._transport.is_closing():
            self.flush()

    def _report(self, exc: BaseException) -> None:
        self._logger.debug(f"{self!r} - Write failed: {exc}")
        self._loop.call_soon(self._on_fault, exc)
