import asyncio
import logging

from echoclient.core.errors import ConnectError
from echoclient.core.models.config import ClientConfig
from echoclient.core.transport.protocol import ClientProtocol


class EchoClient:
    """
    Owns the lifecycle of one outgoing TCP connection.

    `run()` opens the connection with asyncio's create_connection, binding
    a ClientProtocol that dispatches transport events to the configured
    handler. It then waits until the session ends: the server closes the
    connection, the handler closes it after a fault, the stop event is set,
    or the optional run timeout expires.

    The client does not implement any application logic itself and never
    reconnects. A failed connect attempt is logged and raised as
    ConnectError.

    On shutdown, EchoClient closes the transport and waits for
    connection_lost, bounded by the graceful shutdown timeout.
    """
    def __init__(
        self,
        config: ClientConfig,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._config = config
        self._loop = loop or asyncio.get_event_loop()
        self._protocol: ClientProtocol | None = None
        self._logger = logging.getLogger("core.client")

    @property
    def address(self) -> str:
        return f"{self._config.host}:{self._config.port}"

    @property
    def protocol(self) -> ClientProtocol | None:
        return self._protocol

    def create_protocol(self) -> ClientProtocol:
        return ClientProtocol(handler=self._config.handler, loop=self._loop)

    async def connect(self) -> ClientProtocol:
        config = self._config
        try:
            _, protocol = await asyncio.wait_for(
                self._loop.create_connection(
                    self.create_protocol,
                    host=config.host,
                    port=config.port,
                ),
                timeout=config.connect_timeout,
            )
        except (OSError, asyncio.TimeoutError) as ex:
            self._logger.error(f"Connect failed to {self.address}: {ex!r}")
            raise ConnectError(self.address, ex) from ex

        self._logger.debug(f"Connected to {self.address}")
        self._protocol = protocol
        return protocol

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        protocol = await self.connect()

        waiters: set[asyncio.Future] = {protocol.closed}
        stop_task = None
        if stop_event is not None:
            stop_task = self._loop.create_task(stop_event.wait())
            waiters.add(stop_task)

        try:
            await asyncio.wait(
                waiters,
                timeout=self._config.run_timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            if stop_task is not None and not stop_task.done():
                stop_task.cancel()
            await self.shutdown()

    async def shutdown(self) -> None:
        protocol = self._protocol
        if protocol is None:
            return

        protocol.shutdown()
        try:
            await asyncio.wait_for(
                asyncio.shield(protocol.closed),
                timeout=self._config.timeout_graceful_shutdown,
            )
        except asyncio.TimeoutError:
            self._logger.error(
                f"Connection to {self.address} did not close within "
                f"{self._config.timeout_graceful_shutdown}s"
            )
