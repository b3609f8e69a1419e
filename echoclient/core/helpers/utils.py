import asyncio
import contextlib
import logging
import signal
import sys
import threading
from typing import Generator

STOP_SIGNALS = (
    signal.SIGINT,
    signal.SIGTERM,
)

if sys.platform == "win32":
    STOP_SIGNALS += (signal.SIGBREAK,)


@contextlib.contextmanager
def stop_on_signals(loop: asyncio.AbstractEventLoop) -> Generator[asyncio.Event, None, None]:
    """
    Yield an event that is set, on `loop`, when a stop signal arrives.

    The event is always set from inside the loop so a loop blocked in
    select() with nothing scheduled still wakes up. Loops without
    add_signal_handler (Windows) get a plain signal handler that hands
    off through call_soon_threadsafe. Previous handlers are restored on
    exit. Outside the main thread no handler can be installed and the
    event is only set by the caller.
    """
    stop_event = asyncio.Event()
    logger = logging.getLogger("core.helpers.signals")

    if threading.current_thread() is not threading.main_thread():
        yield stop_event
        return

    def stop(sig: int) -> None:
        logger.info(f"Received {signal.Signals(sig).name}, closing connection")
        stop_event.set()

    attached: list[int] = []
    previous: dict[int, object] = {}
    for sig in STOP_SIGNALS:
        try:
            loop.add_signal_handler(sig, stop, sig)
            attached.append(sig)
        except NotImplementedError:
            previous[sig] = signal.signal(
                sig, lambda s, _frame: loop.call_soon_threadsafe(stop, s)
            )

    try:
        yield stop_event
    finally:
        for sig in attached:
            loop.remove_signal_handler(sig)
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )
