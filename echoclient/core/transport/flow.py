from collections.abc import Callable


class FlowControl:
    """
    Tracks the writable state of an asyncio transport.

    The transport calls `pause_writing()` when its write buffer crosses the
    high-water mark and `resume_writing()` once it drains below the
    low-water mark. Callbacks registered with `on_resume()` run once, the
    next time writing becomes possible again.
    """

    def __init__(self) -> None:
        self._waiters: list[Callable[[], None]] = []
        self.write_paused = False

    def on_resume(self, callback: Callable[[], None]) -> None:
        self._waiters.append(callback)

    def pause_writing(self) -> None:
        self.write_paused = True

    def resume_writing(self) -> None:
        if not self.write_paused:
            return

        self.write_paused = False
        waiters, self._waiters = self._waiters, []
        for callback in waiters:
            callback()
