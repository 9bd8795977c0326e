import threading
import time

from term_eq.config import CHUNK_DELAY_MS


class Pacer:
    def __init__(self, delay_ms: float = CHUNK_DELAY_MS, clock=time.monotonic):
        """Fixed inter-frame delay that can be cancelled from a signal handler or another thread.

        The delay is not adaptive: compute time is added on top of it, never subtracted.

        Args:
            delay_ms: Delay per wait() call, milliseconds.
            clock: Monotonic clock in seconds. The delay is guaranteed against this clock.
        """
        self.delay = delay_ms / 1000.0
        self.clock = clock
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def wait(self) -> bool:
        """Blocks for the configured delay.

        Returns:
            False if cancelled before or during the wait, True once the full delay has elapsed.
        """
        deadline = self.clock() + self.delay
        remaining = self.delay
        while remaining > 0:
            # Event.wait may wake a hair early, so loop until the clock agrees
            if self._cancelled.wait(remaining):
                return False
            remaining = deadline - self.clock()
        return not self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def reset(self) -> None:
        self._cancelled.clear()
