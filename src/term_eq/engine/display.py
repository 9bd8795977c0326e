import sys

from term_eq.config import BAR_CHAR
from term_eq.errors import RenderSinkError

# \033[2J = clear screen, \033[H = cursor home
CLEAR_SEQUENCE = "\033[2J\033[H"


def format_bars(bars, bar_char: str = BAR_CHAR) -> str:
    """Text form of one frame: every bar as a run of bar_char followed by a single space."""
    return "".join(bar_char * int(b) + " " for b in bars)


class ConsoleDisplay:
    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout

    def clear(self) -> None:
        try:
            self.stream.write(CLEAR_SEQUENCE)
        except (OSError, ValueError) as e:
            raise RenderSinkError(f"cannot clear display: {e}") from e

    def write_line(self, text: str) -> None:
        """Writes one line and flushes immediately for a smooth "live" feel."""
        try:
            self.stream.write(text + "\n")
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise RenderSinkError(f"cannot write to display: {e}") from e

    def close(self) -> None:
        """Flushes what is left; the stream itself belongs to the caller."""
        try:
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise RenderSinkError(f"cannot flush display: {e}") from e


class CaptureDisplay:
    """Headless display that records what would have been drawn."""

    def __init__(self, clock=None):
        self.clock = clock
        self.lines = []
        self.timestamps = []
        self.clear_count = 0
        self.closed = False

    def clear(self) -> None:
        self.clear_count += 1

    def write_line(self, text: str) -> None:
        self.lines.append(text)
        if self.clock is not None:
            self.timestamps.append(self.clock())

    def close(self) -> None:
        self.closed = True
