import enum
import logging
import time

from term_eq.engine.analyzer import SpectrumAnalyzer
from term_eq.engine.display import format_bars
from term_eq.engine.pacer import Pacer
from term_eq.engine.stream import FrameReader

logger = logging.getLogger(__name__)


class State(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"
    FAILED = "failed"


class SpectrumVisualizer:
    def __init__(self, samples, settings: dict, display, pacer: Pacer | None = None, monitor=None):
        """Drives extract -> transform -> reduce -> map -> render -> wait, one frame at a time.

        Args:
            samples: The decoded channel to visualize.
            settings: Validated settings (see config.build_settings).
            display: Anything with clear() and write_line(text).
            pacer: Inter-frame delay. Built from settings["delay_ms"] when omitted.
            monitor: Optional DebugMonitor fed with the compute time of every frame.
        """
        self.samples = samples
        self.settings = settings
        self.display = display
        self.pacer = pacer if pacer is not None else Pacer(settings["delay_ms"])
        self.monitor = monitor

        # Owns the scratch buffers reused by every frame
        self.analyzer = SpectrumAnalyzer(
            settings["fft_size"],
            scale=settings["magnitude_scale"],
            max_width=settings["bar_max_width"],
        )
        self.state = State.IDLE

    def frames(self):
        """Yields the bar lengths of every frame, without rendering or pacing."""
        for frame in FrameReader(self.samples, self.settings["fft_size"]):
            yield self.analyzer.process(frame)["bars"]

    def run(self) -> int:
        """Renders every full frame until the samples run out or stop() is called.

        Failures from the transform or the display propagate unchanged; nothing is retried.

        Returns:
            Number of frames rendered.
        """
        if self.state is not State.IDLE:
            raise RuntimeError(f"visualizer cannot run from state {self.state.value}")
        if self.pacer.cancelled:
            raise RuntimeError("visualizer was stopped before it ran")

        reader = FrameReader(self.samples, self.settings["fft_size"])
        bar_char = self.settings["bar_char"]
        rendered = 0

        logger.debug("Running %d frame(s) of %d samples", reader.frame_count, reader.size)
        self.state = State.RUNNING
        try:
            while True:
                t_start = time.perf_counter()

                frame = reader.read()
                if frame is None:
                    self.state = State.EXHAUSTED
                    break

                bars = self.analyzer.process(frame)["bars"]
                self.display.clear()
                self.display.write_line(format_bars(bars, bar_char))
                rendered += 1

                if self.monitor is not None:
                    self.monitor.update((time.perf_counter() - t_start) * 1000.0, bars)

                if not self.pacer.wait():
                    self.state = State.CANCELLED
                    break
        except KeyboardInterrupt:
            self.state = State.CANCELLED
            raise
        except Exception:
            self.state = State.FAILED
            raise

        logger.debug("Visualizer %s after %d frame(s)", self.state.value, rendered)
        return rendered

    def stop(self) -> None:
        """Ends the run at the next delay boundary. Calling it before run() makes run() refuse to start."""
        self.pacer.cancel()
