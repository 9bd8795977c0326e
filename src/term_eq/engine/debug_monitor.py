"""
Debug monitoring and performance tracking for the spectrum visualizer.

Tracks compute latency per frame and how the bars behave (saturation, silence),
logging a summary every few seconds.
"""

import logging
import time
from collections import deque

import numpy as np

from term_eq.config import BAR_MAX_WIDTH, SUMMARY_INTERVAL

logger = logging.getLogger(__name__)


class DebugMonitor:
    """
    Monitor for the per-frame pipeline, reporting at INFO level.

    Logs a summary line every N seconds with the following metrics:
    - FPS: Frames drawn per second of wall-clock time in this window (delay included).
    - Latency: Average compute time per frame in ms (extract to render, delay excluded), with the peak.
    - Saturated: Percentage of bars stuck at the width ceiling. Near 100% means the scale is too high.
    - Silence: Percentage of frames where every bar is empty.
    """

    def __init__(self, summary_interval: float = SUMMARY_INTERVAL, max_width: int = BAR_MAX_WIDTH, clock=time.monotonic):
        """
        Initializes the debug monitor.

        Args:
            summary_interval: Seconds between summaries.
            max_width: Bar ceiling, used to count saturated bars.
            clock: Clock in seconds.
        """
        self.summary_interval = summary_interval
        self.max_width = max_width
        self.clock = clock
        self.last_summary_time = clock()

        # Performance tracking
        self.frame_times = deque(maxlen=256)  # Rolling buffer of frame times in ms
        self.frame_count = 0
        self.total_frames = 0

        # Bar health
        self.saturation_samples = deque(maxlen=128)
        self.silence_count = 0

    def update(self, frame_time_ms: float, bars) -> None:
        """
        Updates monitor with the results from one frame.

        Args:
            frame_time_ms: Time to compute and render this frame in milliseconds.
            bars: Bar lengths drawn for this frame.
        """
        self.frame_count += 1
        self.total_frames += 1
        self.frame_times.append(frame_time_ms)

        bars = np.asarray(bars)
        if bars.size:
            self.saturation_samples.append(float(np.mean(bars >= self.max_width)) * 100)
            if not bars.any():
                self.silence_count += 1

        now = self.clock()
        if now - self.last_summary_time >= self.summary_interval:
            self._log_summary(now - self.last_summary_time)
            self.last_summary_time = now

    def _log_summary(self, elapsed: float) -> None:
        fps = self.frame_count / elapsed if elapsed > 0 else 0.0
        if self.frame_times:
            avg_latency = float(np.mean(self.frame_times))
            max_latency = float(np.max(self.frame_times))
        else:
            avg_latency = 0.0
            max_latency = 0.0
        saturated = float(np.mean(self.saturation_samples)) if self.saturation_samples else 0.0
        silence = self.silence_count / self.frame_count * 100 if self.frame_count else 0.0

        status = "OK"
        if saturated > 90:
            status = "SATURATED"
        elif silence > 90:
            status = "SILENCE"

        logger.info(
            "FPS: %5.1f | Latency: %5.2fms (max %5.2fms) | Saturated: %5.1f%% | Silence: %5.1f%% | Status: %s",
            fps,
            avg_latency,
            max_latency,
            saturated,
            silence,
            status,
        )

        # Reset counters for next interval
        self.frame_count = 0
        self.silence_count = 0
