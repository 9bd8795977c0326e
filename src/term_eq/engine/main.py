import argparse
import contextlib
import logging
import sys

from term_eq.config import AUDIO_FILE, LOG_LEVEL, SUMMARY_INTERVAL, build_settings
from term_eq.errors import VisualizerError

from .debug_monitor import DebugMonitor
from .decoder import load_channel
from .display import ConsoleDisplay
from .visualizer import SpectrumVisualizer

logger = logging.getLogger(__name__)


def run_engine(audio_file=AUDIO_FILE, settings: dict | None = None, display=None, playback=False, stats=False) -> int:
    """Decodes the file once, then draws it frame by frame until the samples run out.

    Returns:
        Process exit code: 0 on natural exhaustion, 1 on any visualizer error, 130 on Ctrl+C.
    """
    display = display if display is not None else ConsoleDisplay()

    try:
        try:
            if settings is None:
                settings = build_settings()

            samples, sr = load_channel(audio_file, settings["channel"])

            with contextlib.ExitStack() as stack:
                if playback:
                    # pyaudio is an optional extra, only needed when asked for
                    from .playback import PlaybackContext

                    stack.enter_context(PlaybackContext())

                monitor = DebugMonitor(SUMMARY_INTERVAL, settings["bar_max_width"]) if stats else None
                visualizer = SpectrumVisualizer(samples, settings, display, monitor=monitor)

                logger.info(
                    "Visualizer active. %d bars per frame, %.1fms of audio per frame, %gms delay.",
                    settings["fft_size"] // 2,
                    settings["fft_size"] / sr * 1000.0,
                    settings["delay_ms"],
                )
                rendered = visualizer.run()
                logger.info("Finished after %d frame(s).", rendered)
        finally:
            display.close()
    except KeyboardInterrupt:
        logger.warning("Shutting down visualizer...")
        return 130
    except VisualizerError as e:
        logger.error("Error running visualizer: %s", e)
        return 1

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="term-eq", description="Text equalizer for an audio file.")
    parser.add_argument("audio_file", nargs="?", default=AUDIO_FILE, help=f"audio file to visualize (default: {AUDIO_FILE})")
    parser.add_argument("--fft-size", type=int, help="samples per frame, a power of two (default: 1024)")
    parser.add_argument("--delay-ms", type=float, help="delay between frames in ms (default: 100)")
    parser.add_argument("--bar-width", type=int, dest="bar_max_width", help="maximum bar length (default: 50)")
    parser.add_argument("--scale", type=float, dest="magnitude_scale", help="magnitude to bar multiplier (default: 10)")
    parser.add_argument("--channel", type=int, help="channel to analyze (default: 0)")
    parser.add_argument("--bar-char", help="character used to draw bars")
    parser.add_argument("--playback", action="store_true", help="open a PortAudio context for the run (needs pyaudio)")
    parser.add_argument("--stats", action="store_true", help="log FPS/latency summaries to stderr")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"logging level (default: {LOG_LEVEL}, INFO with --stats)",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    level = args.log_level or ("INFO" if args.stats else LOG_LEVEL)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(asctime)s %(levelname)-7s %(name)s: %(message)s")

    try:
        settings = build_settings(
            fft_size=args.fft_size,
            delay_ms=args.delay_ms,
            bar_max_width=args.bar_max_width,
            magnitude_scale=args.magnitude_scale,
            channel=args.channel,
            bar_char=args.bar_char,
        )
    except VisualizerError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    return run_engine(args.audio_file, settings, playback=args.playback, stats=args.stats)


if __name__ == "__main__":
    sys.exit(main())
