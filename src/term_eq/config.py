from term_eq.protocol import validate_settings_or_raise

# ============================================================================
# INPUT CONFIGURATION
# ============================================================================

AUDIO_FILE = "./audiofile.wav"
"""
Path of the audio file to visualize when none is given on the command line.

Any format libsndfile can read works (wav, flac, ogg, ...).

Watch Out For:
  - mp3 support depends on the installed libsndfile version (>= 1.1.0)
  - The whole file is decoded into memory before the first frame is drawn
"""

CHANNEL = 0
"""
Index of the channel to analyze. Only one channel is ever analyzed, no mixing.

- 0: left (or the only channel of a mono file)
- 1: right

Watch Out For:
  - Asking for channel 1 of a mono file fails at startup
"""

# ============================================================================
# SPECTRAL ANALYSIS CONFIGURATION
# ============================================================================

FFT_SIZE = 1024
"""
Number of samples per frame, which is also the transform size. Must be a power of two.

Impact on the Display:
  - Bars per frame = FFT_SIZE / 2 (the mirrored half and the Nyquist bin are dropped)
  - Frame length (ms) = FFT_SIZE / sample_rate * 1000
  - 1024 @ 44.1kHz = 23.2ms of audio per frame, 512 bars
  - 256 @ 44.1kHz = 5.8ms of audio per frame, 128 bars (fits a terminal far better)

Watch Out For:
  - Frames do not overlap and no window function is applied
  - The trailing block shorter than FFT_SIZE is never drawn
"""

MAGNITUDE_SCALE = 10.0
"""
Multiplier from bin magnitude to bar length in characters.

bar = min(BAR_MAX_WIDTH, floor(magnitude * MAGNITUDE_SCALE))

Watch Out For:
  - Magnitudes are unnormalized (a full-scale sine peaks near FFT_SIZE / 2),
    so most musical bins saturate at the default scale
  - Must be positive
"""

BAR_MAX_WIDTH = 50
"""
Hard ceiling for a single bar, in characters. Loud bins saturate, nothing is rescaled.
"""

BAR_CHAR = "█"
"""
Character used to draw bars. Each bar is followed by one space.

Use "#" if the terminal font has no block elements.
"""

# ============================================================================
# PACING CONFIGURATION
# ============================================================================

CHUNK_DELAY_MS = 100
"""
Fixed delay between frames, in milliseconds.

The delay is added after each frame is drawn. It does not compensate for
processing time, so the real frame period is CHUNK_DELAY_MS + compute time
and the display runs slower than the audio.

Watch Out For:
  - Must be positive
  - Ctrl+C is honored at the next delay boundary
"""

SUMMARY_INTERVAL = 2.0
"""
Seconds between debug monitor summaries (only with --stats).
"""

LOG_LEVEL = "WARNING"
"""
Default logging level. Log records go to stderr so they never mix with the bars on stdout.
"""

DEFAULTS = {
    "fft_size": FFT_SIZE,
    "delay_ms": CHUNK_DELAY_MS,
    "bar_max_width": BAR_MAX_WIDTH,
    "magnitude_scale": MAGNITUDE_SCALE,
    "channel": CHANNEL,
    "bar_char": BAR_CHAR,
}


def build_settings(**overrides) -> dict:
    """Merges overrides over the defaults and validates the result once.

    Overrides set to None are ignored, so argparse namespaces can be passed through as-is.

    Raises:
        InvalidConfiguration: on unknown keys or out-of-range values.
        InvalidSize: if fft_size is not a power of two.
    """
    settings = dict(DEFAULTS)
    for key, value in overrides.items():
        if value is not None:
            settings[key] = value
    validate_settings_or_raise(settings)
    return settings
