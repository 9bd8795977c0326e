"""
Contracts for the settings dict and for the visualization frames handed to the display.

Settings (every key required once merged over config.DEFAULTS):
- fft_size: int
    - Transform size and frame length in samples.
    - Power of two, >= 2.
- delay_ms: float
    - Fixed delay between frames, milliseconds. > 0.
- bar_max_width: int
    - Ceiling for a single bar, characters. > 0.
- magnitude_scale: float
    - Magnitude to bar length multiplier. > 0.
- channel: int
    - Channel index to analyze. >= 0 (upper bound checked after decoding).
- bar_char: str
    - Exactly one character.

Visualization frame:
- sequence of fft_size / 2 integers, each in 0 .. bar_max_width.

Validation runs once at startup (settings) or in tests/tooling (frames), never per frame in the loop.
Violations raise so a bad configuration is noticed before anything is drawn.
"""

import math
import threading

from term_eq.errors import InvalidConfiguration, InvalidSize

MIN_FFT_SIZE = 2

_ALLOWED_KEYS = {"fft_size", "delay_ms", "bar_max_width", "magnitude_scale", "channel", "bar_char"}


def _is_int(x):
    return isinstance(x, int) and not isinstance(x, bool)


def _is_number(x):
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def is_power_of_two(n) -> bool:
    """True for 2, 4, 8, ... (1 is rejected, a one-point transform has no usable bins)."""
    return _is_int(n) and n >= MIN_FFT_SIZE and (n & (n - 1)) == 0


def validate_fft_size_or_raise(n) -> None:
    if not is_power_of_two(n):
        raise InvalidSize(f"protocol: 'fft_size' must be a power of two >= {MIN_FFT_SIZE}: {n!r}")


def validate_settings_or_raise(settings: dict) -> None:
    """Validate a merged settings dict and raise on any violation.

    Raises:
        InvalidSize: if fft_size is not a power of two
        InvalidConfiguration: for unknown/missing keys, wrong types or non-positive values
    """
    if not isinstance(settings, dict):
        raise InvalidConfiguration("protocol: settings must be a dict")

    for k in settings.keys():
        if k not in _ALLOWED_KEYS:
            raise InvalidConfiguration(f"protocol: unexpected setting '{k}'")
    missing = _ALLOWED_KEYS - settings.keys()
    if missing:
        raise InvalidConfiguration(f"protocol: missing settings {sorted(missing)}")

    validate_fft_size_or_raise(settings["fft_size"])

    for key in ("delay_ms", "magnitude_scale"):
        v = settings[key]
        if not _is_number(v):
            raise InvalidConfiguration(f"protocol: '{key}' must be numeric")
        if not math.isfinite(v) or v <= 0:
            raise InvalidConfiguration(f"protocol: '{key}' must be positive and finite: {v}")

    # Pacer blocks on threading.Event.wait, which cannot take longer timeouts
    if settings["delay_ms"] / 1000.0 > threading.TIMEOUT_MAX:
        raise InvalidConfiguration(f"protocol: 'delay_ms' too large: {settings['delay_ms']}")

    w = settings["bar_max_width"]
    if not _is_int(w):
        raise InvalidConfiguration("protocol: 'bar_max_width' must be an integer")
    if w <= 0:
        raise InvalidConfiguration(f"protocol: 'bar_max_width' must be positive: {w}")

    c = settings["channel"]
    if not _is_int(c):
        raise InvalidConfiguration("protocol: 'channel' must be an integer")
    if c < 0:
        raise InvalidConfiguration(f"protocol: 'channel' must be >= 0: {c}")

    ch = settings["bar_char"]
    if not isinstance(ch, str) or len(ch) != 1:
        raise InvalidConfiguration(f"protocol: 'bar_char' must be a single character: {ch!r}")


def validate_frame_or_raise(bars, fft_size: int, max_width: int) -> None:
    """Validate one visualization frame against its settings.

    Raises:
        TypeError: if a bar is not an integer
        ValueError: on a wrong bar count or a bar outside 0 .. max_width
    """
    expected = fft_size // 2
    if len(bars) != expected:
        raise ValueError(f"protocol: frame must have {expected} bars, got {len(bars)}")
    for i, b in enumerate(bars):
        if not isinstance(b, int) and not hasattr(b, "__index__"):
            raise TypeError(f"protocol: 'bars[{i}]' must be an integer")
        b = int(b)
        if not (0 <= b <= max_width):
            raise ValueError(f"protocol: 'bars[{i}]' out of range (0..{max_width}): {b}")
