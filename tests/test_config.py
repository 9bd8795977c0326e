import numpy as np
import pytest

from term_eq.config import DEFAULTS, build_settings
from term_eq.errors import InvalidConfiguration, InvalidSize
from term_eq.protocol import is_power_of_two, validate_frame_or_raise


def test_defaults() -> None:
    settings = build_settings()
    assert settings == {
        "fft_size": 1024,
        "delay_ms": 100,
        "bar_max_width": 50,
        "magnitude_scale": 10.0,
        "channel": 0,
        "bar_char": "█",
    }
    assert settings is not DEFAULTS


def test_none_overrides_are_ignored() -> None:
    settings = build_settings(fft_size=None, delay_ms=5, channel=None)
    assert settings["fft_size"] == 1024
    assert settings["delay_ms"] == 5


@pytest.mark.parametrize("size", [1000, 3, 1, 0, -8])
def test_bad_fft_size(size: int) -> None:
    with pytest.raises(InvalidSize):
        build_settings(fft_size=size)


@pytest.mark.parametrize(
    "overrides",
    [
        {"delay_ms": 0},
        {"delay_ms": -10},
        {"delay_ms": float("inf")},
        {"delay_ms": float("nan")},
        {"delay_ms": 1e13},
        {"magnitude_scale": 0.0},
        {"magnitude_scale": -1.0},
        {"magnitude_scale": float("inf")},
        {"bar_max_width": 0},
        {"bar_max_width": -5},
        {"bar_max_width": 12.5},
        {"channel": -1},
        {"bar_char": "##"},
        {"bar_char": ""},
        {"delay_ms": "fast"},
        {"colour": "red"},
    ],
)
def test_bad_settings(overrides: dict) -> None:
    with pytest.raises(InvalidConfiguration):
        build_settings(**overrides)


def test_is_power_of_two() -> None:
    assert [n for n in range(-2, 70) if is_power_of_two(n)] == [2, 4, 8, 16, 32, 64]


def test_validate_frame() -> None:
    validate_frame_or_raise(np.array([0, 50, 3, 7]), fft_size=8, max_width=50)
    with pytest.raises(ValueError):
        validate_frame_or_raise([0, 51, 3, 7], fft_size=8, max_width=50)
    with pytest.raises(ValueError):
        validate_frame_or_raise([0, 1, 2], fft_size=8, max_width=50)
    with pytest.raises(TypeError):
        validate_frame_or_raise([0, 1.5, 2, 3], fft_size=8, max_width=50)
