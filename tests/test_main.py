import io
import logging

import numpy as np
import pytest
import soundfile as sf

from term_eq.config import build_settings
from term_eq.engine import main as entry
from term_eq.engine.display import CaptureDisplay


@pytest.fixture
def wav_file(tmp_path):
    path = tmp_path / "impulses.wav"
    data = np.zeros(10, dtype=np.float32)
    data[0] = 1.0
    data[4] = 0.5
    buf = io.BytesIO()
    sf.write(buf, data, 8000, format="WAV", subtype="FLOAT")
    path.write_bytes(buf.getvalue())
    return path


def test_run_engine_draws_every_frame(wav_file) -> None:
    display = CaptureDisplay()
    settings = build_settings(fft_size=4, delay_ms=1, bar_char="#")

    assert entry.run_engine(wav_file, settings, display=display) == 0
    assert display.lines == ["########## ########## ", "##### ##### "]
    assert display.closed


def test_run_engine_missing_file(tmp_path, caplog) -> None:
    display = CaptureDisplay()
    with caplog.at_level(logging.ERROR):
        code = entry.run_engine(tmp_path / "nope.wav", build_settings(delay_ms=1), display=display)
    assert code == 1
    assert "cannot read audio file" in caplog.text
    assert display.lines == []


def test_run_engine_bad_channel(wav_file) -> None:
    code = entry.run_engine(wav_file, build_settings(channel=3, delay_ms=1), display=CaptureDisplay())
    assert code == 1


def test_run_engine_ctrl_c(wav_file) -> None:
    class InterruptedDisplay(CaptureDisplay):
        def write_line(self, text):
            raise KeyboardInterrupt

    code = entry.run_engine(wav_file, build_settings(fft_size=4, delay_ms=1), display=InterruptedDisplay())
    assert code == 130


def test_main_rejects_bad_fft_size(wav_file, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        assert entry.main([str(wav_file), "--fft-size", "100"]) == 1
    assert "power of two" in caplog.text


def test_main_passes_settings_through(wav_file, monkeypatch) -> None:
    captured = {}

    def fake_run_engine(audio_file, settings, playback=False, stats=False):
        captured.update(audio_file=audio_file, settings=settings, playback=playback, stats=stats)
        return 0

    monkeypatch.setattr(entry, "run_engine", fake_run_engine)
    code = entry.main([str(wav_file), "--fft-size", "256", "--delay-ms", "20", "--bar-width", "30", "--scale", "2.5", "--stats"])

    assert code == 0
    assert captured["audio_file"] == str(wav_file)
    assert captured["settings"] == {
        "fft_size": 256,
        "delay_ms": 20.0,
        "bar_max_width": 30,
        "magnitude_scale": 2.5,
        "channel": 0,
        "bar_char": "█",
    }
    assert captured["stats"] is True
    assert captured["playback"] is False


def test_main_rejects_infinite_delay_before_drawing(tmp_path, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        assert entry.main([str(tmp_path / "never-read.wav"), "--delay-ms", "inf"]) == 1
    assert "'delay_ms' must be positive and finite" in caplog.text
