import io

import numpy as np
import pytest
import soundfile as sf

from term_eq.engine.decoder import decode_audio, load_channel, read_audio_file, select_channel
from term_eq.errors import DecodeError, FileReadError, InvalidConfiguration


def _wav_bytes(data: np.ndarray, sr: int = 8000) -> bytes:
    buf = io.BytesIO()
    sf.write(buf, data, sr, format="WAV", subtype="FLOAT")
    return buf.getvalue()


def test_decode_stereo_keeps_channels_apart() -> None:
    left = np.linspace(-0.5, 0.5, 100, dtype=np.float32)
    right = np.full(100, 0.25, dtype=np.float32)
    channels, sr = decode_audio(_wav_bytes(np.stack([left, right], axis=1)))

    assert sr == 8000
    assert channels.shape == (2, 100)
    assert channels.dtype == np.float32
    np.testing.assert_allclose(channels[0], left, atol=1e-6)
    np.testing.assert_allclose(channels[1], right, atol=1e-6)


def test_decode_mono_is_two_dimensional() -> None:
    channels, sr = decode_audio(_wav_bytes(np.zeros(50, dtype=np.float32), sr=22050))
    assert channels.shape == (1, 50)
    assert sr == 22050


@pytest.mark.parametrize("data", [b"", b"definitely not audio" * 10])
def test_decode_garbage(data: bytes) -> None:
    with pytest.raises(DecodeError):
        decode_audio(data)


def test_select_channel_out_of_range() -> None:
    channels = np.zeros((1, 10), dtype=np.float32)
    assert select_channel(channels, 0).shape == (10,)
    with pytest.raises(InvalidConfiguration):
        select_channel(channels, 1)


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileReadError):
        read_audio_file(tmp_path / "missing.wav")


def test_load_channel(tmp_path) -> None:
    path = tmp_path / "tone.wav"
    stereo = np.zeros((64, 2), dtype=np.float32)
    stereo[:, 1] = 0.5
    path.write_bytes(_wav_bytes(stereo, sr=16000))

    samples, sr = load_channel(path, 1)
    assert sr == 16000
    np.testing.assert_allclose(samples, 0.5)
