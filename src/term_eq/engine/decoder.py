import io
import logging

import librosa
import numpy as np
import numpy.typing as npt

from term_eq.errors import DecodeError, FileReadError, InvalidConfiguration

logger = logging.getLogger(__name__)


def read_audio_file(path) -> bytes:
    """Reads the whole source file into memory."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileReadError(f"cannot read audio file '{path}': {e}") from e


def decode_audio(data: bytes) -> tuple[npt.NDArray[np.float32], int]:
    """Decodes an encoded byte stream into per-channel float samples.

    Samples keep their native rate and are normalized to [-1, 1].

    Returns:
        (channels, sample_rate) where channels has shape (n_channels, n_samples), mono included.

    Raises:
        DecodeError: if the codec cannot parse the stream (empty input included).
    """
    if not data:
        raise DecodeError("cannot decode audio: empty input")
    try:
        y, sr = librosa.load(io.BytesIO(data), sr=None, mono=False)
    except Exception as e:
        raise DecodeError(f"cannot decode audio: {e}") from e

    channels = np.atleast_2d(np.asarray(y, dtype=np.float32))
    return channels, int(sr)


def select_channel(channels: npt.NDArray[np.float32], index: int) -> npt.NDArray[np.float32]:
    """Picks one channel; the others are ignored (no mixing)."""
    if not (0 <= index < channels.shape[0]):
        raise InvalidConfiguration(f"channel {index} out of range, file has {channels.shape[0]} channel(s)")
    return channels[index]


def load_channel(path, index: int = 0) -> tuple[npt.NDArray[np.float32], int]:
    """Reads, decodes and selects one channel. The single blocking decode done before the loop starts."""
    data = read_audio_file(path)
    logger.debug("Read %d bytes from %s", len(data), path)

    channels, sr = decode_audio(data)
    logger.info("Decoded %s: %d channel(s), %d samples @ %d Hz", path, channels.shape[0], channels.shape[1], sr)

    return select_channel(channels, index), sr
