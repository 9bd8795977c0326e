import numpy as np
import numpy.typing as npt

from term_eq.config import BAR_MAX_WIDTH, MAGNITUDE_SCALE
from term_eq.engine.fft import RadixTwoFFT


def magnitude_spectrum(spectrum: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Magnitudes of bins 0 .. N/2 - 1 of an interleaved spectrum of length 2N.

    The Nyquist bin and the mirrored upper half are dropped. NaN propagates.
    """
    bins = len(spectrum) // 4
    re = spectrum[0 : 2 * bins : 2]
    im = spectrum[1 : 2 * bins : 2]
    return np.sqrt(re * re + im * im)


def bar_lengths(
    magnitudes: npt.NDArray[np.float64],
    scale: float = MAGNITUDE_SCALE,
    max_width: int = BAR_MAX_WIDTH,
) -> npt.NDArray[np.int64]:
    """Maps magnitudes to bar lengths: min(max_width, floor(magnitude * scale)).

    The ceiling is a hard clamp, loud bins saturate. NaN maps to an empty bar and +inf saturates.
    """
    scaled = np.floor(np.asarray(magnitudes, dtype=np.float64) * scale)
    scaled = np.nan_to_num(scaled, nan=0.0, posinf=max_width, neginf=0.0)
    return np.clip(scaled, 0, max_width).astype(np.int64)


class SpectrumAnalyzer:
    def __init__(self, fft_size: int, scale: float = MAGNITUDE_SCALE, max_width: int = BAR_MAX_WIDTH):
        # DSP Setup (raises InvalidSize once, here)
        self.fft = RadixTwoFFT(fft_size)
        self.fft_size = fft_size
        self.scale = scale
        self.max_width = max_width

        # Scratch buffers, overwritten completely on every frame
        self.fft_input = self.fft.create_complex_array()
        self.fft_output = self.fft.create_complex_array()

    def process(self, frame) -> dict:
        """Runs one frame through transform, magnitude reduction and bar mapping.

        Returns:
            dict with "magnitudes" (N/2 floats) and "bars" (N/2 ints). Both are fresh arrays.
        """
        # 1. Real samples into the complex buffer, imaginary parts zeroed
        self.fft.to_complex_array(frame, out=self.fft_input)

        # 2. Transform
        self.fft.transform(self.fft_output, self.fft_input)

        # 3. Magnitudes (first half only)
        magnitudes = magnitude_spectrum(self.fft_output)

        # 4. Bars
        bars = bar_lengths(magnitudes, self.scale, self.max_width)

        return {"magnitudes": magnitudes, "bars": bars}
