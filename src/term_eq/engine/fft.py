import numpy as np
import numpy.typing as npt

from term_eq.errors import InvalidSize
from term_eq.protocol import is_power_of_two


class RadixTwoFFT:
    def __init__(self, size: int):
        """Iterative radix-2 decimation-in-time FFT over a fixed power-of-two size.

        Complex buffers are interleaved float64 arrays of length 2 * size: index 2k holds the real part of
        value k and index 2k + 1 its imaginary part. Internally the same memory is viewed as complex128, so
        no copy is made between the two layouts.

        Args:
            size: Transform size. Must be a power of two, at least 2.

        Raises:
            InvalidSize: if size is not a power of two. Checked here once, never per transform.

        Example:
            >>> fft = RadixTwoFFT(1024)
            >>> data = fft.to_complex_array(samples)
            >>> out = fft.create_complex_array()
            >>> fft.transform(out, data)
        """
        if not is_power_of_two(size):
            raise InvalidSize(f"FFT size must be a power of two and bigger than 1: {size!r}")

        self.size = size
        self.stages = size.bit_length() - 1  # log2(size)

        # Bit-reversal table: position k of the permuted input holds input[rev[k]]
        idx = np.arange(size)
        rev = np.zeros(size, dtype=np.intp)
        for bit in range(self.stages):
            rev |= ((idx >> bit) & 1) << (self.stages - 1 - bit)
        self._bitrev = rev

        # Twiddle factors e^{-2*pi*i*k/N}, k = 0 .. N/2 - 1.
        # Stage with span m uses every (N/m)-th entry, so one table serves all stages.
        k = np.arange(size // 2)
        self._twiddles = np.exp(-2j * np.pi * k / size)

    def create_complex_array(self) -> npt.NDArray[np.float64]:
        """Returns a zeroed interleaved buffer of length 2 * size."""
        return np.zeros(2 * self.size, dtype=np.float64)

    def to_complex_array(self, samples, out=None) -> npt.NDArray[np.float64]:
        """Writes real samples into the real slots of an interleaved buffer; imaginary slots are zeroed."""
        if len(samples) != self.size:
            raise ValueError(f"expected {self.size} samples, got {len(samples)}")
        if out is None:
            out = self.create_complex_array()
        else:
            self._check_buffer(out, "out")
        out[0::2] = samples
        out[1::2] = 0.0
        return out

    def from_complex_array(self, buf) -> npt.NDArray[np.float64]:
        """Returns a copy of the real parts of an interleaved buffer."""
        self._check_buffer(buf, "buf")
        return np.array(buf[0::2])

    def transform(self, out, data) -> None:
        """Unnormalized forward DFT of data into out (both interleaved, length 2 * size).

        out may be the same array as data.
        """
        self._check_buffer(out, "out")
        self._check_buffer(data, "data")

        x = out.view(np.complex128)

        # 1. Bit-reversal permutation (fancy indexing copies first, so out is data is fine)
        x[:] = data.view(np.complex128)[self._bitrev]

        # 2. Butterfly stages: span 2, 4, ..., N. Each row of `blocks` is one butterfly group.
        span = 2
        while span <= self.size:
            half = span // 2
            w = self._twiddles[:: self.size // span]
            blocks = x.reshape(-1, span)
            odd = blocks[:, half:] * w
            even = blocks[:, :half]
            blocks[:, half:] = even - odd
            blocks[:, :half] += odd
            span *= 2

    def inverse_transform(self, out, data) -> None:
        """Inverse DFT of data into out, normalized by 1/size so it undoes transform()."""
        self._check_buffer(out, "out")
        self._check_buffer(data, "data")

        # ifft(X) = conj(fft(conj(X))) / N
        np.conjugate(data.view(np.complex128), out=out.view(np.complex128))
        self.transform(out, out)
        x = out.view(np.complex128)
        np.conjugate(x, out=x)
        x /= self.size

    def _check_buffer(self, buf, name):
        if not isinstance(buf, np.ndarray) or buf.dtype != np.float64 or buf.shape != (2 * self.size,):
            raise ValueError(f"'{name}' must be a float64 array of length {2 * self.size}")
        if not buf.flags.c_contiguous:
            raise ValueError(f"'{name}' must be contiguous")
