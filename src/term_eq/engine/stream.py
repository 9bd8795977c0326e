import numpy as np
import numpy.typing as npt


class FrameReader:
    def __init__(self, samples: npt.NDArray[np.float32], size: int):
        """Walks one decoded channel in back-to-back, non-overlapping blocks of `size` samples.

        A block starting at cursor i is admitted only while i < len(samples) - size. The trailing block
        is never zero-padded; it is simply not read.
        """
        self.samples = np.asarray(samples)
        self.size = size
        self.cursor = 0

    @property
    def total_samples(self) -> int:
        return len(self.samples)

    @property
    def frame_count(self) -> int:
        """Number of frames a full pass yields."""
        limit = self.total_samples - self.size
        if limit <= 0:
            return 0
        return -(-limit // self.size)  # ceil(limit / size)

    def read(self) -> npt.NDArray[np.float32] | None:
        """Returns the next frame as a read-only view, or None once exhausted."""
        if self.cursor >= self.total_samples - self.size:
            return None
        frame = self.samples[self.cursor : self.cursor + self.size]
        frame = frame.view()
        frame.flags.writeable = False
        self.cursor += self.size
        return frame

    def __iter__(self):
        while True:
            frame = self.read()
            if frame is None:
                return
            yield frame
