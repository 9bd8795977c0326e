"""Error kinds raised by the visualizer. None of them are retried; the entry point logs and exits."""


class VisualizerError(Exception):
    """Base class for every failure that aborts a run."""


class FileReadError(VisualizerError):
    """The source audio file could not be read."""


class DecodeError(VisualizerError):
    """The codec could not parse the audio byte stream."""


class InvalidConfiguration(VisualizerError, ValueError):
    """A setting is out of range. Raised once, before the loop starts."""


class InvalidSize(InvalidConfiguration):
    """Transform size is not a power of two (or is smaller than 2)."""


class RenderSinkError(VisualizerError):
    """The display failed to clear or write."""
