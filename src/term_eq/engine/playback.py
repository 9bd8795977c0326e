import logging

import pyaudio

logger = logging.getLogger(__name__)


class PlaybackContext:
    """PortAudio session opened for the duration of a run. No audio is routed through it."""

    def __init__(self):
        self.p = None

    def open(self) -> None:
        self.p = pyaudio.PyAudio()
        logger.debug("PortAudio opened: %s", pyaudio.get_portaudio_version_text())

    def close(self) -> None:
        if self.p is not None:
            self.p.terminate()
            self.p = None
            logger.debug("PortAudio closed")

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
