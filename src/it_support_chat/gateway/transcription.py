"""
Audio transcription interface.

The gateway accepts audio but no speech-to-text backend ships with the
service. 'Transcriber' names the capability so one can be plugged in later;
'UnavailableTranscriber' is the stub in use until then and never produces a
transcript.
"""

from abc import ABC, abstractmethod


class Transcriber(ABC):
    @abstractmethod
    async def transcribe(self, data: bytes, mime_type: str | None = None) -> str | None:
        """Return the transcript of 'data', or None when none can be produced."""
        pass


class UnavailableTranscriber(Transcriber):
    async def transcribe(self, data: bytes, mime_type: str | None = None) -> str | None:
        return None
