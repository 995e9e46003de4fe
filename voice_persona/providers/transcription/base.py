"""
Base class for transcription providers.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class TranscriptionResult:
    """Outcome of transcribing one video URL."""
    success: bool
    transcript: Optional[str] = None
    error: Optional[str] = None


class BaseTranscriptionProvider(ABC):
    """
    Abstract base class for transcription providers.

    Providers report failures through TranscriptionResult instead of
    raising; retry policy, if any, belongs to the provider.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is available."""
        pass

    @abstractmethod
    async def transcribe(self, url: str) -> TranscriptionResult:
        """
        Transcribe the speech of a video.

        Args:
            url: Canonical video URL

        Returns:
            TranscriptionResult with the transcript or an error message
        """
        pass

    async def close(self) -> None:
        """Release network resources."""
        return None
