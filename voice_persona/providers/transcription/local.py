"""
Local transcription provider.

Looks transcripts up in memory, for offline runs and tests.
"""
from typing import Dict, Mapping, Optional

from .base import BaseTranscriptionProvider, TranscriptionResult


class LocalTranscriptionProvider(BaseTranscriptionProvider):
    """In-memory url -> transcript lookup."""

    def __init__(self, transcripts: Optional[Mapping[str, str]] = None):
        self._transcripts: Dict[str, str] = dict(transcripts or {})

    @property
    def name(self) -> str:
        return "local"

    @property
    def is_available(self) -> bool:
        return True

    def add_transcript(self, url: str, transcript: str) -> None:
        self._transcripts[url] = transcript

    async def transcribe(self, url: str) -> TranscriptionResult:
        transcript = self._transcripts.get(url)
        if transcript is None:
            return TranscriptionResult(success=False, error=f"No transcript available for {url}")
        return TranscriptionResult(success=True, transcript=transcript)
