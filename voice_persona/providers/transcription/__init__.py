"""
Transcription providers.
"""
from .base import BaseTranscriptionProvider, TranscriptionResult
from .host_api import HostApiTranscriptionProvider
from .local import LocalTranscriptionProvider

__all__ = [
    "BaseTranscriptionProvider",
    "TranscriptionResult",
    "HostApiTranscriptionProvider",
    "LocalTranscriptionProvider",
]
