"""
Voice persona exceptions.
"""
from typing import Any, Dict


class PersonaError(Exception):
    """Base voice persona error."""

    def __init__(self, message: str, code: str = "PERSONA_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class FeedRetrievalError(PersonaError):
    """Raised when a creator feed cannot be fetched."""

    def __init__(self, handle: str, message: str):
        self.handle = handle
        super().__init__(message=message, code="FEED_RETRIEVAL_FAILED")


class UnsupportedPlatformError(PersonaError):
    """Raised for platforms without a feed integration."""

    def __init__(self, platform: str, message: str = ""):
        self.platform = platform
        super().__init__(
            message=message or f"Unsupported platform: {platform}",
            code="UNSUPPORTED_PLATFORM",
        )


class TranscriptionError(PersonaError):
    """Raised when a single video cannot be turned into a usable transcript."""

    def __init__(self, video_id: str, message: str):
        self.video_id = video_id
        super().__init__(message=message, code="TRANSCRIPTION_FAILED")


class InsufficientContentError(PersonaError):
    """Raised when too few transcripts survive to build a persona."""

    def __init__(self, videos_processed: int, message: str = ""):
        self.videos_processed = videos_processed
        super().__init__(
            message=message or f"Feed analysis failed: {videos_processed} videos processed",
            code="INSUFFICIENT_CONTENT",
        )


class ScriptGenerationError(PersonaError):
    """Raised when no generation attempt produced a script."""

    def __init__(self, attempts: int, message: str):
        self.attempts = attempts
        super().__init__(message=message, code="GENERATION_FAILED")
