"""
Voice persona enumerations.

Closed vocabularies shared by the analyzers, generators and orchestrators.
"""
from enum import Enum


class SocialPlatform(str, Enum):
    """Platforms a creator feed can be analyzed from."""
    TIKTOK = "tiktok"
    INSTAGRAM = "instagram"

    @classmethod
    def from_string(cls, value: str) -> "SocialPlatform":
        """Get platform from string value."""
        value_lower = value.lower()
        for platform in cls:
            if platform.value == value_lower:
                return platform
        raise ValueError(f"Unsupported platform: {value}")


class EnergyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SentenceStructure(str, Enum):
    SHORT = "short"
    VARIED = "varied"
    COMPLEX = "complex"


class ExplainingStructure(str, Enum):
    STEP_BY_STEP = "step-by-step"
    CIRCULAR = "circular"
    BRANCHING = "branching"


class PatternRotation(str, Enum):
    """How generated scripts cycle through a persona's hooks."""
    SEQUENTIAL = "sequential"
    WEIGHTED = "weighted"
    RANDOM = "random"


class PatternSensitivity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ScriptStyle(str, Enum):
    """Script delivery styles selectable by the caller."""
    HOOK_HEAVY = "hook-heavy"
    EDUCATIONAL = "educational"
    CONVERSATIONAL = "conversational"
    ENERGETIC = "energetic"


class FeedAnalysisStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class PersonaAnalysisError(str, Enum):
    """
    Error codes reported by persona analysis.

    NETWORK_ERROR is part of the public vocabulary but the message
    classifier never produces it.
    """
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INSUFFICIENT_CONTENT = "INSUFFICIENT_CONTENT"
    TRANSCRIPTION_FAILED = "TRANSCRIPTION_FAILED"
    ANALYSIS_TIMEOUT = "ANALYSIS_TIMEOUT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INVALID_PLATFORM = "INVALID_PLATFORM"
    NETWORK_ERROR = "NETWORK_ERROR"
