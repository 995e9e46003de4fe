"""
Voice Persona Engine.

Analyzes a creator's short-form video transcripts into a voice persona and
writes new scripts in that voice:
- Speech pattern extraction and voice profiling
- Rule enforcement and authenticity scoring
- Persona-voiced script generation
- Feed and persona analysis orchestration
"""
from .enums import PatternSensitivity, PersonaAnalysisError, ScriptStyle, SocialPlatform
from .exceptions import (
    FeedRetrievalError,
    InsufficientContentError,
    PersonaError,
    ScriptGenerationError,
    TranscriptionError,
    UnsupportedPlatformError,
)
from .schemas import PersonaAnalysisConfig, ScriptGenerationInput, UserIdentifier

from .analyzers import AuthenticityScorer, PatternExtractor, VoiceProfiler
from .generators import RulesEngine, ScriptGenerator
from .orchestrators import UserFeedOrchestrator, VoiceAnalysisOrchestrator
from .validation import ContentValidationReport, validate_persona_content

__all__ = [
    # Enums
    "PatternSensitivity",
    "PersonaAnalysisError",
    "ScriptStyle",
    "SocialPlatform",

    # Exceptions
    "FeedRetrievalError",
    "InsufficientContentError",
    "PersonaError",
    "ScriptGenerationError",
    "TranscriptionError",
    "UnsupportedPlatformError",

    # Input
    "PersonaAnalysisConfig",
    "ScriptGenerationInput",
    "UserIdentifier",

    # Pipeline
    "AuthenticityScorer",
    "PatternExtractor",
    "VoiceProfiler",
    "RulesEngine",
    "ScriptGenerator",
    "UserFeedOrchestrator",
    "VoiceAnalysisOrchestrator",

    # Validation
    "ContentValidationReport",
    "validate_persona_content",
]
