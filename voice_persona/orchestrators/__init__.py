"""
Orchestrators.

Async workflows over the providers and analyzers:
- User feed retrieval and batched transcription
- Complete voice persona analysis and script generation
"""
from .error_classifier import CLASSIFICATION_RULES, FALLBACK_ERROR, classify_analysis_error
from .user_feed import UserFeedOrchestrator, analyze_user_feed, create_user_feed_orchestrator
from .voice_analysis import (
    AnalysisSummary,
    VoiceAnalysisOrchestrator,
    analyze_voice_persona,
    create_voice_analysis_orchestrator,
    generate_script_with_persona,
)

__all__ = [
    # Error classification
    "CLASSIFICATION_RULES",
    "FALLBACK_ERROR",
    "classify_analysis_error",

    # Feed
    "UserFeedOrchestrator",
    "analyze_user_feed",
    "create_user_feed_orchestrator",

    # Voice analysis
    "AnalysisSummary",
    "VoiceAnalysisOrchestrator",
    "analyze_voice_persona",
    "create_voice_analysis_orchestrator",
    "generate_script_with_persona",
]
