"""
Analyzers.

Pure, synchronous transcript analysis:
- Pattern extraction (speech patterns, pattern mapping matrix)
- Voice profiling (voice profile, generation parameters)
- Authenticity scoring
"""
from .pattern_extractor import (
    PatternExtractionConfig,
    PatternExtractor,
    create_pattern_extractor,
    extract_pattern_matrix,
    extract_speech_patterns,
)
from .voice_profiler import VoiceProfiler, create_voice_profile, create_voice_profiler
from .authenticity_scorer import (
    METRIC_WEIGHTS,
    AuthenticityScorer,
    ScoringConfig,
    create_authenticity_scorer,
    score_content_authenticity,
)

__all__ = [
    # Pattern extraction
    "PatternExtractionConfig",
    "PatternExtractor",
    "create_pattern_extractor",
    "extract_pattern_matrix",
    "extract_speech_patterns",

    # Voice profiling
    "VoiceProfiler",
    "create_voice_profile",
    "create_voice_profiler",

    # Authenticity scoring
    "METRIC_WEIGHTS",
    "AuthenticityScorer",
    "ScoringConfig",
    "create_authenticity_scorer",
    "score_content_authenticity",
]
