"""
Analysis error classification.

Best-effort heuristic: maps a failure message to a PersonaAnalysisError code
by case-sensitive substring matching. Rules are checked in order and the
first match wins; anything unmatched is reported as ANALYSIS_TIMEOUT.
"""
from typing import Tuple

from ..enums import PersonaAnalysisError

CLASSIFICATION_RULES: Tuple[Tuple[Tuple[str, ...], PersonaAnalysisError], ...] = (
    (("not found", "user"), PersonaAnalysisError.USER_NOT_FOUND),
    (("content", "videos"), PersonaAnalysisError.INSUFFICIENT_CONTENT),
    (("transcription", "transcript"), PersonaAnalysisError.TRANSCRIPTION_FAILED),
    (("rate limit",), PersonaAnalysisError.RATE_LIMIT_EXCEEDED),
    (("platform",), PersonaAnalysisError.INVALID_PLATFORM),
)

FALLBACK_ERROR = PersonaAnalysisError.ANALYSIS_TIMEOUT


def classify_analysis_error(message: str) -> PersonaAnalysisError:
    for needles, code in CLASSIFICATION_RULES:
        if any(needle in message for needle in needles):
            return code
    return FALLBACK_ERROR
