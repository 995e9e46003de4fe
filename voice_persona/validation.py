"""
Content Validation - Score arbitrary content against a persona voice.

Combines the authenticity scorer, optional rule validation and a list of
actionable recommendations into a single report.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .analyzers import AuthenticityScorer
from .analyzers.text_stats import word_count
from .generators import validate_content
from .models import (
    AuthenticityMetrics,
    GenerationParameters,
    SpeechPatterns,
    ValidationResult,
    VoiceProfile,
)

logger = logging.getLogger(__name__)

LOW_METRIC_SCORE = 70

METRIC_ADVICE = {
    "hook_accuracy": "Consider using more of the persona's signature hooks and opening phrases",
    "bridge_frequency": "Increase usage of the persona's bridge phrases and transition words",
    "vocabulary_match": "Incorporate more words from the persona's vocabulary fingerprint",
    "sentence_patterns": "Adjust sentence length and structure to better match the persona's patterns",
    "rhythm_replication": "Modify energy level and pacing to match the persona's rhythm pattern",
}

VIOLATION_ADVICE = {
    "hook": "Review hook usage to ensure it follows persona patterns",
    "bridge": "Check bridge phrase frequency and placement",
    "signature": "Include more signature elements from the persona profile",
}


@dataclass
class ContentValidationReport:
    authenticity: AuthenticityMetrics
    word_count: int
    content_length: int
    processing_time_ms: int = 0
    rule_validation: Optional[ValidationResult] = None
    detailed_breakdown: Optional[str] = None
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "authenticity": self.authenticity.to_dict(),
            "recommendations": list(self.recommendations),
            "metadata": {
                "contentLength": self.content_length,
                "wordCount": self.word_count,
                "processingTime": self.processing_time_ms,
            },
        }
        if self.rule_validation is not None:
            data["ruleValidation"] = {
                "valid": self.rule_validation.valid,
                "violations": list(self.rule_validation.violations),
            }
        if self.detailed_breakdown is not None:
            data["detailedBreakdown"] = self.detailed_breakdown
        return data


def build_recommendations(
    authenticity: AuthenticityMetrics,
    rule_validation: Optional[ValidationResult] = None,
) -> List[str]:
    recommendations = [
        METRIC_ADVICE[name]
        for name in ("hook_accuracy", "bridge_frequency", "vocabulary_match", "sentence_patterns", "rhythm_replication")
        if getattr(authenticity, name).score < LOW_METRIC_SCORE
    ]

    overall = authenticity.overall_score
    if overall >= 90:
        recommendations.append("Excellent authenticity - content closely matches persona voice")
    elif overall >= 80:
        recommendations.append("Good authenticity - minor adjustments could improve alignment")
    elif overall >= 70:
        recommendations.append("Moderate authenticity - consider reviewing persona patterns more carefully")
    else:
        recommendations.append("Low authenticity - significant revision needed to match persona voice")

    if rule_validation is not None and not rule_validation.valid:
        recommendations.append(f"Rule violations detected: {len(rule_validation.violations)} issues to address")
        for keyword, advice in VIOLATION_ADVICE.items():
            if any(keyword in violation for violation in rule_validation.violations):
                recommendations.append(advice)

    return recommendations


def validate_persona_content(
    content: str,
    voice_profile: VoiceProfile,
    speech_patterns: Optional[SpeechPatterns] = None,
    generation_parameters: Optional[GenerationParameters] = None,
    include_rule_validation: bool = False,
    include_detailed_breakdown: bool = False,
) -> ContentValidationReport:
    """
    Validate content against a persona voice profile.

    Rule validation only runs when requested and generation parameters
    are supplied.

    Raises:
        ValueError: content is empty or whitespace
    """
    if not content or not content.strip():
        raise ValueError("Content is required and cannot be empty")

    started = time.monotonic()
    logger.info(f"[CONTENT_VALIDATION] Validating content ({len(content)} characters)")

    scorer = AuthenticityScorer()
    authenticity = scorer.score_authenticity(content, voice_profile, speech_patterns)
    logger.info(f"[CONTENT_VALIDATION] Authenticity score: {authenticity.overall_score}%")

    rule_validation = None
    if include_rule_validation and generation_parameters is not None:
        rule_validation = validate_content(content, voice_profile, generation_parameters, speech_patterns)
        logger.info(f"[CONTENT_VALIDATION] Rule validation: {len(rule_validation.violations)} violations")

    report = ContentValidationReport(
        authenticity=authenticity,
        word_count=word_count(content),
        content_length=len(content),
        rule_validation=rule_validation,
        detailed_breakdown=scorer.get_score_breakdown(authenticity) if include_detailed_breakdown else None,
        recommendations=build_recommendations(authenticity, rule_validation),
    )
    report.processing_time_ms = int((time.monotonic() - started) * 1000)
    logger.info(f"[CONTENT_VALIDATION] Validation completed in {report.processing_time_ms}ms")
    return report
