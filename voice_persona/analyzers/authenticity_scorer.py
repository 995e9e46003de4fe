"""
Authenticity Scorer - Compares generated content with a persona voice.

Five independent sub-scores (hooks, bridges, sentence patterns, vocabulary,
rhythm) are weighted 20 each and combined into an overall 0-100 score.
"""
import logging
from dataclasses import dataclass, replace
from typing import Dict, Optional

from ..enums import EnergyLevel
from ..models import AuthenticityMetrics, MetricScore, SpeechPatterns, VoiceProfile
from .text_stats import (
    average,
    average_sentence_length,
    content_words,
    count_exclamations,
    count_occurrences,
    count_questions,
    emphasis_density,
    find_formal_language,
    round_half_up,
    sentence_lengths,
    split_sentences,
    word_count,
)

logger = logging.getLogger(__name__)

# Must sum to 100
METRIC_WEIGHTS: Dict[str, int] = {
    "hook_accuracy": 20,
    "bridge_frequency": 20,
    "sentence_patterns": 20,
    "vocabulary_match": 20,
    "rhythm_replication": 20,
}


@dataclass
class ScoringConfig:
    strict_mode: bool = False
    penalty_multiplier: float = 1.0
    min_passing_score: int = 75


class AuthenticityScorer:
    """Scores how closely a text matches a VoiceProfile."""

    def __init__(self, config: Optional[ScoringConfig] = None, **overrides):
        self.config = replace(config or ScoringConfig(), **overrides)

    def score_authenticity(
        self,
        content: str,
        voice_profile: VoiceProfile,
        speech_patterns: Optional[SpeechPatterns] = None,
    ) -> AuthenticityMetrics:
        logger.info(f"[AUTHENTICITY_SCORER] Scoring generated content ({len(content)} characters)")

        hook_accuracy = self._score_hook_accuracy(content, voice_profile)
        bridge_frequency = self._score_bridge_frequency(content, voice_profile)
        sentence_patterns = self._score_sentence_patterns(content, voice_profile)
        vocabulary_match = self._score_vocabulary_match(content, voice_profile)
        rhythm_replication = self._score_rhythm_replication(content, voice_profile, speech_patterns)

        overall = round_half_up(sum(
            m.score * m.weight / 100
            for m in (hook_accuracy, bridge_frequency, sentence_patterns, vocabulary_match, rhythm_replication)
        ))

        logger.info(f"[AUTHENTICITY_SCORER] Overall authenticity score: {overall}%")

        return AuthenticityMetrics(
            hook_accuracy=hook_accuracy,
            bridge_frequency=bridge_frequency,
            sentence_patterns=sentence_patterns,
            vocabulary_match=vocabulary_match,
            rhythm_replication=rhythm_replication,
            overall_score=overall,
        )

    def is_passing(self, score: int) -> bool:
        return score >= self.config.min_passing_score

    def get_score_breakdown(self, metrics: AuthenticityMetrics) -> str:
        """Human-readable, one line per metric."""
        labels = {
            "hookAccuracy": "Hook Accuracy",
            "bridgeFrequency": "Bridge Frequency",
            "sentencePatterns": "Sentence Patterns",
            "vocabularyMatch": "Vocabulary Match",
            "rhythmReplication": "Rhythm Replication",
        }
        lines = [
            f"{labels[name]}: {metric.score}% ({metric.check})"
            for name, metric in metrics.metrics().items()
        ]
        status = "PASSING" if self.is_passing(metrics.overall_score) else "NEEDS IMPROVEMENT"
        lines.extend([
            "",
            f"Overall Score: {metrics.overall_score}%",
            f"Status: {status}",
        ])
        return "\n".join(lines)

    def update_config(self, **overrides) -> None:
        self.config = replace(self.config, **overrides)

    # ═══════════════════════════════════════════════════════════════════════════
    # SUB-SCORES
    # ═══════════════════════════════════════════════════════════════════════════

    def _metric(self, name: str, raw_score: float, check: str) -> MetricScore:
        score = round_half_up(raw_score * self.config.penalty_multiplier)
        return MetricScore(weight=METRIC_WEIGHTS[name], score=min(100, max(0, score)), check=check)

    def _score_hook_accuracy(self, content: str, profile: VoiceProfile) -> MetricScore:
        content_lower = content.lower()
        sentences = split_sentences(content)
        first_sentence = sentences[0].lower() if sentences else ""

        matched = [
            hook for hook in profile.hooks
            if hook.lower() in first_sentence or hook.lower() in content_lower
        ]

        if not matched:
            score, check = 0, "No persona hooks found"
        elif len(matched) == 1:
            score, check = 70, "Uses one persona hook"
        else:
            score, check = 100, "Uses multiple persona hooks"

        if find_formal_language(first_sentence, profile.vocabulary_fingerprint):
            score = max(0, score - 30)
            check += " (penalty for non-persona language)"

        return self._metric("hook_accuracy", score, check)

    def _score_bridge_frequency(self, content: str, profile: VoiceProfile) -> MetricScore:
        words = word_count(content)

        found = 0
        expected = 0
        for phrase, weight in profile.bridges.items():
            found += count_occurrences(content, phrase)
            expected += max(1, round_half_up(words / 100 * weight / 10))

        if expected == 0:
            score, check = 80, "No bridge pattern to match"
        elif found == 0:
            score, check = 0, "No bridge phrases found"
        else:
            ratio = found / expected
            if ratio >= 0.8:
                score = 100
            elif ratio >= 0.5:
                score = 80
            elif ratio >= 0.2:
                score = 60
            else:
                score = 30
            check = f"Found {found}/{expected} expected bridges"

        return self._metric("bridge_frequency", score, check)

    def _score_sentence_patterns(self, content: str, profile: VoiceProfile) -> MetricScore:
        sentences = split_sentences(content)
        avg_length = average(sentence_lengths(sentences))
        pattern_text = " ".join(profile.sentence_patterns).lower()

        score = 70
        check = "Follows ratio distribution"

        if "short" in pattern_text:
            if avg_length < 10:
                score += 15
                check = "Matches short sentence pattern"
            else:
                score -= 10
                check = "Deviates from short sentence pattern"

        if "complex" in pattern_text:
            if avg_length > 15:
                score += 15
                check = "Matches complex sentence pattern"
            else:
                score -= 10
                check = "Deviates from complex sentence pattern"

        if sentences:
            if "exclamation" in pattern_text and count_exclamations(content) / len(sentences) > 0.2:
                score += 10
            if "question" in pattern_text and count_questions(content) / len(sentences) > 0.1:
                score += 5

        return self._metric("sentence_patterns", score, check)

    def _score_vocabulary_match(self, content: str, profile: VoiceProfile) -> MetricScore:
        words = content_words(content, min_length=4)
        word_set = set(words)
        vocabulary = [w.lower() for w in profile.vocabulary_fingerprint]

        matched = sum(1 for w in vocabulary if w in word_set)
        ratio = matched / len(vocabulary) if vocabulary else 0.0

        score = round_half_up(ratio * 100)
        check = f"Uses {matched}/{len(vocabulary)} signature words"

        if matched >= 5:
            score = min(100, score + 10)
            check += " (bonus for high usage)"

        vocabulary_set = set(vocabulary)
        outside = [w for w in words if w not in vocabulary_set]
        if len(outside) > len(words) * 0.8:
            score = max(0, score - 20)
            check += " (penalty for non-persona vocabulary)"

        return self._metric("vocabulary_match", score, check)

    def _score_rhythm_replication(
        self,
        content: str,
        profile: VoiceProfile,
        speech_patterns: Optional[SpeechPatterns],
    ) -> MetricScore:
        score = 70
        check = "Maintains energy wave"

        avg_length = average_sentence_length(content)
        rhythm = profile.rhythm_pattern.lower()

        if "fast" in rhythm and avg_length < 8:
            score += 15
            check = "Matches fast-paced rhythm"
        elif "slow" in rhythm and avg_length > 12:
            score += 15
            check = "Matches deliberate rhythm"

        if speech_patterns is not None:
            energy = speech_patterns.baseline.typical_energy
            density = emphasis_density(content, scale=100)
            if energy == EnergyLevel.HIGH and density > 2:
                score += 10
                check += ", high energy maintained"
            elif energy == EnergyLevel.LOW and density < 1:
                score += 10
                check += ", calm energy maintained"
            elif energy == EnergyLevel.MEDIUM and 1 <= density <= 2:
                score += 10
                check += ", moderate energy maintained"

        content_lower = content.lower()
        signature_matches = sum(
            1 for element in profile.signature_elements if element.lower() in content_lower
        )
        if signature_matches >= 2:
            score += 10
            check += ", uses signature elements"
        elif signature_matches == 0:
            score -= 15
            check += ", missing signature elements"

        return self._metric("rhythm_replication", score, check)


def create_authenticity_scorer(config: Optional[ScoringConfig] = None, **overrides) -> AuthenticityScorer:
    """Factory function for easy usage."""
    return AuthenticityScorer(config, **overrides)


def score_content_authenticity(
    content: str,
    voice_profile: VoiceProfile,
    speech_patterns: Optional[SpeechPatterns] = None,
    **overrides,
) -> AuthenticityMetrics:
    """Convenience function for authenticity scoring."""
    return create_authenticity_scorer(**overrides).score_authenticity(content, voice_profile, speech_patterns)
