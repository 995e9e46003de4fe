"""
Voice Profiler - Builds a VoiceProfile and GenerationParameters from
extracted speech patterns.
"""
import logging
import math
from collections import Counter
from typing import Dict, List, Sequence

from ..enums import EnergyLevel, PatternRotation, SentenceStructure
from ..models import (
    GenerationParameters,
    HookRatio,
    PatternMappingMatrix,
    SentenceDistribution,
    SpeechPatterns,
    VideoAnalysisData,
    VoiceProfile,
)
from .text_stats import (
    average,
    coefficient_of_variation,
    content_words,
    count_exclamations,
    count_questions,
    dedupe,
    emphasis_score,
    split_sentences,
)

logger = logging.getLogger(__name__)

MAX_HOOKS = 15
MAX_FINGERPRINT_WORDS = 30
MIN_FINGERPRINT_FREQUENCY = 3

MIN_OPTIMAL_LENGTH = 15
MAX_OPTIMAL_LENGTH = 60
BASE_THRESHOLD = 85
MIN_THRESHOLD = 75
MAX_THRESHOLD = 95

# Common words excluded from the vocabulary fingerprint
FINGERPRINT_STOPWORDS = frozenset([
    "that", "this", "with", "have", "will", "they", "from", "been", "were",
    "said", "each", "which", "their", "time", "about", "would", "there",
    "could", "other", "after", "first", "well", "also", "more", "very",
    "what", "know", "just", "into", "over", "think", "only", "its", "work",
    "life", "way", "may", "say", "come", "good", "much",
])

SHORT_DISTRIBUTION = SentenceDistribution(short=50, medium=30, long=20)
COMPLEX_DISTRIBUTION = SentenceDistribution(short=20, medium=30, long=50)
BALANCED_DISTRIBUTION = SentenceDistribution(short=30, medium=40, long=30)


class VoiceProfiler:
    """
    Synthesizes the persona voice.

    Stateless: the same (videos, patterns, matrix) always gives the same
    profile.
    """

    def create_profile(
        self,
        videos: Sequence[VideoAnalysisData],
        speech_patterns: SpeechPatterns,
        pattern_matrix: PatternMappingMatrix,
    ) -> VoiceProfile:
        logger.info(f"[VOICE_PROFILER] Creating voice profile from {len(videos)} videos")

        combined = " ".join(v.transcript for v in videos)

        hooks = self._extract_hooks(speech_patterns, pattern_matrix)
        bridges = self._extract_bridges(speech_patterns, pattern_matrix)

        profile = VoiceProfile(
            hooks=hooks,
            bridges=bridges,
            energy_wave=self._analyze_energy_wave(speech_patterns, combined),
            sentence_patterns=self._analyze_sentence_patterns(combined),
            signature_elements=self._extract_signature_elements(speech_patterns),
            vocabulary_fingerprint=self._create_vocabulary_fingerprint(combined),
            rhythm_pattern=self._analyze_rhythm_pattern(speech_patterns, videos),
        )

        logger.info(
            f"[VOICE_PROFILER] Voice profile created with {len(hooks)} hooks "
            f"and {len(bridges)} bridge patterns"
        )
        return profile

    def create_generation_parameters(
        self,
        voice_profile: VoiceProfile,
        speech_patterns: SpeechPatterns,
        videos: Sequence[VideoAnalysisData],
    ) -> GenerationParameters:
        logger.info("[VOICE_PROFILER] Creating generation parameters")

        if videos:
            avg_duration = average([v.duration for v in videos])
        else:
            avg_duration = MIN_OPTIMAL_LENGTH
        optimal_length = min(max(avg_duration, MIN_OPTIMAL_LENGTH), MAX_OPTIMAL_LENGTH)

        threshold = self._calculate_threshold(voice_profile, speech_patterns)

        parameters = GenerationParameters(
            optimal_length=optimal_length,
            authenticity_threshold=threshold,
            pattern_rotation=self._determine_pattern_rotation(voice_profile),
            hook_ratio=self._analyze_hook_ratio(voice_profile.hooks),
            sentence_distribution=self._analyze_sentence_distribution(voice_profile.sentence_patterns),
        )

        logger.info(
            f"[VOICE_PROFILER] Generation parameters created: {optimal_length}s optimal length, "
            f"{threshold}% authenticity threshold"
        )
        return parameters

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE ELEMENTS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def _extract_hooks(speech_patterns: SpeechPatterns, pattern_matrix: PatternMappingMatrix) -> List[str]:
        candidates = (
            list(speech_patterns.signature_elements.catchphrases.opening)
            + list(pattern_matrix.primary_hook.examples)
            + list(speech_patterns.emotional_states.excited.marker_phrases[:3])
        )
        return [hook for hook in dedupe(candidates) if len(hook) > 2][:MAX_HOOKS]

    @staticmethod
    def _extract_bridges(speech_patterns: SpeechPatterns, pattern_matrix: PatternMappingMatrix) -> Dict[str, int]:
        """Phrase -> weight. Later sources overwrite earlier ones on overlap."""
        bridges: Dict[str, int] = {}
        weighted_sources = [
            (speech_patterns.emotional_states.explaining.transition_words, 10),
            (pattern_matrix.bridge_phrase.examples, 8),
            (speech_patterns.signature_elements.random_insertions, 6),
        ]
        for phrases, start_weight in weighted_sources:
            for index, phrase in enumerate(phrases):
                bridges[phrase] = max(start_weight - index, 1)
        return bridges

    @staticmethod
    def _analyze_energy_wave(speech_patterns: SpeechPatterns, transcript: str) -> str:
        baseline = speech_patterns.baseline
        scores = [emphasis_score(s) for s in split_sentences(transcript)]

        if coefficient_of_variation(scores) > 2:
            wave = "Dynamic energy waves with peaks and valleys"
        elif baseline.typical_energy == EnergyLevel.HIGH:
            wave = "Consistently high energy with occasional spikes"
        elif baseline.typical_energy == EnergyLevel.LOW:
            wave = "Steady, measured energy with subtle emphasis"
        else:
            wave = "Moderate energy with controlled escalation"

        pattern_changes = speech_patterns.emotional_states.excited.pattern_changes
        return f"{wave}. {baseline.energy_description}. {pattern_changes}"

    @staticmethod
    def _analyze_sentence_patterns(transcript: str) -> List[str]:
        sentences = split_sentences(transcript)
        if not sentences:
            return ["Balanced sentence length"]

        patterns = []
        avg_length = average([len(s.split()) for s in sentences])
        if avg_length < 8:
            patterns.append("Short, punchy sentences")
        elif avg_length > 15:
            patterns.append("Complex, detailed sentences")
        else:
            patterns.append("Balanced sentence length")

        starters = Counter(s.lower().split()[0] for s in sentences)
        top_starters = [f'"{starter}"' for starter, _ in starters.most_common(3)]
        patterns.append(f"Common starters: {', '.join(top_starters)}")

        if count_exclamations(transcript) / len(sentences) > 0.3:
            patterns.append("High exclamation usage for emphasis")
        if count_questions(transcript) / len(sentences) > 0.2:
            patterns.append("Frequent rhetorical questions")

        return patterns

    @staticmethod
    def _extract_signature_elements(speech_patterns: SpeechPatterns) -> List[str]:
        signature = speech_patterns.signature_elements
        return dedupe(
            list(signature.random_insertions[:5])
            + list(signature.filler_patterns[:3])
            + list(signature.catchphrases.opening[:2])
            + list(signature.catchphrases.closing[:2])
        )

    @staticmethod
    def _create_vocabulary_fingerprint(transcript: str) -> List[str]:
        frequency = Counter(content_words(transcript, min_length=4))
        ranked = [
            (word, count) for word, count in frequency.items()
            if count >= MIN_FINGERPRINT_FREQUENCY and word not in FINGERPRINT_STOPWORDS
        ]
        ranked.sort(key=lambda item: item[1], reverse=True)
        return [word for word, _ in ranked[:MAX_FINGERPRINT_WORDS]]

    @staticmethod
    def _analyze_rhythm_pattern(speech_patterns: SpeechPatterns, videos: Sequence[VideoAnalysisData]) -> str:
        baseline = speech_patterns.baseline
        rhythm = baseline.default_rhythm

        avg_duration = average([v.duration for v in videos])
        avg_words = average([v.word_count for v in videos])
        words_per_second = avg_words / avg_duration if avg_duration > 0 else 0.0

        if words_per_second > 3:
            rhythm += ". Fast-paced delivery"
        elif words_per_second < 2:
            rhythm += ". Deliberate, slower pace"
        else:
            rhythm += ". Moderate pacing"

        if baseline.typical_energy == EnergyLevel.HIGH:
            rhythm += " with energetic punctuation"
        elif baseline.typical_energy == EnergyLevel.LOW:
            rhythm += " with calm emphasis"

        return rhythm

    # ═══════════════════════════════════════════════════════════════════════════
    # GENERATION PARAMETERS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def _calculate_threshold(voice_profile: VoiceProfile, speech_patterns: SpeechPatterns) -> int:
        threshold = BASE_THRESHOLD

        # Consistent voices get a stricter threshold
        if len(voice_profile.hooks) > 10:
            threshold += 5
        if len(voice_profile.bridges) > 8:
            threshold += 3
        if len(voice_profile.signature_elements) > 6:
            threshold += 2

        if speech_patterns.baseline.sentence_structure == SentenceStructure.VARIED:
            threshold -= 3

        return min(max(threshold, MIN_THRESHOLD), MAX_THRESHOLD)

    @staticmethod
    def _analyze_hook_ratio(hooks: List[str]) -> HookRatio:
        # First 60% of hooks are treated as primary
        primary = math.ceil(len(hooks) * 0.6)
        return HookRatio(primary=primary, secondary=len(hooks) - primary)

    @staticmethod
    def _analyze_sentence_distribution(sentence_patterns: List[str]) -> SentenceDistribution:
        if any("Short" in p for p in sentence_patterns):
            return SHORT_DISTRIBUTION
        if any("Complex" in p for p in sentence_patterns):
            return COMPLEX_DISTRIBUTION
        return BALANCED_DISTRIBUTION

    @staticmethod
    def _determine_pattern_rotation(voice_profile: VoiceProfile) -> PatternRotation:
        if len(voice_profile.hooks) > 12:
            return PatternRotation.WEIGHTED
        if len(voice_profile.signature_elements) > 8:
            return PatternRotation.SEQUENTIAL
        return PatternRotation.RANDOM


def create_voice_profiler() -> VoiceProfiler:
    """Factory function for easy usage."""
    return VoiceProfiler()


def create_voice_profile(
    videos: Sequence[VideoAnalysisData],
    speech_patterns: SpeechPatterns,
    pattern_matrix: PatternMappingMatrix,
) -> VoiceProfile:
    """Convenience function for voice profile creation."""
    return create_voice_profiler().create_profile(videos, speech_patterns, pattern_matrix)
