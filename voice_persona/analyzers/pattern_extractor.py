"""
Pattern Extractor - Speech pattern mining from creator transcripts.

Scans transcripts for hooks, bridges, energy escalators, fillers and
emotional-state markers, and summarizes them as SpeechPatterns plus a
PatternMappingMatrix of per-element frequencies. Output depends only on the
transcript text, so repeated runs on the same videos are identical.
"""
import logging
import re
from collections import Counter
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

from ..enums import (
    EnergyLevel,
    ExplainingStructure,
    PatternSensitivity,
    SentenceStructure,
)
from ..models import (
    Catchphrases,
    EmotionalStates,
    ExcitedState,
    ExplainingState,
    PatternElement,
    PatternMappingMatrix,
    SignatureElements,
    SpeechBaseline,
    SpeechPatterns,
    VideoAnalysisData,
)
from .pattern_catalogue import (
    EXCITED_MARKERS,
    EXPLAINING_MARKERS,
    FILLERS,
    MATRIX_GROUPS,
    PHRASE_STOPWORDS,
    PatternGroup,
)
from .text_stats import (
    average,
    caps_word_count,
    coefficient_of_variation,
    count_exclamations,
    dedupe,
    round_half_up,
    sentence_lengths,
    split_sentences,
    word_count,
)

logger = logging.getLogger(__name__)

# Low sensitivity demands more repetitions before a phrase counts as a signature
SENSITIVITY_FREQUENCY_OFFSET = {
    PatternSensitivity.LOW: 1,
    PatternSensitivity.MEDIUM: 0,
    PatternSensitivity.HIGH: 0,
}

TOKEN_STRIP_CHARS = ".,!?;:\"()[]"
DIGITS_RE = re.compile(r"^\d+$")


@dataclass
class PatternExtractionConfig:
    """Pattern extraction settings."""
    sensitivity: PatternSensitivity = PatternSensitivity.MEDIUM
    min_frequency: int = 2
    context_window: int = 5
    enable_emotional_analysis: bool = True


class PatternExtractor:
    """
    Extracts speech patterns and the pattern mapping matrix from videos.

    Thresholds:
    - average sentence length < 8 words -> short, > 15 -> complex
    - caps words + exclamations per 1000 chars > 5 -> high energy, < 1 -> low
    - sentence length coefficient of variation > 0.3 -> variable pacing
    """

    def __init__(self, config: Optional[PatternExtractionConfig] = None, **overrides):
        self.config = replace(config or PatternExtractionConfig(), **overrides)

    @property
    def effective_min_frequency(self) -> int:
        offset = SENSITIVITY_FREQUENCY_OFFSET.get(PatternSensitivity(self.config.sensitivity), 0)
        return self.config.min_frequency + offset

    def update_config(self, **overrides) -> None:
        self.config = replace(self.config, **overrides)

    # ═══════════════════════════════════════════════════════════════════════════
    # PUBLIC API
    # ═══════════════════════════════════════════════════════════════════════════

    def extract_patterns(self, videos: Sequence[VideoAnalysisData]) -> SpeechPatterns:
        """Summarize the speech patterns of all videos."""
        logger.info(f"[PATTERN_EXTRACTOR] Analyzing {len(videos)} videos for speech patterns")

        transcripts = [v.transcript for v in videos]
        combined = " ".join(transcripts)

        baseline = self._extract_baseline(combined)
        if self.config.enable_emotional_analysis:
            emotional_states = self._extract_emotional_states(combined)
        else:
            emotional_states = self._default_emotional_states()
        signature_elements = self._extract_signature_elements(transcripts)

        logger.info(f"[PATTERN_EXTRACTOR] Extracted patterns from {len(combined)} characters of transcript")

        return SpeechPatterns(
            baseline=baseline,
            emotional_states=emotional_states,
            signature_elements=signature_elements,
        )

    def extract_pattern_matrix(self, videos: Sequence[VideoAnalysisData]) -> PatternMappingMatrix:
        """Frequency table for the six named pattern elements."""
        logger.info("[PATTERN_EXTRACTOR] Creating pattern mapping matrix")

        combined = " ".join(v.transcript for v in videos)
        total_words = word_count(combined)

        elements: Dict[str, PatternElement] = {
            key: self._analyze_pattern_element(group, combined, total_words)
            for key, group in MATRIX_GROUPS
        }
        return PatternMappingMatrix(**elements)

    # ═══════════════════════════════════════════════════════════════════════════
    # BASELINE
    # ═══════════════════════════════════════════════════════════════════════════

    def _extract_baseline(self, combined: str) -> SpeechBaseline:
        sentences = split_sentences(combined)
        if not sentences:
            return SpeechBaseline(
                default_rhythm="Consistent, steady rhythm",
                typical_energy=EnergyLevel.MEDIUM,
                energy_description="Consistent moderate energy",
                sentence_structure=SentenceStructure.VARIED,
            )

        lengths = sentence_lengths(sentences)
        avg_length = average(lengths)

        sentence_structure = SentenceStructure.VARIED
        if avg_length < 8:
            sentence_structure = SentenceStructure.SHORT
        elif avg_length > 15:
            sentence_structure = SentenceStructure.COMPLEX

        emphasis = caps_word_count(combined) + count_exclamations(combined)
        energy_score = emphasis / len(combined) * 1000

        typical_energy = EnergyLevel.MEDIUM
        energy_description = "Consistent moderate energy"
        if energy_score > 5:
            typical_energy = EnergyLevel.HIGH
            energy_description = "High energy with frequent emphasis and excitement"
        elif energy_score < 1:
            typical_energy = EnergyLevel.LOW
            energy_description = "Calm and measured delivery"

        if coefficient_of_variation(lengths) > 0.3:
            default_rhythm = "Variable pacing with dynamic rhythm"
        else:
            default_rhythm = "Consistent, steady rhythm"

        return SpeechBaseline(
            default_rhythm=default_rhythm,
            typical_energy=typical_energy,
            energy_description=energy_description,
            sentence_structure=sentence_structure,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # EMOTIONAL STATES
    # ═══════════════════════════════════════════════════════════════════════════

    def _extract_emotional_states(self, combined: str) -> EmotionalStates:
        excited_matches = EXCITED_MARKERS.find_all(combined)
        explaining_matches = EXPLAINING_MARKERS.find_all(combined)

        return EmotionalStates(
            excited=ExcitedState(
                pattern_changes=(
                    "Increases pace, uses more emphasis"
                    if len(excited_matches) > 5 else "Slight energy increase"
                ),
                marker_phrases=dedupe(excited_matches)[:10],
                energy_spike="Voice raises, more exclamations and caps",
            ),
            explaining=ExplainingState(
                structure=(
                    ExplainingStructure.STEP_BY_STEP
                    if len(explaining_matches) > 10 else ExplainingStructure.CIRCULAR
                ),
                transition_words=dedupe(explaining_matches)[:8],
                complexity_management="Breaks down complex ideas into simple terms",
            ),
        )

    @staticmethod
    def _default_emotional_states() -> EmotionalStates:
        return EmotionalStates(
            excited=ExcitedState(
                pattern_changes="Energy level increases",
                marker_phrases=[],
                energy_spike="More animated delivery",
            ),
            explaining=ExplainingState(
                structure=ExplainingStructure.STEP_BY_STEP,
                transition_words=[],
                complexity_management="Simplifies complex concepts",
            ),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # SIGNATURE ELEMENTS
    # ═══════════════════════════════════════════════════════════════════════════

    def _extract_signature_elements(self, transcripts: List[str]) -> SignatureElements:
        combined = " ".join(transcripts)

        return SignatureElements(
            random_insertions=self._extract_frequent_phrases(combined, 2, 4)[:8],
            filler_patterns=dedupe(FILLERS.find_all(combined))[:8],
            catchphrases=Catchphrases(
                opening=self._extract_catchphrases(transcripts, first=True),
                closing=self._extract_catchphrases(transcripts, first=False),
            ),
        )

    def _extract_frequent_phrases(self, text: str, min_n: int, max_n: int) -> List[str]:
        """n-grams of min_n..max_n words repeated at least min_frequency times."""
        tokens = [t.strip(TOKEN_STRIP_CHARS) for t in text.lower().split()]
        tokens = [t for t in tokens if t]

        counts: Counter = Counter()
        for n in range(min_n, max_n + 1):
            for i in range(len(tokens) - n + 1):
                phrase = " ".join(tokens[i:i + n])
                if self._is_valid_phrase(phrase):
                    counts[phrase] += 1

        threshold = self.effective_min_frequency
        frequent = [(phrase, count) for phrase, count in counts.items() if count >= threshold]
        frequent.sort(key=lambda item: item[1], reverse=True)
        return [phrase for phrase, _ in frequent]

    @staticmethod
    def _is_valid_phrase(phrase: str) -> bool:
        words = phrase.split()
        if all(word in PHRASE_STOPWORDS for word in words):
            return False
        return len(phrase) > 3 and not DIGITS_RE.match(phrase)

    @staticmethod
    def _extract_catchphrases(transcripts: List[str], first: bool) -> List[str]:
        """Keywords recurring across the first (or last) sentences of transcripts."""
        edges = []
        for transcript in transcripts:
            sentences = split_sentences(transcript)
            if sentences:
                edges.append((sentences[0] if first else sentences[-1]).lower())

        frequency: Counter = Counter()
        for sentence in edges:
            for word in sentence.split():
                word = word.strip(TOKEN_STRIP_CHARS)
                if word and word not in PHRASE_STOPWORDS:
                    frequency[word] += 1

        common = [(word, count) for word, count in frequency.items() if count >= 2]
        common.sort(key=lambda item: item[1], reverse=True)
        return [word for word, _ in common][:5]

    # ═══════════════════════════════════════════════════════════════════════════
    # MATRIX
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def _analyze_pattern_element(group: PatternGroup, text: str, total_words: int) -> PatternElement:
        matches = group.find_all(text)

        if matches:
            frequency = f"Every {round_half_up(total_words / len(matches))} words"
        else:
            frequency = "Rarely used"

        return PatternElement(
            element=group.name,
            frequency=frequency,
            examples=dedupe(matches)[:5],
            context=group.context,
        )


def create_pattern_extractor(config: Optional[PatternExtractionConfig] = None, **overrides) -> PatternExtractor:
    """Factory function for easy usage."""
    return PatternExtractor(config, **overrides)


def extract_speech_patterns(videos: Sequence[VideoAnalysisData], **overrides) -> SpeechPatterns:
    """Convenience function for pattern extraction."""
    return create_pattern_extractor(**overrides).extract_patterns(videos)


def extract_pattern_matrix(videos: Sequence[VideoAnalysisData], **overrides) -> PatternMappingMatrix:
    """Convenience function for pattern matrix extraction."""
    return create_pattern_extractor(**overrides).extract_pattern_matrix(videos)
