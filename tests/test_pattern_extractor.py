"""
Tests for speech pattern extraction.
"""
import pytest


class TestBaseline:
    """Tests for baseline speech characteristics."""

    def test_extraction_is_deterministic(self, videos):
        """Same videos should always yield identical patterns and matrix."""
        from voice_persona.analyzers import PatternExtractor

        extractor = PatternExtractor()
        first = extractor.extract_patterns(videos)
        second = extractor.extract_patterns(videos)

        assert first.to_dict() == second.to_dict()
        assert extractor.extract_pattern_matrix(videos).to_dict() == extractor.extract_pattern_matrix(videos).to_dict()

    def test_short_sentences(self, make_video):
        """Average sentence length under 8 words is classified as short."""
        from voice_persona.analyzers import PatternExtractor
        from voice_persona.enums import SentenceStructure

        patterns = PatternExtractor().extract_patterns([make_video("Go now. Do it today. Run fast.")])
        assert patterns.baseline.sentence_structure == SentenceStructure.SHORT

    def test_high_energy(self, make_video):
        """Caps words and exclamations push the baseline to high energy."""
        from voice_persona.analyzers import PatternExtractor
        from voice_persona.enums import EnergyLevel

        patterns = PatternExtractor().extract_patterns([make_video("WOW THIS IS HUGE!!!")])
        assert patterns.baseline.typical_energy == EnergyLevel.HIGH

    def test_low_energy(self, make_video):
        """Text with no emphasis is classified as low energy."""
        from voice_persona.analyzers import PatternExtractor
        from voice_persona.enums import EnergyLevel

        patterns = PatternExtractor().extract_patterns(
            [make_video("this is a calm sentence about nothing much at all really.")]
        )
        assert patterns.baseline.typical_energy == EnergyLevel.LOW
        assert patterns.baseline.energy_description == "Calm and measured delivery"

    def test_empty_videos_use_defaults(self):
        """No transcripts should not raise."""
        from voice_persona.analyzers import PatternExtractor
        from voice_persona.enums import EnergyLevel, SentenceStructure

        patterns = PatternExtractor().extract_patterns([])
        assert patterns.baseline.typical_energy == EnergyLevel.MEDIUM
        assert patterns.baseline.sentence_structure == SentenceStructure.VARIED


class TestSignatureElements:
    """Tests for phrase mining and sensitivity."""

    def test_repeated_phrase_is_signature(self, make_video):
        """A bigram repeated twice reaches the default minimum frequency."""
        from voice_persona.analyzers import PatternExtractor

        patterns = PatternExtractor().extract_patterns(
            [make_video("this is a game changer. the game changer again.")]
        )
        assert "game changer" in patterns.signature_elements.random_insertions

    def test_low_sensitivity_requires_more_repetitions(self, make_video):
        """Low sensitivity raises the frequency threshold by one."""
        from voice_persona.analyzers import PatternExtractor
        from voice_persona.enums import PatternSensitivity

        extractor = PatternExtractor(sensitivity=PatternSensitivity.LOW)
        assert extractor.effective_min_frequency == 3

        patterns = extractor.extract_patterns([make_video("this is a game changer. the game changer again.")])
        assert patterns.signature_elements.random_insertions == []

    def test_update_config(self):
        """update_config should replace only the given fields."""
        from voice_persona.analyzers import PatternExtractor

        extractor = PatternExtractor()
        extractor.update_config(min_frequency=4)

        assert extractor.config.min_frequency == 4
        assert extractor.config.context_window == 5

    def test_emotional_analysis_disabled(self, videos):
        """Disabled emotional analysis returns the default states."""
        from voice_persona.analyzers import PatternExtractor
        from voice_persona.enums import ExplainingStructure

        patterns = PatternExtractor(enable_emotional_analysis=False).extract_patterns(videos)
        assert patterns.emotional_states.excited.marker_phrases == []
        assert patterns.emotional_states.explaining.structure == ExplainingStructure.STEP_BY_STEP


class TestPatternMatrix:
    """Tests for the pattern mapping matrix."""

    def test_frequency_from_matches(self, make_video):
        """Frequency is total words divided by match count."""
        from voice_persona.analyzers import extract_pattern_matrix

        matrix = extract_pattern_matrix([make_video("Okay so this works. Okay so try it.")])

        assert matrix.primary_hook.frequency == "Every 4 words"
        assert matrix.primary_hook.examples == ["okay so"]
        assert matrix.primary_hook.element == "Primary Hook"

    def test_rarely_used_without_matches(self, make_video):
        """Elements with no matches are reported as rarely used."""
        from voice_persona.analyzers import extract_pattern_matrix

        matrix = extract_pattern_matrix([make_video("plain words only here.")])
        assert matrix.question_pattern.frequency == "Rarely used"
        assert matrix.question_pattern.examples == []

    @pytest.mark.parametrize("key", [
        "primaryHook", "bridgePhrase", "energyEscalator",
        "personalReference", "audienceAddress", "questionPattern",
    ])
    def test_matrix_has_all_elements(self, videos, key):
        """Every named element is present in the serialized matrix."""
        from voice_persona.analyzers import extract_pattern_matrix

        assert key in extract_pattern_matrix(videos).to_dict()
