"""
Tests for the module-level convenience functions.
"""


class TestAnalyzerShortcuts:
    """Shortcuts match the class-based pipeline."""

    def test_extract_and_profile(self, videos):
        from voice_persona.analyzers import PatternExtractor, VoiceProfiler
        from voice_persona.analyzers.pattern_extractor import extract_pattern_matrix, extract_speech_patterns
        from voice_persona.analyzers.voice_profiler import create_voice_profile

        patterns = extract_speech_patterns(videos)
        matrix = extract_pattern_matrix(videos)
        profile = create_voice_profile(videos, patterns, matrix)

        extractor = PatternExtractor()
        expected_matrix = extractor.extract_pattern_matrix(videos)
        expected = VoiceProfiler().create_profile(videos, extractor.extract_patterns(videos), expected_matrix)

        assert patterns == extractor.extract_patterns(videos)
        assert matrix == expected_matrix
        assert profile == expected

    def test_sensitivity_override(self, videos):
        """Overrides reach the extractor config."""
        from voice_persona.analyzers.pattern_extractor import extract_speech_patterns

        assert extract_speech_patterns(videos, sensitivity="high") is not None


class TestGeneratorShortcuts:
    """Shortcuts for rule validation and script generation."""

    def test_validate_content_flags_formal_language(self, persona_profile):
        from voice_persona.generators.rules_engine import validate_content

        result = validate_content(
            "Furthermore, pursuant to our discussion, we proceed.",
            persona_profile.voice_profile,
            persona_profile.generation_parameters,
        )

        assert result.valid is False
        assert any("formal" in violation.lower() for violation in result.violations)

    def test_generate_persona_script(self, persona_profile, rng):
        from voice_persona.generators.script_generator import generate_persona_script
        from voice_persona.schemas import ScriptGenerationInput

        request = ScriptGenerationInput(persona_id=persona_profile.persona_id, topic="meal prep")
        result = generate_persona_script(request, persona_profile, max_retries=1, rng=rng)

        assert result.success is True
        assert result.script is not None
        assert result.attempts == 1
