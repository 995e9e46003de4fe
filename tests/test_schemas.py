"""
Tests for input schemas and analysis configuration.
"""
import pytest
from pydantic import ValidationError


class TestUserIdentifier:
    """Tests for UserIdentifier."""

    def test_handle_normalized(self):
        """Leading '@' and whitespace are stripped."""
        from voice_persona.schemas import UserIdentifier

        identifier = UserIdentifier(handle="  @creator ")
        assert identifier.handle == "creator"
        assert identifier.cache_key == "creator:tiktok"

    def test_empty_handle_rejected(self):
        from voice_persona.schemas import UserIdentifier

        with pytest.raises(ValidationError):
            UserIdentifier(handle="@")

    def test_unknown_platform_rejected(self):
        from voice_persona.schemas import UserIdentifier

        with pytest.raises(ValidationError):
            UserIdentifier(handle="creator", platform="myspace")

    def test_platform_case_insensitive(self):
        from voice_persona.enums import SocialPlatform
        from voice_persona.schemas import UserIdentifier

        identifier = UserIdentifier(handle="creator", platform="TikTok")
        assert identifier.platform == SocialPlatform.TIKTOK

    def test_frozen(self):
        """Identifiers are immutable."""
        from voice_persona.schemas import UserIdentifier

        identifier = UserIdentifier(handle="creator")
        with pytest.raises(ValidationError):
            identifier.handle = "other"


class TestScriptGenerationInput:
    """Tests for ScriptGenerationInput."""

    def test_defaults(self):
        from voice_persona.schemas import ScriptGenerationInput

        request = ScriptGenerationInput(persona_id="p1", topic="  Budgeting ")
        assert request.topic == "Budgeting"
        assert request.target_length == 30
        assert request.style is None

    def test_non_positive_length_rejected(self):
        from voice_persona.schemas import ScriptGenerationInput

        with pytest.raises(ValidationError):
            ScriptGenerationInput(persona_id="p1", topic="Budgeting", target_length=0)


class TestPersonaAnalysisConfig:
    """Tests for PersonaAnalysisConfig."""

    def test_defaults(self):
        from voice_persona.enums import PatternSensitivity
        from voice_persona.schemas import PersonaAnalysisConfig

        config = PersonaAnalysisConfig()
        assert config.batch_size == 5
        assert config.max_videos == 30
        assert config.cache_ttl == 604800
        assert config.rate_limit.requests_per_minute == 10
        assert config.analysis.min_transcript_length == 50
        assert config.analysis.pattern_sensitivity == PatternSensitivity.MEDIUM

    def test_delays(self):
        """Batch and persona delays derive from the rate limit."""
        from voice_persona.schemas import PersonaAnalysisConfig

        config = PersonaAnalysisConfig.voice_analysis_defaults()
        assert config.persona_delay_seconds == 7.5
        assert config.batch_delay_seconds == 37.5

    def test_merged_leaves_original(self):
        """merged returns a new config and never mutates the original."""
        from voice_persona.schemas import PersonaAnalysisConfig

        base = PersonaAnalysisConfig()
        merged = base.merged({"analysis": {"pattern_sensitivity": "high"}, "max_videos": 10})

        assert merged.max_videos == 10
        assert merged.analysis.pattern_sensitivity.value == "high"
        assert merged.analysis.min_transcript_length == 50
        assert base.max_videos == 30
        assert base.merged({}) is base

    def test_invalid_override_rejected(self):
        from voice_persona.schemas import PersonaAnalysisConfig

        with pytest.raises(ValidationError):
            PersonaAnalysisConfig().merged({"batch_size": 0})
