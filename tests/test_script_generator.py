"""
Tests for persona script generation.
"""
import random
import pytest
from unittest.mock import MagicMock


@pytest.fixture
def request_input(persona_profile):
    from voice_persona.schemas import ScriptGenerationInput
    return ScriptGenerationInput(persona_id=persona_profile.persona_id, topic="Sleep Habits", target_length=30)


class TestGenerateScript:
    """Tests for ScriptGenerator.generate_script."""

    def test_unreachable_threshold_still_returns_script(self, persona_profile, request_input, rng):
        """A 99% threshold with one attempt returns the best script anyway."""
        from voice_persona.generators import ScriptGenerator

        result = ScriptGenerator(max_retries=1, min_acceptable_score=99, rng=rng).generate_script(
            request_input, persona_profile
        )

        assert result.success is True
        assert result.attempts == 1
        assert result.script is not None
        assert 0 <= result.script.authenticity.overall_score <= 100
        assert result.request_id.startswith("req_")

    def test_script_structure(self, persona_profile, request_input, rng):
        """The script text is the five sections joined in order."""
        from voice_persona.generators import ScriptGenerator

        script = ScriptGenerator(rng=rng).generate_script(request_input, persona_profile).script
        structure = script.structure

        assert script.script == structure.combined()
        assert all([structure.hook, structure.bridge, structure.core_message, structure.escalation, structure.close])
        assert "sleep habits" in structure.core_message
        assert script.id.startswith("script_")
        assert script.persona_id == persona_profile.persona_id

    def test_metadata_estimates_length(self, persona_profile, request_input, rng):
        """Actual length assumes three words per second."""
        from voice_persona.generators import ScriptGenerator

        script = ScriptGenerator(rng=rng).generate_script(request_input, persona_profile).script

        assert script.metadata.word_count == len(script.script.split())
        assert script.metadata.actual_length == round(script.metadata.word_count / 3)
        assert script.metadata.target_length == 30

    def test_seeded_generation_is_reproducible(self, persona_profile, request_input):
        """Equal seeds give equal scripts."""
        from voice_persona.generators import ScriptGenerator

        first = ScriptGenerator(rng=random.Random(3)).generate_script(request_input, persona_profile)
        second = ScriptGenerator(rng=random.Random(3)).generate_script(request_input, persona_profile)

        assert first.script.script == second.script.script

    def test_scoring_disabled_accepts_first_attempt(self, persona_profile, request_input, rng):
        """Without validation and scoring the first script is accepted at 80%."""
        from voice_persona.generators import ScriptGenerator

        result = ScriptGenerator(
            enable_rule_validation=False,
            enable_authenticity_scoring=False,
            rng=rng,
        ).generate_script(request_input, persona_profile)

        assert result.success is True
        assert result.attempts == 1
        assert result.script.authenticity.overall_score == 80
        assert result.script.authenticity.hook_accuracy.check == "Default scoring disabled"

    def test_fails_only_when_every_attempt_raises(self, persona_profile, request_input, rng):
        """Exceptions in every attempt produce GENERATION_FAILED."""
        from voice_persona.generators import ScriptGenerator

        rules_engine = MagicMock()
        rules_engine.validate_generated_content.side_effect = RuntimeError("rules unavailable")

        result = ScriptGenerator(max_retries=2, rules_engine=rules_engine, rng=rng).generate_script(
            request_input, persona_profile
        )

        assert result.success is False
        assert result.script is None
        assert result.attempts == 2
        assert result.error.code == "GENERATION_FAILED"
        assert result.error.message == "rules unavailable"


class TestHooks:
    """Tests for hook selection."""

    def test_listen_up_hook_is_customized(self, persona_profile, request_input, rng):
        """A 'listen up' hook is rewritten around the topic."""
        from dataclasses import replace
        from voice_persona.generators import ScriptGenerator

        voice = replace(persona_profile.voice_profile, hooks=["listen up"])
        profile = replace(persona_profile, voice_profile=voice)

        structure = ScriptGenerator(rng=rng).build_structure(request_input, profile)
        assert structure.hook == "Listen up - everything you know about sleep habits is wrong"

    def test_default_hook_without_hooks(self, persona_profile, request_input, rng):
        """Profiles without hooks fall back to a generic opener."""
        from dataclasses import replace
        from voice_persona.generators import ScriptGenerator

        profile = replace(persona_profile, voice_profile=replace(persona_profile.voice_profile, hooks=[]))
        assert ScriptGenerator(rng=rng).build_structure(request_input, profile).hook == "Hey everyone"


class TestSelectBestAttempt:
    """Tests for best attempt selection."""

    def test_highest_score_earliest_tie(self):
        """Ties resolve to the earliest attempt."""
        from voice_persona.generators.script_generator import AttemptOutcome, select_best_attempt

        script = MagicMock()
        outcomes = [
            AttemptOutcome(attempt=1, script=script, score=70),
            AttemptOutcome(attempt=2, script=script, score=90),
            AttemptOutcome(attempt=3, script=script, score=90),
        ]
        assert select_best_attempt(outcomes).attempt == 2

    def test_attempts_without_script_ignored(self):
        """Failed attempts are never selected."""
        from voice_persona.generators.script_generator import AttemptOutcome, select_best_attempt

        assert select_best_attempt([AttemptOutcome(attempt=1, error=RuntimeError("x"))]) is None


class TestGenerationInput:
    """Tests for request validation."""

    def test_empty_topic_rejected(self):
        """Blank topics are rejected before generation starts."""
        from pydantic import ValidationError
        from voice_persona.schemas import ScriptGenerationInput

        with pytest.raises(ValidationError):
            ScriptGenerationInput(persona_id="p1", topic="   ")

    def test_style_values(self):
        """Styles parse from their wire values."""
        from voice_persona.enums import ScriptStyle
        from voice_persona.schemas import ScriptGenerationInput

        request = ScriptGenerationInput(persona_id="p1", topic="Budgeting", style="hook-heavy")
        assert request.style == ScriptStyle.HOOK_HEAVY
