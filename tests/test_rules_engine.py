"""
Tests for the persona rules engine.
"""
import pytest


@pytest.fixture
def casual_profile(make_voice_profile):
    """Persona with a casual vocabulary and no formal connectives."""
    return make_voice_profile(
        hooks=["okay so", "listen up", "hey"],
        bridges={"basically": 8, "which means": 7},
        sentence_patterns=["Short, punchy sentences"],
        signature_elements=["honestly", "you know", "follow for more"],
        vocabulary_fingerprint=["protein", "workout", "plank", "meals"],
        rhythm_pattern="Variable pacing with dynamic rhythm. Fast-paced delivery",
    )


class TestContentValidation:
    """Tests for RulesEngine.validate_generated_content."""

    def test_formal_language_detected(self, casual_profile, make_generation_parameters):
        """Formal connectives absent from the vocabulary are violations."""
        from voice_persona.generators import RulesEngine

        result = RulesEngine().validate_generated_content(
            "Furthermore, pursuant to our discussion, we shall proceed with the plan.",
            casual_profile,
            make_generation_parameters(),
        )

        assert result.valid is False
        formal = [v for v in result.violations if "formal" in v]
        assert any("furthermore" in v for v in formal)
        assert any("pursuant" in v for v in formal)

    def test_formal_word_in_vocabulary_is_allowed(self, make_voice_profile, make_generation_parameters):
        """A connective the persona actually uses is not a violation."""
        from voice_persona.generators import RulesEngine

        profile = make_voice_profile(vocabulary_fingerprint=["furthermore"])
        result = RulesEngine().validate_generated_content(
            "Furthermore this works.", profile, make_generation_parameters()
        )
        assert not any("formal" in v for v in result.violations)

    def test_collects_all_violations(self, casual_profile, make_generation_parameters):
        """Validation is not fail-fast."""
        from voice_persona.generators import RulesEngine

        result = RulesEngine().validate_generated_content(
            "Moreover the committee has concluded its deliberations after a long and thorough review process today.",
            casual_profile,
            make_generation_parameters(optimal_length=10),
        )

        violations = " | ".join(result.violations)
        assert "moreover" in violations
        assert "Omits signature elements entirely" in violations
        assert "no persona hooks found" in violations
        assert "Content length deviation" in violations
        assert len(result.violations) >= 5

    def test_bridge_frequency_skipped_without_bridges(self, make_voice_profile, make_generation_parameters):
        """Profiles without bridges never report bridge frequency."""
        from voice_persona.generators import RulesEngine

        profile = make_voice_profile(hooks=["okay so"])
        result = RulesEngine().validate_generated_content(
            "Okay so " + "word " * 90, profile, make_generation_parameters()
        )
        assert not any("Bridge frequency" in v for v in result.violations)

    def test_energy_mismatch_for_high_energy_persona(self, casual_profile, make_generation_parameters, persona_profile):
        """Flat text is too low energy for a high energy persona."""
        from dataclasses import replace
        from voice_persona.enums import EnergyLevel
        from voice_persona.generators import RulesEngine

        patterns = persona_profile.speech_patterns
        high = replace(patterns, baseline=replace(patterns.baseline, typical_energy=EnergyLevel.HIGH))

        result = RulesEngine().validate_generated_content(
            "okay so this is calm text about protein and plank work.",
            casual_profile,
            make_generation_parameters(),
            high,
        )
        assert "Mismatches energy level - too low for high-energy persona" in result.violations

    def test_zero_optimal_length_skips_length_check(self, casual_profile, make_generation_parameters):
        """A zero target length does not divide by zero."""
        from voice_persona.generators import RulesEngine

        result = RulesEngine().validate_generated_content(
            "okay so hi.", casual_profile, make_generation_parameters(optimal_length=0)
        )
        assert not any("length deviation" in v for v in result.violations)


class TestParameterValidation:
    """Tests for RulesEngine.validate_generation_parameters."""

    def test_valid_parameters(self, casual_profile, make_generation_parameters):
        """80/20 hooks, threshold 85 and a 100% distribution pass."""
        from voice_persona.generators import RulesEngine

        result = RulesEngine().validate_generation_parameters(make_generation_parameters(), casual_profile)
        assert result.valid is True
        assert result.violations == []

    def test_low_threshold_and_hook_ratio(self, casual_profile, make_generation_parameters):
        """60% primary hooks and an 80% threshold are both reported."""
        from voice_persona.generators import RulesEngine
        from voice_persona.models import HookRatio

        params = make_generation_parameters(
            hook_ratio=HookRatio(primary=3, secondary=2),
            authenticity_threshold=80,
        )
        result = RulesEngine().validate_generation_parameters(params, casual_profile)

        assert result.valid is False
        assert len(result.violations) == 2
        assert any("Hook ratio deviation" in v for v in result.violations)
        assert any("below minimum 85%" in v for v in result.violations)

    def test_distribution_sum(self, casual_profile, make_generation_parameters):
        """Distributions off by more than 5% are rejected."""
        from voice_persona.generators import RulesEngine
        from voice_persona.models import SentenceDistribution

        params = make_generation_parameters(sentence_distribution=SentenceDistribution(short=50, medium=50, long=20))
        result = RulesEngine().validate_generation_parameters(params, casual_profile)
        assert any("doesn't sum to 100%" in v for v in result.violations)


class TestRulesConfig:
    """Tests for configuration merging."""

    def test_rule_lists_concatenate(self):
        """Extra rules are appended to the defaults."""
        from voice_persona.generators import RulesEngine
        from voice_persona.generators.rules_engine import NEVER_RULES

        engine = RulesEngine({"strict_rules": {"never": ["Mention competitors"]}})
        never = engine.get_config().strict_rules.never

        assert never[:len(NEVER_RULES)] == NEVER_RULES
        assert never[-1] == "Mention competitors"

    def test_scalars_replace(self):
        """Scalar overrides replace only the named field."""
        from voice_persona.generators import RulesEngine

        engine = RulesEngine()
        engine.update_config({"quality_thresholds": {"min_authenticity_score": 90}})
        config = engine.get_config()

        assert config.quality_thresholds.min_authenticity_score == 90
        assert config.quality_thresholds.max_deviation_from_original == 20
        assert config.pattern_constraints.hook_rotation_ratio == (80, 20)

    def test_get_config_is_a_copy(self):
        """Mutating the returned config does not affect the engine."""
        from voice_persona.generators import RulesEngine

        engine = RulesEngine()
        engine.get_config().strict_rules.never.append("Something")
        assert "Something" not in engine.get_config().strict_rules.never

    def test_unknown_section_raises(self):
        """Unknown sections are rejected."""
        from voice_persona.generators import RulesConfig, merge_rules_config

        with pytest.raises(TypeError):
            merge_rules_config(RulesConfig(), {"colors": {"primary": "red"}})


class TestGenerationConstraints:
    """Tests for RulesEngine.get_generation_constraints."""

    def test_constraints(self, casual_profile, make_generation_parameters):
        """Required elements come from the profile, forbidden ones are fixed."""
        from voice_persona.generators import RulesEngine

        constraints = RulesEngine().get_generation_constraints(casual_profile, make_generation_parameters())

        assert constraints.required_elements[:2] == ["okay so", "listen up"]
        assert "basically" in constraints.required_elements
        assert "furthermore" in constraints.forbidden_elements
        assert constraints.structural_constraints["hookRatio"] == [80, 20]
        assert constraints.structural_constraints["minBridgeFrequency"] == 2
        assert constraints.structural_constraints["sentenceDistribution"] == {"short": 30, "medium": 40, "long": 30}
