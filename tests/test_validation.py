"""
Tests for content validation reports.
"""
import pytest


class TestValidatePersonaContent:
    """Tests for validate_persona_content."""

    def test_empty_content_rejected(self, persona_profile):
        """Blank content raises ValueError."""
        from voice_persona.validation import validate_persona_content

        with pytest.raises(ValueError):
            validate_persona_content("   ", persona_profile.voice_profile)

    def test_basic_report(self, persona_profile, transcripts):
        """Scores and counts are always present."""
        from voice_persona.validation import validate_persona_content

        report = validate_persona_content(transcripts[0], persona_profile.voice_profile)

        assert report.word_count == len(transcripts[0].split())
        assert report.content_length == len(transcripts[0])
        assert report.rule_validation is None
        assert report.detailed_breakdown is None
        assert report.recommendations

    def test_rule_validation_requires_parameters(self, persona_profile, transcripts):
        """Rule validation is skipped without generation parameters."""
        from voice_persona.validation import validate_persona_content

        report = validate_persona_content(
            transcripts[0], persona_profile.voice_profile, include_rule_validation=True
        )
        assert report.rule_validation is None

    def test_full_report(self, persona_profile, transcripts):
        """Rule validation and breakdown are included on request."""
        from voice_persona.validation import validate_persona_content

        report = validate_persona_content(
            transcripts[0],
            persona_profile.voice_profile,
            speech_patterns=persona_profile.speech_patterns,
            generation_parameters=persona_profile.generation_parameters,
            include_rule_validation=True,
            include_detailed_breakdown=True,
        )

        assert report.rule_validation is not None
        assert "Overall Score" in report.detailed_breakdown
        data = report.to_dict()
        assert "ruleValidation" in data
        assert data["metadata"]["wordCount"] == report.word_count


class TestRecommendations:
    """Tests for build_recommendations."""

    def test_low_scores(self, make_voice_profile):
        """Weak metrics and low overall score each get advice."""
        from voice_persona.analyzers import AuthenticityScorer
        from voice_persona.models import ValidationResult
        from voice_persona.validation import build_recommendations

        metrics = AuthenticityScorer().score_authenticity("Hello world.", make_voice_profile())
        rules = ValidationResult(valid=False, violations=[
            "Fails to maintain hook usage ratio - no persona hooks found",
            "Insufficient signature elements: 0/3 required",
        ])

        recommendations = build_recommendations(metrics, rules)

        assert "Consider using more of the persona's signature hooks and opening phrases" in recommendations
        assert "Incorporate more words from the persona's vocabulary fingerprint" in recommendations
        assert "Modify energy level and pacing to match the persona's rhythm pattern" in recommendations
        assert "Low authenticity - significant revision needed to match persona voice" in recommendations
        assert "Rule violations detected: 2 issues to address" in recommendations
        assert "Review hook usage to ensure it follows persona patterns" in recommendations
        assert "Include more signature elements from the persona profile" in recommendations
        assert "Check bridge phrase frequency and placement" not in recommendations

    @pytest.mark.parametrize("overall,expected", [
        (95, "Excellent authenticity"),
        (90, "Excellent authenticity"),
        (85, "Good authenticity"),
        (72, "Moderate authenticity"),
        (40, "Low authenticity"),
    ])
    def test_overall_bands(self, overall, expected):
        """Overall score bands at 90, 80 and 70."""
        from voice_persona.models import AuthenticityMetrics, MetricScore
        from voice_persona.validation import build_recommendations

        metric = MetricScore(weight=20, score=100, check="ok")
        metrics = AuthenticityMetrics(
            hook_accuracy=metric,
            bridge_frequency=metric,
            sentence_patterns=metric,
            vocabulary_match=metric,
            rhythm_replication=metric,
            overall_score=overall,
        )

        recommendations = build_recommendations(metrics)
        assert len(recommendations) == 1
        assert recommendations[0].startswith(expected)
