"""
Rules Engine - NEVER/ALWAYS constraints for persona script generation.

Each qualitative rule is backed by a numeric check. Validation collects
every violation instead of stopping at the first one, so the generator can
log the full list and retry.
"""
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, List, Mapping, Optional, Tuple

from ..enums import EnergyLevel
from ..models import (
    GenerationConstraints,
    GenerationParameters,
    SpeechPatterns,
    ValidationResult,
    VoiceProfile,
)
from ..analyzers.text_stats import (
    average_sentence_length,
    contains_phrase,
    emphasis_density,
    find_formal_language,
    word_count,
)

logger = logging.getLogger(__name__)

NEVER_RULES = [
    "Use conjunctions absent from their vocabulary",
    "Create sentence structures outside their patterns",
    "Mismatch energy levels to context",
    "Forget signature bridge phrases",
    "Generate hooks outside their style",
    "Use formal language not in persona vocabulary",
    "Ignore established rhythm patterns",
    "Omit signature elements entirely",
]

ALWAYS_RULES = [
    "Maintain 80/20 primary/secondary hook ratio",
    "Follow documented sentence pattern distribution",
    "Insert unconscious tics at mapped intervals",
    "Match original content length ±20%",
    "Preserve breathing/pause patterns",
    "Use signature vocabulary fingerprint",
    "Maintain established energy levels",
    "Include bridge phrases at documented frequency",
]

FORBIDDEN_ELEMENTS = [
    "furthermore",
    "moreover",
    "consequently",
    "nevertheless",
    "pursuant to",
    "in accordance with",
    "notwithstanding",
]

WORDS_PER_SECOND = 3
PRIMARY_HOOK_SHARE = 0.6


@dataclass
class StrictRules:
    never: List[str] = field(default_factory=lambda: list(NEVER_RULES))
    always: List[str] = field(default_factory=lambda: list(ALWAYS_RULES))


@dataclass
class PatternConstraints:
    hook_rotation_ratio: Tuple[int, int] = (80, 20)  # primary vs secondary
    bridge_frequency_min: int = 2  # per 100 words
    signature_elements_required: int = 3
    vocabulary_usage_ratio: float = 0.3


@dataclass
class QualityThresholds:
    min_authenticity_score: int = 85
    max_deviation_from_original: int = 20  # percent


@dataclass
class RulesConfig:
    strict_rules: StrictRules = field(default_factory=StrictRules)
    pattern_constraints: PatternConstraints = field(default_factory=PatternConstraints)
    quality_thresholds: QualityThresholds = field(default_factory=QualityThresholds)


def merge_rules_config(base: RulesConfig, overrides: Optional[Mapping[str, Mapping[str, Any]]] = None) -> RulesConfig:
    """
    Merge section overrides into a config, returning a new RulesConfig.

    Rule lists concatenate (base rules first); scalar constraints and
    thresholds are replaced field by field. Unknown sections or fields raise
    TypeError.
    """
    overrides = dict(overrides or {})

    unknown = set(overrides) - {"strict_rules", "pattern_constraints", "quality_thresholds"}
    if unknown:
        raise TypeError(f"Unknown rules config sections: {sorted(unknown)}")

    strict = overrides.get("strict_rules", {})
    strict_rules = StrictRules(
        never=list(base.strict_rules.never) + list(strict.get("never", [])),
        always=list(base.strict_rules.always) + list(strict.get("always", [])),
    )

    pattern_overrides = dict(overrides.get("pattern_constraints", {}))
    if "hook_rotation_ratio" in pattern_overrides:
        pattern_overrides["hook_rotation_ratio"] = tuple(pattern_overrides["hook_rotation_ratio"])

    return RulesConfig(
        strict_rules=strict_rules,
        pattern_constraints=replace(base.pattern_constraints, **pattern_overrides),
        quality_thresholds=replace(base.quality_thresholds, **overrides.get("quality_thresholds", {})),
    )


def _primary_hook_count(hooks: List[str]) -> int:
    return math.ceil(len(hooks) * PRIMARY_HOOK_SHARE)


class RulesEngine:
    """Validates generation parameters and generated content."""

    def __init__(self, overrides: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self.config = merge_rules_config(RulesConfig(), overrides)

    def get_config(self) -> RulesConfig:
        return merge_rules_config(self.config)

    def update_config(self, overrides: Mapping[str, Mapping[str, Any]]) -> None:
        self.config = merge_rules_config(self.config, overrides)

    # ═══════════════════════════════════════════════════════════════════════════
    # PUBLIC API
    # ═══════════════════════════════════════════════════════════════════════════

    def validate_generation_parameters(
        self,
        params: GenerationParameters,
        profile: VoiceProfile,
        speech_patterns: Optional[SpeechPatterns] = None,
    ) -> ValidationResult:
        logger.info("[RULES_ENGINE] Validating generation parameters")

        violations: List[str] = []
        expected_primary = self.config.pattern_constraints.hook_rotation_ratio[0]

        total_hooks = params.hook_ratio.primary + params.hook_ratio.secondary
        if total_hooks > 0:
            primary_ratio = params.hook_ratio.primary / total_hooks * 100
            if abs(primary_ratio - expected_primary) > 15:
                violations.append(
                    f"Hook ratio deviation: {primary_ratio:.1f}% primary vs expected {expected_primary}%"
                )

        min_score = self.config.quality_thresholds.min_authenticity_score
        if params.authenticity_threshold < min_score:
            violations.append(
                f"Authenticity threshold {params.authenticity_threshold}% below minimum {min_score}%"
            )

        total_distribution = params.sentence_distribution.total
        if abs(total_distribution - 100) > 5:
            violations.append(f"Sentence distribution doesn't sum to 100%: {total_distribution}%")

        return self._result("Parameter", violations)

    def validate_generated_content(
        self,
        content: str,
        profile: VoiceProfile,
        params: GenerationParameters,
        speech_patterns: Optional[SpeechPatterns] = None,
    ) -> ValidationResult:
        logger.info(f"[RULES_ENGINE] Validating generated content ({len(content)} characters)")

        violations: List[str] = []
        violations.extend(self._check_never_rules(content, profile, speech_patterns))
        violations.extend(self._check_always_rules(content, profile))
        violations.extend(self._check_pattern_constraints(content, profile))
        violations.extend(self._check_quality_thresholds(content, params))

        return self._result("Content", violations)

    def get_generation_constraints(self, profile: VoiceProfile, params: GenerationParameters) -> GenerationConstraints:
        constraints = self.config.pattern_constraints
        required = (
            profile.hooks[:_primary_hook_count(profile.hooks)]
            + list(profile.bridges)[:3]
            + profile.signature_elements[:constraints.signature_elements_required]
        )
        return GenerationConstraints(
            required_elements=required,
            forbidden_elements=list(FORBIDDEN_ELEMENTS),
            structural_constraints={
                "hookRatio": list(constraints.hook_rotation_ratio),
                "minBridgeFrequency": constraints.bridge_frequency_min,
                "requiredSignatureElements": constraints.signature_elements_required,
                "sentenceDistribution": {
                    "short": params.sentence_distribution.short,
                    "medium": params.sentence_distribution.medium,
                    "long": params.sentence_distribution.long,
                },
                "maxDeviationPercent": self.config.quality_thresholds.max_deviation_from_original,
            },
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # CHECKS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def _result(kind: str, violations: List[str]) -> ValidationResult:
        valid = not violations
        if valid:
            logger.info(f"[RULES_ENGINE] {kind} validation passed")
        else:
            logger.warning(f"[RULES_ENGINE] {kind} validation failed with {len(violations)} violations")
            for violation in violations:
                logger.debug(f"[RULES_ENGINE]   - {violation}")
        return ValidationResult(valid=valid, violations=violations)

    @staticmethod
    def _signature_matches(content: str, profile: VoiceProfile) -> int:
        return sum(1 for element in profile.signature_elements if contains_phrase(content, element))

    def _check_never_rules(
        self,
        content: str,
        profile: VoiceProfile,
        speech_patterns: Optional[SpeechPatterns],
    ) -> List[str]:
        violations = [
            f"Uses formal conjunction '{formal}' absent from vocabulary"
            for formal in find_formal_language(content, profile.vocabulary_fingerprint)
        ]

        avg_length = average_sentence_length(content)
        pattern_text = " ".join(profile.sentence_patterns).lower()
        if "short" in pattern_text and avg_length > 12:
            violations.append("Creates sentence structures outside short patterns")
        if "complex" in pattern_text and avg_length < 8:
            violations.append("Creates sentence structures outside complex patterns")

        if self._signature_matches(content, profile) == 0:
            violations.append("Omits signature elements entirely")

        if speech_patterns is not None:
            energy = speech_patterns.baseline.typical_energy
            density = emphasis_density(content, scale=100)
            if energy == EnergyLevel.HIGH and density < 1:
                violations.append("Mismatches energy level - too low for high-energy persona")
            if energy == EnergyLevel.LOW and density > 3:
                violations.append("Mismatches energy level - too high for low-energy persona")

        return violations

    def _check_always_rules(self, content: str, profile: VoiceProfile) -> List[str]:
        violations = []
        constraints = self.config.pattern_constraints

        if not any(contains_phrase(content, hook) for hook in profile.hooks):
            violations.append("Fails to maintain hook usage ratio - no persona hooks found")

        fingerprint = profile.vocabulary_fingerprint
        vocab_matches = sum(1 for word in fingerprint if contains_phrase(content, word))
        expected_vocab = min(
            len(fingerprint),
            max(2, math.floor(len(fingerprint) * constraints.vocabulary_usage_ratio)),
        )
        if vocab_matches < expected_vocab:
            violations.append(
                f"Insufficient signature vocabulary usage: {vocab_matches}/{len(fingerprint)} words"
            )

        required = constraints.signature_elements_required
        signature_matches = self._signature_matches(content, profile)
        if signature_matches < required:
            violations.append(f"Insufficient signature elements: {signature_matches}/{required} required")

        return violations

    def _check_pattern_constraints(self, content: str, profile: VoiceProfile) -> List[str]:
        violations = []
        constraints = self.config.pattern_constraints
        words = word_count(content)

        bridge_count = sum(1 for bridge in profile.bridges if contains_phrase(content, bridge))
        expected_bridges = math.ceil(words / 100 * constraints.bridge_frequency_min)
        if profile.bridges and bridge_count < expected_bridges * 0.5:
            violations.append(
                f"Bridge frequency below minimum: {bridge_count} found, "
                f"{expected_bridges} expected per 100 words"
            )

        split = _primary_hook_count(profile.hooks)
        primary_matches = sum(1 for hook in profile.hooks[:split] if contains_phrase(content, hook))
        secondary_matches = sum(1 for hook in profile.hooks[split:] if contains_phrase(content, hook))
        total_matches = primary_matches + secondary_matches
        if total_matches > 0:
            actual_ratio = primary_matches / total_matches * 100
            expected_ratio = constraints.hook_rotation_ratio[0]
            if abs(actual_ratio - expected_ratio) > 20:
                violations.append(
                    f"Hook rotation ratio deviation: {actual_ratio:.1f}% primary vs expected {expected_ratio}%"
                )

        return violations

    def _check_quality_thresholds(self, content: str, params: GenerationParameters) -> List[str]:
        target_words = params.optimal_length * WORDS_PER_SECOND
        if target_words <= 0:
            return []

        max_deviation = self.config.quality_thresholds.max_deviation_from_original
        deviation = abs(word_count(content) - target_words) / target_words * 100
        if deviation > max_deviation:
            return [f"Content length deviation: {deviation:.1f}% (max: {max_deviation}%)"]
        return []


def create_rules_engine(overrides: Optional[Mapping[str, Mapping[str, Any]]] = None) -> RulesEngine:
    """Factory function for easy usage."""
    return RulesEngine(overrides)


def validate_content(
    content: str,
    profile: VoiceProfile,
    params: GenerationParameters,
    speech_patterns: Optional[SpeechPatterns] = None,
    overrides: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> ValidationResult:
    """Convenience function for content validation."""
    return create_rules_engine(overrides).validate_generated_content(content, profile, params, speech_patterns)


