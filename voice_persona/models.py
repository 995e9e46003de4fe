"""
Voice persona data model.

Value objects passed between the analyzers, the generators and the
orchestrators. Objects produced by an analysis run (videos, speech
patterns, pattern matrices, profiles, persona profiles, generated scripts)
are frozen dataclasses; a re-analysis builds new instances instead of
mutating old ones. Their list and dict fields are shared, not copied, and
are read-only by convention.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .enums import (
    EnergyLevel,
    ExplainingStructure,
    FeedAnalysisStatus,
    PatternRotation,
    SentenceStructure,
    SocialPlatform,
)
from .schemas import UserIdentifier


# ═══════════════════════════════════════════════════════════════════════════════
# SOURCE VIDEOS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EngagementStats:
    views: int = 0
    likes: int = 0
    comments: int = 0


@dataclass(frozen=True)
class VideoMetadata:
    captured_at: str
    platform: SocialPlatform


@dataclass(frozen=True)
class VideoAnalysisData:
    """One transcribed video from a creator feed."""
    video_id: str
    url: str
    transcript: str
    duration: float  # seconds
    metadata: VideoMetadata
    engagement: Optional[EngagementStats] = None

    @property
    def word_count(self) -> int:
        return len(self.transcript.split())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "videoId": self.video_id,
            "url": self.url,
            "transcript": self.transcript,
            "duration": self.duration,
            "engagement": {
                "views": self.engagement.views,
                "likes": self.engagement.likes,
                "comments": self.engagement.comments,
            } if self.engagement else None,
            "metadata": {
                "capturedAt": self.metadata.captured_at,
                "platform": self.metadata.platform.value,
            },
        }


@dataclass
class FailedVideo:
    """A feed video that could not be turned into analysis data."""
    video_id: str
    error: str


@dataclass
class UserFeedAnalysis:
    """Outcome of fetching and transcribing a creator feed."""
    user_identifier: UserIdentifier
    analysis_started: str
    videos: List[VideoAnalysisData] = field(default_factory=list)
    failures: List[FailedVideo] = field(default_factory=list)
    total_videos: int = 0
    processed_videos: int = 0
    failed_videos: int = 0
    analysis_completed: Optional[str] = None
    status: FeedAnalysisStatus = FeedAnalysisStatus.PROCESSING


# ═══════════════════════════════════════════════════════════════════════════════
# SPEECH PATTERNS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SpeechBaseline:
    default_rhythm: str
    typical_energy: EnergyLevel
    energy_description: str
    sentence_structure: SentenceStructure


@dataclass(frozen=True)
class ExcitedState:
    pattern_changes: str
    marker_phrases: List[str]
    energy_spike: str


@dataclass(frozen=True)
class ExplainingState:
    structure: ExplainingStructure
    transition_words: List[str]
    complexity_management: str


@dataclass(frozen=True)
class EmotionalStates:
    excited: ExcitedState
    explaining: ExplainingState


@dataclass(frozen=True)
class Catchphrases:
    opening: List[str] = field(default_factory=list)
    closing: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SignatureElements:
    random_insertions: List[str] = field(default_factory=list)
    filler_patterns: List[str] = field(default_factory=list)
    catchphrases: Catchphrases = field(default_factory=Catchphrases)


@dataclass(frozen=True)
class SpeechPatterns:
    """Linguistic summary of a creator, derived purely from transcript text."""
    baseline: SpeechBaseline
    emotional_states: EmotionalStates
    signature_elements: SignatureElements

    def to_dict(self) -> Dict[str, Any]:
        excited = self.emotional_states.excited
        explaining = self.emotional_states.explaining
        signature = self.signature_elements
        return {
            "baseline": {
                "defaultRhythm": self.baseline.default_rhythm,
                "typicalEnergy": self.baseline.typical_energy.value,
                "energyDescription": self.baseline.energy_description,
                "sentenceStructure": self.baseline.sentence_structure.value,
            },
            "emotionalStates": {
                "excited": {
                    "patternChanges": excited.pattern_changes,
                    "markerPhrases": list(excited.marker_phrases),
                    "energySpike": excited.energy_spike,
                },
                "explaining": {
                    "structure": explaining.structure.value,
                    "transitionWords": list(explaining.transition_words),
                    "complexityManagement": explaining.complexity_management,
                },
            },
            "signatureElements": {
                "randomInsertions": list(signature.random_insertions),
                "fillerPatterns": list(signature.filler_patterns),
                "catchphrases": {
                    "opening": list(signature.catchphrases.opening),
                    "closing": list(signature.catchphrases.closing),
                },
            },
        }


@dataclass(frozen=True)
class PatternElement:
    """Frequency summary for one named pattern element."""
    element: str
    frequency: str  # "Every N words" | "Rarely used"
    examples: List[str]
    context: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "element": self.element,
            "frequency": self.frequency,
            "examples": list(self.examples),
            "context": self.context,
        }


@dataclass(frozen=True)
class PatternMappingMatrix:
    primary_hook: PatternElement
    bridge_phrase: PatternElement
    energy_escalator: PatternElement
    personal_reference: PatternElement
    audience_address: PatternElement
    question_pattern: PatternElement

    def elements(self) -> Iterator[Tuple[str, PatternElement]]:
        yield "primaryHook", self.primary_hook
        yield "bridgePhrase", self.bridge_phrase
        yield "energyEscalator", self.energy_escalator
        yield "personalReference", self.personal_reference
        yield "audienceAddress", self.audience_address
        yield "questionPattern", self.question_pattern

    def to_dict(self) -> Dict[str, Any]:
        return {key: element.to_dict() for key, element in self.elements()}


# ═══════════════════════════════════════════════════════════════════════════════
# VOICE PROFILE
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class VoiceProfile:
    """Synthesized voice of a persona."""
    hooks: List[str]  # primary first, at most 15
    bridges: Dict[str, int]  # phrase -> frequency weight
    energy_wave: str
    sentence_patterns: List[str]
    signature_elements: List[str]
    vocabulary_fingerprint: List[str]  # at most 30
    rhythm_pattern: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hooks": list(self.hooks),
            "bridges": dict(self.bridges),
            "energyWave": self.energy_wave,
            "sentencePatterns": list(self.sentence_patterns),
            "signatureElements": list(self.signature_elements),
            "vocabularyFingerprint": list(self.vocabulary_fingerprint),
            "rhythmPattern": self.rhythm_pattern,
        }


@dataclass(frozen=True)
class HookRatio:
    primary: int
    secondary: int


@dataclass(frozen=True)
class SentenceDistribution:
    short: int
    medium: int
    long: int

    @property
    def total(self) -> int:
        return self.short + self.medium + self.long


@dataclass(frozen=True)
class GenerationParameters:
    optimal_length: float  # seconds, 15-60
    authenticity_threshold: int  # percent, 75-95
    pattern_rotation: PatternRotation
    hook_ratio: HookRatio
    sentence_distribution: SentenceDistribution

    def to_dict(self) -> Dict[str, Any]:
        return {
            "optimalLength": self.optimal_length,
            "authenticityThreshold": self.authenticity_threshold,
            "patternRotation": self.pattern_rotation.value,
            "hookRatio": {
                "primary": self.hook_ratio.primary,
                "secondary": self.hook_ratio.secondary,
            },
            "sentenceDistribution": {
                "short": self.sentence_distribution.short,
                "medium": self.sentence_distribution.medium,
                "long": self.sentence_distribution.long,
            },
        }


@dataclass(frozen=True)
class PersonaMetadata:
    videos_analyzed: int
    total_transcript_length: int
    analysis_version: str
    last_updated: str


@dataclass(frozen=True)
class PersonaProfile:
    """Complete snapshot of an analyzed creator voice."""
    persona_id: str
    user_identifier: UserIdentifier
    analysis_date: str
    voice_profile: VoiceProfile
    speech_patterns: SpeechPatterns
    pattern_mapping: PatternMappingMatrix
    generation_parameters: GenerationParameters
    metadata: PersonaMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "personaId": self.persona_id,
            "userIdentifier": self.user_identifier.model_dump(mode="json"),
            "analysisDate": self.analysis_date,
            "voiceProfile": self.voice_profile.to_dict(),
            "speechPatterns": self.speech_patterns.to_dict(),
            "patternMapping": self.pattern_mapping.to_dict(),
            "generationParameters": self.generation_parameters.to_dict(),
            "metadata": {
                "videosAnalyzed": self.metadata.videos_analyzed,
                "totalTranscriptLength": self.metadata.total_transcript_length,
                "analysisVersion": self.metadata.analysis_version,
                "lastUpdated": self.metadata.last_updated,
            },
        }


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION AND SCORING
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class ValidationResult:
    """All rule violations found for one input (never fail-fast)."""
    valid: bool
    violations: List[str] = field(default_factory=list)


@dataclass
class GenerationConstraints:
    required_elements: List[str]
    forbidden_elements: List[str]
    structural_constraints: Dict[str, Any]


@dataclass(frozen=True)
class MetricScore:
    weight: int
    score: int  # 0-100
    check: str


@dataclass(frozen=True)
class AuthenticityMetrics:
    hook_accuracy: MetricScore
    bridge_frequency: MetricScore
    sentence_patterns: MetricScore
    vocabulary_match: MetricScore
    rhythm_replication: MetricScore
    overall_score: int

    def metrics(self) -> Dict[str, MetricScore]:
        return {
            "hookAccuracy": self.hook_accuracy,
            "bridgeFrequency": self.bridge_frequency,
            "sentencePatterns": self.sentence_patterns,
            "vocabularyMatch": self.vocabulary_match,
            "rhythmReplication": self.rhythm_replication,
        }

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            name: {"weight": m.weight, "score": m.score, "check": m.check}
            for name, m in self.metrics().items()
        }
        result["overallScore"] = self.overall_score
        return result


# ═══════════════════════════════════════════════════════════════════════════════
# GENERATED SCRIPTS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ScriptStructure:
    """Hook -> bridge -> core message -> escalation -> close."""
    hook: str
    bridge: str
    core_message: str
    escalation: str
    close: str

    def combined(self) -> str:
        return " ".join([self.hook, self.bridge, self.core_message, self.escalation, self.close])


@dataclass(frozen=True)
class ScriptMetadata:
    generated_at: str
    target_length: float
    actual_length: int  # estimated seconds
    word_count: int


@dataclass(frozen=True)
class GeneratedScript:
    id: str
    persona_id: str
    topic: str
    script: str
    structure: ScriptStructure
    authenticity: AuthenticityMetrics
    metadata: ScriptMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "personaId": self.persona_id,
            "topic": self.topic,
            "script": self.script,
            "structure": {
                "hook": self.structure.hook,
                "bridge": self.structure.bridge,
                "coreMessage": self.structure.core_message,
                "escalation": self.structure.escalation,
                "close": self.structure.close,
            },
            "authenticity": self.authenticity.to_dict(),
            "metadata": {
                "generatedAt": self.metadata.generated_at,
                "targetLength": self.metadata.target_length,
                "actualLength": self.metadata.actual_length,
                "wordCount": self.metadata.word_count,
            },
        }


# ═══════════════════════════════════════════════════════════════════════════════
# ORCHESTRATOR RESULTS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class ErrorInfo:
    code: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


@dataclass
class PersonaAnalysisResult:
    success: bool
    request_id: str
    processing_time_ms: int = 0
    videos_processed: int = 0
    persona_profile: Optional[PersonaProfile] = None
    error: Optional[ErrorInfo] = None
    from_cache: bool = False


@dataclass
class ScriptGenerationResult:
    success: bool
    request_id: str
    generation_time_ms: int = 0
    script: Optional[GeneratedScript] = None
    error: Optional[ErrorInfo] = None
    attempts: int = 0
