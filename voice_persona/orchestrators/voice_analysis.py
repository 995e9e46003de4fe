"""
Voice Analysis Orchestrator - End-to-end persona analysis.

Pipeline:
    feed -> speech patterns -> pattern matrix -> voice profile
         -> generation parameters -> PersonaProfile

Top-level calls return result objects with success/error instead of
raising, so callers can render partial and failed states.
"""
import asyncio
import logging
import random
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ..analyzers import PatternExtractor, VoiceProfiler
from ..config import config as app_config
from ..enums import EnergyLevel, FeedAnalysisStatus, SentenceStructure
from ..exceptions import InsufficientContentError
from ..generators import ScriptGenerator
from ..models import (
    ErrorInfo,
    PersonaAnalysisResult,
    PersonaMetadata,
    PersonaProfile,
    ScriptGenerationResult,
)
from ..persistence import BasePersonaStore
from ..providers import (
    BaseFeedProvider,
    BaseTranscriptionProvider,
    get_feed_provider,
    get_transcription_provider,
)
from ..schemas import PersonaAnalysisConfig, ScriptGenerationInput, UserIdentifier
from .error_classifier import classify_analysis_error
from .user_feed import Sleep, UserFeedOrchestrator

logger = logging.getLogger(__name__)

ANALYSIS_VERSION = "1.0.0"


@dataclass
class AnalysisSummary:
    overview: str
    key_characteristics: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overview": self.overview,
            "keyCharacteristics": list(self.key_characteristics),
            "strengths": list(self.strengths),
            "recommendations": list(self.recommendations),
        }


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def _request_id() -> str:
    return f"analysis_{_timestamp_ms()}_{uuid.uuid4().hex[:9]}"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _generate_for_persona(
    request: ScriptGenerationInput,
    profile: PersonaProfile,
    rng: Optional[random.Random] = None,
) -> ScriptGenerationResult:
    logger.info(f"[VOICE_ANALYSIS] Generating script for persona {request.persona_id} on topic: {request.topic}")

    try:
        generator = ScriptGenerator(
            enable_rule_validation=True,
            enable_authenticity_scoring=True,
            min_acceptable_score=profile.generation_parameters.authenticity_threshold,
            rng=rng,
        )
        result = generator.generate_script(request, profile)
    except Exception as e:
        logger.error(f"[VOICE_ANALYSIS] Script generation failed: {e}")
        return ScriptGenerationResult(
            success=False,
            request_id=_request_id(),
            error=ErrorInfo(
                code="SCRIPT_GENERATION_FAILED",
                message=str(e) or "Unknown script generation error",
            ),
        )

    if result.success and result.script is not None:
        logger.info(
            f"[VOICE_ANALYSIS] Script generated successfully with "
            f"{result.script.authenticity.overall_score}% authenticity"
        )
    return result


class VoiceAnalysisOrchestrator:
    """
    Coordinates the complete voice persona workflow.

    Usage:
        orchestrator = VoiceAnalysisOrchestrator(feed_provider=..., transcription_provider=...)
        result = await orchestrator.analyze_voice_persona(UserIdentifier(handle="creator"))
        if result.success:
            script = orchestrator.generate_script(request, result.persona_profile)
    """

    def __init__(
        self,
        config: Optional[PersonaAnalysisConfig] = None,
        feed_provider: Optional[BaseFeedProvider] = None,
        transcription_provider: Optional[BaseTranscriptionProvider] = None,
        store: Optional[BasePersonaStore] = None,
        sleep: Sleep = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or app_config.analysis_config(PersonaAnalysisConfig.voice_analysis_defaults())
        self._owns_feed_provider = feed_provider is None
        self._owns_transcription_provider = transcription_provider is None
        self.feed_provider = feed_provider or get_feed_provider()
        self.transcription_provider = transcription_provider or get_transcription_provider()
        self.store = store
        self._sleep = sleep
        self._rng = rng
        self._profiler = VoiceProfiler()

    async def close(self) -> None:
        """Close the providers this orchestrator created."""
        if self._owns_feed_provider:
            await self.feed_provider.close()
        if self._owns_transcription_provider:
            await self.transcription_provider.close()

    async def __aenter__(self) -> "VoiceAnalysisOrchestrator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def update_config(self, overrides: Dict[str, Any]) -> None:
        self.config = self.config.merged(overrides)

    def get_config(self) -> PersonaAnalysisConfig:
        return self.config.model_copy(deep=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # ANALYSIS
    # ═══════════════════════════════════════════════════════════════════════════

    async def analyze_voice_persona(
        self,
        user_identifier: UserIdentifier,
        use_cache: bool = False,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> PersonaAnalysisResult:
        started = time.monotonic()
        request_id = _request_id()
        logger.info(
            f"[VOICE_ANALYSIS] Starting complete persona analysis for "
            f"{user_identifier.handle} on {user_identifier.platform.value}"
        )

        if use_cache and self.store is not None:
            cached = self.store.get(user_identifier.cache_key)
            if cached is not None:
                logger.info(f"[VOICE_ANALYSIS] Using cached persona {cached.persona_id}")
                return PersonaAnalysisResult(
                    success=True,
                    request_id=request_id,
                    processing_time_ms=int((time.monotonic() - started) * 1000),
                    videos_processed=cached.metadata.videos_analyzed,
                    persona_profile=cached,
                    from_cache=True,
                )

        config = self.config.merged(overrides)

        try:
            profile = await self._build_profile(user_identifier, config)
        except Exception as e:
            elapsed_ms = int((time.monotonic() - started) * 1000)
            message = str(e) or "Unknown error"
            code = classify_analysis_error(message)
            logger.error(f"[VOICE_ANALYSIS] Analysis failed after {elapsed_ms}ms ({code.value}): {message}")
            return PersonaAnalysisResult(
                success=False,
                request_id=request_id,
                processing_time_ms=elapsed_ms,
                error=ErrorInfo(code=code.value, message=message),
            )

        if self.store is not None:
            self.store.save(profile.persona_id, profile, ttl=config.cache_ttl)
            self.store.save(user_identifier.cache_key, profile, ttl=config.cache_ttl)

        elapsed_ms = int((time.monotonic() - started) * 1000)
        voice = profile.voice_profile
        logger.info(f"[VOICE_ANALYSIS] Voice persona analysis completed successfully in {elapsed_ms}ms")
        logger.info(
            f"[VOICE_ANALYSIS] Profile created with {len(voice.hooks)} hooks, "
            f"{len(voice.bridges)} bridge patterns, {len(voice.signature_elements)} signature elements, "
            f"{len(voice.vocabulary_fingerprint)} vocabulary words"
        )

        return PersonaAnalysisResult(
            success=True,
            request_id=request_id,
            processing_time_ms=elapsed_ms,
            videos_processed=profile.metadata.videos_analyzed,
            persona_profile=profile,
        )

    async def _build_profile(self, user_identifier: UserIdentifier, config: PersonaAnalysisConfig) -> PersonaProfile:
        logger.info("[VOICE_ANALYSIS] Step 1: Retrieving user feed...")
        feed_orchestrator = UserFeedOrchestrator(
            config=config,
            feed_provider=self.feed_provider,
            transcription_provider=self.transcription_provider,
            sleep=self._sleep,
        )
        feed = await feed_orchestrator.analyze_feed(user_identifier)

        if feed.status == FeedAnalysisStatus.FAILED or feed.processed_videos == 0:
            raise InsufficientContentError(feed.processed_videos)

        videos = feed.videos
        logger.info(f"[VOICE_ANALYSIS] Feed analysis completed: {feed.processed_videos} videos processed")

        logger.info("[VOICE_ANALYSIS] Step 2: Extracting speech patterns...")
        extractor = PatternExtractor(
            sensitivity=config.analysis.pattern_sensitivity,
            enable_emotional_analysis=config.analysis.enable_emotional_analysis,
        )
        speech_patterns = extractor.extract_patterns(videos)

        logger.info("[VOICE_ANALYSIS] Step 3: Creating pattern mapping matrix...")
        pattern_matrix = extractor.extract_pattern_matrix(videos)

        logger.info("[VOICE_ANALYSIS] Step 4: Generating voice profile...")
        voice_profile = self._profiler.create_profile(videos, speech_patterns, pattern_matrix)

        logger.info("[VOICE_ANALYSIS] Step 5: Creating generation parameters...")
        parameters = self._profiler.create_generation_parameters(voice_profile, speech_patterns, videos)

        now = _now()
        return PersonaProfile(
            persona_id=f"{user_identifier.handle}_{user_identifier.platform.value}_{_timestamp_ms()}",
            user_identifier=user_identifier,
            analysis_date=now,
            voice_profile=voice_profile,
            speech_patterns=speech_patterns,
            pattern_mapping=pattern_matrix,
            generation_parameters=parameters,
            metadata=PersonaMetadata(
                videos_analyzed=feed.processed_videos,
                total_transcript_length=sum(len(v.transcript) for v in videos),
                analysis_version=ANALYSIS_VERSION,
                last_updated=now,
            ),
        )

    async def analyze_batch(self, user_identifiers: Sequence[UserIdentifier]) -> List[PersonaAnalysisResult]:
        """Analyze personas one after another, pausing between them."""
        logger.info(f"[VOICE_ANALYSIS] Starting batch analysis for {len(user_identifiers)} users")

        results: List[PersonaAnalysisResult] = []
        for index, identifier in enumerate(user_identifiers):
            try:
                results.append(await self.analyze_voice_persona(identifier))
            except Exception as e:
                logger.error(f"[VOICE_ANALYSIS] Batch analysis failed for {identifier.handle}: {e}")
                message = str(e) or "Batch analysis error"
                results.append(PersonaAnalysisResult(
                    success=False,
                    request_id=_request_id(),
                    error=ErrorInfo(code=classify_analysis_error(message).value, message=message),
                ))

            if index < len(user_identifiers) - 1:
                delay = self.config.persona_delay_seconds
                logger.info(f"[VOICE_ANALYSIS] Rate limiting delay: {delay:.1f}s")
                await self._sleep(delay)

        successful = sum(1 for r in results if r.success)
        logger.info(f"[VOICE_ANALYSIS] Batch analysis completed: {successful}/{len(user_identifiers)} successful")
        return results

    # ═══════════════════════════════════════════════════════════════════════════
    # SCRIPT GENERATION
    # ═══════════════════════════════════════════════════════════════════════════

    def generate_script(self, request: ScriptGenerationInput, profile: PersonaProfile) -> ScriptGenerationResult:
        """Generate a script held to the persona's own authenticity threshold."""
        return _generate_for_persona(request, profile, self._rng)

    def get_persona(self, key: str) -> Optional[PersonaProfile]:
        """Stored profile by persona id or handle:platform key."""
        if self.store is None:
            return None
        return self.store.get(key)

    # ═══════════════════════════════════════════════════════════════════════════
    # SUMMARY
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def get_analysis_summary(profile: PersonaProfile) -> AnalysisSummary:
        voice = profile.voice_profile
        baseline = profile.speech_patterns.baseline

        overview = (
            f"Voice persona for @{profile.user_identifier.handle} analyzed from "
            f"{profile.metadata.videos_analyzed} videos. {baseline.energy_description} "
            f"with {baseline.sentence_structure.value} sentence structure."
        )

        characteristics = [
            f"{len(voice.hooks)} signature hooks identified",
            f"{len(voice.bridges)} bridge patterns",
            f"{baseline.typical_energy.value} energy baseline",
            f"{len(voice.vocabulary_fingerprint)} word vocabulary fingerprint",
            f"{len(voice.signature_elements)} signature elements",
        ]

        strengths = []
        if len(voice.hooks) > 10:
            strengths.append("Rich hook variety")
        if len(voice.bridges) > 8:
            strengths.append("Strong transition patterns")
        if len(voice.signature_elements) > 6:
            strengths.append("Distinctive signature elements")
        if baseline.typical_energy == EnergyLevel.HIGH:
            strengths.append("High-energy engagement")

        recommendations = []
        threshold = profile.generation_parameters.authenticity_threshold
        if threshold > 90:
            recommendations.append("Highly authentic persona - maintain current patterns")
        elif threshold < 80:
            recommendations.append("Consider analyzing more content for better pattern consistency")
        if baseline.sentence_structure == SentenceStructure.VARIED:
            recommendations.append("Leverage sentence variety for dynamic content")

        return AnalysisSummary(
            overview=overview,
            key_characteristics=characteristics,
            strengths=strengths or ["Consistent voice patterns"],
            recommendations=recommendations or ["Profile ready for script generation"],
        )


def create_voice_analysis_orchestrator(
    config: Optional[PersonaAnalysisConfig] = None,
    **kwargs,
) -> VoiceAnalysisOrchestrator:
    """Factory function for easy usage."""
    return VoiceAnalysisOrchestrator(config, **kwargs)


async def analyze_voice_persona(
    user_identifier: UserIdentifier,
    config: Optional[PersonaAnalysisConfig] = None,
    **kwargs,
) -> PersonaAnalysisResult:
    """Convenience function for single persona analysis."""
    async with create_voice_analysis_orchestrator(config, **kwargs) as orchestrator:
        return await orchestrator.analyze_voice_persona(user_identifier)


def generate_script_with_persona(request: ScriptGenerationInput, profile: PersonaProfile) -> ScriptGenerationResult:
    """Convenience function for script generation with a persona."""
    return _generate_for_persona(request, profile)
