"""
User Feed Orchestrator - Feed retrieval and batched transcription.

Fetches a creator feed, transcribes its videos in rate-limited batches and
splits the outcome into usable VideoAnalysisData and failed videos. A failing
video never aborts its batch.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, Union

from ..enums import FeedAnalysisStatus, SocialPlatform
from ..exceptions import (
    FeedRetrievalError,
    PersonaError,
    TranscriptionError,
    UnsupportedPlatformError,
)
from ..models import (
    EngagementStats,
    FailedVideo,
    UserFeedAnalysis,
    VideoAnalysisData,
    VideoMetadata,
)
from ..providers import (
    BaseFeedProvider,
    BaseTranscriptionProvider,
    FeedVideo,
    get_feed_provider,
    get_transcription_provider,
)
from ..schemas import PersonaAnalysisConfig, UserIdentifier

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserFeedOrchestrator:
    """
    Retrieves and transcribes a creator feed.

    Usage:
        orchestrator = UserFeedOrchestrator(feed_provider=..., transcription_provider=...)
        analysis = await orchestrator.analyze_feed(UserIdentifier(handle="creator"))
    """

    def __init__(
        self,
        config: Optional[PersonaAnalysisConfig] = None,
        feed_provider: Optional[BaseFeedProvider] = None,
        transcription_provider: Optional[BaseTranscriptionProvider] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.config = config or PersonaAnalysisConfig()
        self._owns_feed_provider = feed_provider is None
        self._owns_transcription_provider = transcription_provider is None
        self.feed_provider = feed_provider or get_feed_provider()
        self.transcription_provider = transcription_provider or get_transcription_provider()
        self._sleep = sleep

    async def close(self) -> None:
        """Close the providers this orchestrator created."""
        if self._owns_feed_provider:
            await self.feed_provider.close()
        if self._owns_transcription_provider:
            await self.transcription_provider.close()

    async def __aenter__(self) -> "UserFeedOrchestrator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def update_config(self, overrides: dict) -> None:
        self.config = self.config.merged(overrides)

    def get_config(self) -> PersonaAnalysisConfig:
        return self.config.model_copy(deep=True)

    async def analyze_feed(self, user_identifier: UserIdentifier) -> UserFeedAnalysis:
        """
        Analyze a creator feed.

        Raises:
            UnsupportedPlatformError: platform has no feed integration
            FeedRetrievalError: the feed could not be fetched
        """
        handle = user_identifier.handle
        platform = user_identifier.platform
        logger.info(f"[FEED_ORCHESTRATOR] Starting analysis for {handle} on {platform.value}")

        analysis = UserFeedAnalysis(
            user_identifier=user_identifier,
            analysis_started=_now(),
        )

        try:
            feed = await self._retrieve_feed(user_identifier)
            analysis.total_videos = len(feed)
            logger.info(f"[FEED_ORCHESTRATOR] Retrieved {len(feed)} videos from {platform.value}")

            to_process = feed[:self.config.max_videos]
            successful, failed = await self._process_batches(to_process, platform)
        except Exception as e:
            analysis.status = FeedAnalysisStatus.FAILED
            analysis.analysis_completed = _now()
            logger.error(f"[FEED_ORCHESTRATOR] Analysis failed: {e}")
            if isinstance(e, UnsupportedPlatformError):
                raise
            raise FeedRetrievalError(handle, f"Feed analysis failed: {e}") from e

        analysis.videos = successful
        analysis.failures = failed
        analysis.processed_videos = len(successful)
        analysis.failed_videos = len(failed)
        analysis.analysis_completed = _now()
        analysis.status = FeedAnalysisStatus.COMPLETED

        logger.info(
            f"[FEED_ORCHESTRATOR] Analysis completed: "
            f"{analysis.processed_videos}/{analysis.total_videos} videos processed"
        )
        return analysis

    # ═══════════════════════════════════════════════════════════════════════════
    # FEED RETRIEVAL
    # ═══════════════════════════════════════════════════════════════════════════

    async def _retrieve_feed(self, user_identifier: UserIdentifier) -> List[FeedVideo]:
        if user_identifier.platform == SocialPlatform.INSTAGRAM:
            raise UnsupportedPlatformError(
                user_identifier.platform.value,
                "Instagram platform feed analysis is not yet implemented",
            )
        if user_identifier.platform != SocialPlatform.TIKTOK:
            raise UnsupportedPlatformError(user_identifier.platform.value)

        logger.info(f"[FEED_ORCHESTRATOR] Fetching TikTok feed for @{user_identifier.handle}")
        return await self.feed_provider.fetch_videos(user_identifier.handle, self.config.max_videos)

    # ═══════════════════════════════════════════════════════════════════════════
    # BATCH PROCESSING
    # ═══════════════════════════════════════════════════════════════════════════

    async def _process_batches(
        self,
        videos: Sequence[FeedVideo],
        platform: SocialPlatform,
    ) -> Tuple[List[VideoAnalysisData], List[FailedVideo]]:
        batch_size = self.config.batch_size
        total_batches = (len(videos) + batch_size - 1) // batch_size
        logger.info(f"[FEED_ORCHESTRATOR] Processing {len(videos)} videos in batches of {batch_size}")

        successful: List[VideoAnalysisData] = []
        failed: List[FailedVideo] = []

        for start in range(0, len(videos), batch_size):
            batch = videos[start:start + batch_size]
            logger.info(f"[FEED_ORCHESTRATOR] Processing batch {start // batch_size + 1}/{total_batches}")

            # Results come back in batch order, not completion order
            results: List[Union[VideoAnalysisData, BaseException]] = await asyncio.gather(
                *(self._process_video(video, platform) for video in batch),
                return_exceptions=True,
            )

            for video, result in zip(batch, results):
                if isinstance(result, VideoAnalysisData):
                    successful.append(result)
                elif isinstance(result, Exception):
                    message = result.message if isinstance(result, PersonaError) else str(result)
                    logger.warning(f"[FEED_ORCHESTRATOR] Video processing failed for {video.id}: {message}")
                    failed.append(FailedVideo(video_id=video.id, error=message or "Unknown error"))
                else:
                    raise result

            if start + batch_size < len(videos):
                delay = self.config.batch_delay_seconds
                logger.info(f"[FEED_ORCHESTRATOR] Rate limiting delay: {delay:.1f}s")
                await self._sleep(delay)

        logger.info(
            f"[FEED_ORCHESTRATOR] Batch processing completed: "
            f"{len(successful)} successful, {len(failed)} failed"
        )
        return successful, failed

    async def _process_video(self, video: FeedVideo, platform: SocialPlatform) -> VideoAnalysisData:
        logger.debug(f"[FEED_ORCHESTRATOR] Processing video {video.id}")

        url = video.canonical_url
        result = await self.transcription_provider.transcribe(url)
        if not result.success or result.transcript is None:
            raise TranscriptionError(video.id, result.error or "Transcription failed")

        transcript = result.transcript
        min_length = self.config.analysis.min_transcript_length
        if len(transcript) < min_length:
            raise TranscriptionError(
                video.id,
                f"Transcript too short: {len(transcript)} characters (minimum: {min_length})",
            )

        logger.debug(f"[FEED_ORCHESTRATOR] Processed video {video.id} ({len(transcript)} chars)")
        return VideoAnalysisData(
            video_id=video.id,
            url=url,
            transcript=transcript,
            duration=video.duration,
            metadata=VideoMetadata(captured_at=_now(), platform=platform),
            engagement=EngagementStats(
                views=video.play_count,
                likes=video.digg_count,
                comments=video.comment_count,
            ),
        )


def create_user_feed_orchestrator(config: Optional[PersonaAnalysisConfig] = None, **kwargs) -> UserFeedOrchestrator:
    """Factory function for easy usage."""
    return UserFeedOrchestrator(config, **kwargs)


async def analyze_user_feed(
    user_identifier: UserIdentifier,
    config: Optional[PersonaAnalysisConfig] = None,
    **kwargs,
) -> UserFeedAnalysis:
    """Convenience function for single feed analysis."""
    return await create_user_feed_orchestrator(config, **kwargs).analyze_feed(user_identifier)
