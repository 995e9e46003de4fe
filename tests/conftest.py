"""
Pytest configuration and fixtures for voice persona tests.
"""
import os
import random
import pytest

# Force offline providers before importing voice_persona modules
for _name in ("PERSONA_HOST_API_URL", "PERSONA_HOST_API_TOKEN", "PERSONA_BATCH_SIZE",
              "PERSONA_MAX_VIDEOS", "PERSONA_REQUESTS_PER_MINUTE"):
    os.environ.pop(_name, None)


HANDLE = "fitwithmaya"

TRANSCRIPTS = [
    "Okay so here's the thing about morning workouts. You need to eat something first, "
    "basically a banana is enough. I think most people skip breakfast and wonder why they crash. "
    "Have you ever felt dizzy halfway through a set? THIS is why! Follow for more.",

    "Listen up guys, meal prep is not hard. First you pick two proteins, then you roll the "
    "same veggies all week. Which means you stop thinking about food at lunch. "
    "I remember when I used to order takeout every day, right? Never again!",

    "Okay so stop doing crunches. Basically your core works harder in a plank. "
    "You should hold the plank for thirty seconds, then rest, then go again. "
    "Honestly this changed everything for me. Follow for more tips!",

    "Here's the thing nobody tells you about protein. You can't absorb protein in huge amounts "
    "in one meal, which means spreading protein out actually matters. In my opinion three meals "
    "is plenty. Did you know that? BOOM. Follow for more.",

    "Hey everyone, quick one today. Walking after dinner is the most underrated habit. "
    "Basically it helps your blood sugar and your sleep. I always do ten minutes, "
    "you know? Try it tonight and tell me how it goes!",
]


def video_url(video_id: str, handle: str = HANDLE) -> str:
    return f"https://www.tiktok.com/@{handle}/video/{video_id}"


@pytest.fixture
def transcripts():
    """Sample creator transcripts."""
    return list(TRANSCRIPTS)


@pytest.fixture
def make_video():
    """Factory for VideoAnalysisData."""
    from voice_persona.enums import SocialPlatform
    from voice_persona.models import EngagementStats, VideoAnalysisData, VideoMetadata

    def _make(transcript: str, video_id: str = "v1", duration: float = 30.0):
        return VideoAnalysisData(
            video_id=video_id,
            url=video_url(video_id),
            transcript=transcript,
            duration=duration,
            metadata=VideoMetadata(captured_at="2026-01-01T00:00:00+00:00", platform=SocialPlatform.TIKTOK),
            engagement=EngagementStats(views=1000, likes=100, comments=10),
        )

    return _make


@pytest.fixture
def videos(make_video, transcripts):
    """Five transcribed videos of one creator."""
    return [
        make_video(transcript, video_id=f"73{index:04d}", duration=20 + index * 4)
        for index, transcript in enumerate(transcripts, start=1)
    ]


@pytest.fixture
def persona_profile(videos):
    """A complete PersonaProfile built from the sample videos."""
    from voice_persona.analyzers import PatternExtractor, VoiceProfiler
    from voice_persona.models import PersonaMetadata, PersonaProfile
    from voice_persona.schemas import UserIdentifier

    extractor = PatternExtractor()
    profiler = VoiceProfiler()
    patterns = extractor.extract_patterns(videos)
    matrix = extractor.extract_pattern_matrix(videos)
    voice = profiler.create_profile(videos, patterns, matrix)
    params = profiler.create_generation_parameters(voice, patterns, videos)

    return PersonaProfile(
        persona_id=f"{HANDLE}_tiktok_1700000000000",
        user_identifier=UserIdentifier(handle=HANDLE),
        analysis_date="2026-01-01T00:00:00+00:00",
        voice_profile=voice,
        speech_patterns=patterns,
        pattern_mapping=matrix,
        generation_parameters=params,
        metadata=PersonaMetadata(
            videos_analyzed=len(videos),
            total_transcript_length=sum(len(v.transcript) for v in videos),
            analysis_version="1.0.0",
            last_updated="2026-01-01T00:00:00+00:00",
        ),
    )


@pytest.fixture
def make_voice_profile():
    """Factory for hand-built VoiceProfile objects."""
    from voice_persona.models import VoiceProfile

    def _make(**overrides):
        fields = dict(
            hooks=[],
            bridges={},
            energy_wave="",
            sentence_patterns=[],
            signature_elements=[],
            vocabulary_fingerprint=[],
            rhythm_pattern="",
        )
        fields.update(overrides)
        return VoiceProfile(**fields)

    return _make


@pytest.fixture
def make_generation_parameters():
    """Factory for hand-built GenerationParameters."""
    from voice_persona.enums import PatternRotation
    from voice_persona.models import GenerationParameters, HookRatio, SentenceDistribution

    def _make(**overrides):
        fields = dict(
            optimal_length=30,
            authenticity_threshold=85,
            pattern_rotation=PatternRotation.RANDOM,
            hook_ratio=HookRatio(primary=4, secondary=1),
            sentence_distribution=SentenceDistribution(short=30, medium=40, long=30),
        )
        fields.update(overrides)
        return GenerationParameters(**fields)

    return _make


@pytest.fixture
def feed_items():
    """Host API style video descriptors matching the sample transcripts."""
    return [
        {
            "id": f"73{index:04d}",
            "duration": 20 + index * 4,
            "stats": {"playCount": 12000 * index, "diggCount": 900 * index, "commentCount": 40 * index},
            "author": {"username": HANDLE},
        }
        for index in range(1, len(TRANSCRIPTS) + 1)
    ]


@pytest.fixture
def feed_provider(feed_items):
    from voice_persona.providers import LocalFeedProvider
    return LocalFeedProvider({HANDLE: feed_items})


@pytest.fixture
def transcription_provider(feed_items):
    from voice_persona.providers import LocalTranscriptionProvider
    return LocalTranscriptionProvider({
        video_url(item["id"]): transcript for item, transcript in zip(feed_items, TRANSCRIPTS)
    })


@pytest.fixture
def recorded_sleep():
    """Sleep replacement that records delays instead of waiting."""
    delays = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def handle():
    return HANDLE


@pytest.fixture
def url_for():
    """Canonical TikTok URL builder."""
    return video_url
