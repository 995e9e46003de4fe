"""
Working example: Offline voice persona analysis and script generation.
Runs the full pipeline against in-memory feed and transcription providers.
"""
import asyncio
import logging
import random
import sys
from pathlib import Path

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

sys.path.insert(0, str(Path(__file__).parent))

from voice_persona import (
    PersonaAnalysisConfig,
    ScriptGenerationInput,
    ScriptStyle,
    UserIdentifier,
    VoiceAnalysisOrchestrator,
    validate_persona_content,
)
from voice_persona.config import config
from voice_persona.persistence import InMemoryPersonaStore
from voice_persona.providers import LocalFeedProvider, LocalTranscriptionProvider

HANDLE = "fitwithmaya"

TRANSCRIPTS = [
    "Okay so here's the thing about morning workouts. You need to eat something first, "
    "basically a banana is enough. I think most people skip this and wonder why they crash. "
    "Have you ever felt dizzy halfway through a set? THIS is why! Follow for more.",

    "Listen up guys, meal prep is not hard. First you pick two proteins, then you roll the "
    "same veggies all week. Which means you stop thinking about food at lunch. "
    "I remember when I used to order takeout every day, right? Never again!",

    "Okay so stop doing crunches. Basically your core works harder in a plank. "
    "You should hold it for thirty seconds, then rest, then go again. "
    "Honestly this changed everything for me. Follow for more tips!",

    "Here's the thing nobody tells you about protein. You can't absorb unlimited amounts "
    "in one meal, which means spreading it out actually matters. In my opinion three meals "
    "is plenty. Did you know that? BOOM. Follow for more.",

    "Hey everyone, quick one today. Walking after dinner is the most underrated habit. "
    "Basically it helps your blood sugar and your sleep. I always do ten minutes, "
    "you know? Try it tonight and tell me how it goes!",
]


def build_providers():
    """Create in-memory providers holding a five-video feed."""
    feed_items = []
    transcripts = {}
    for index, transcript in enumerate(TRANSCRIPTS, start=1):
        video_id = f"73{index:04d}"
        feed_items.append({
            "id": video_id,
            "duration": 20 + index * 4,
            "stats": {"playCount": 12000 * index, "diggCount": 900 * index, "commentCount": 40 * index},
            "author": {"username": HANDLE},
        })
        transcripts[f"https://www.tiktok.com/@{HANDLE}/video/{video_id}"] = transcript

    return LocalFeedProvider({HANDLE: feed_items}), LocalTranscriptionProvider(transcripts)


async def main():
    """Analyze a persona, write a script in its voice and validate it."""
    config.log_status()

    feed_provider, transcription_provider = build_providers()

    async def no_delay(seconds: float) -> None:
        return None

    async with VoiceAnalysisOrchestrator(
        config=PersonaAnalysisConfig.voice_analysis_defaults(),
        feed_provider=feed_provider,
        transcription_provider=transcription_provider,
        store=InMemoryPersonaStore(),
        sleep=no_delay,
        rng=random.Random(7),
    ) as orchestrator:
        return await walkthrough(orchestrator)


async def walkthrough(orchestrator: VoiceAnalysisOrchestrator) -> int:
    print("\n" + "=" * 60)
    print("STEP 1: Persona analysis")
    print("=" * 60)

    result = await orchestrator.analyze_voice_persona(UserIdentifier(handle=f"@{HANDLE}"))
    if not result.success:
        print(f"Analysis failed: {result.error.code} - {result.error.message}")
        return 1

    profile = result.persona_profile
    summary = orchestrator.get_analysis_summary(profile)
    print(summary.overview)
    for line in summary.key_characteristics:
        print(f"  - {line}")
    print(f"Hooks: {profile.voice_profile.hooks[:5]}")
    print(f"Vocabulary: {profile.voice_profile.vocabulary_fingerprint[:10]}")
    print(f"Authenticity threshold: {profile.generation_parameters.authenticity_threshold}%")

    print("\n" + "=" * 60)
    print("STEP 2: Script generation")
    print("=" * 60)

    request = ScriptGenerationInput(
        persona_id=profile.persona_id,
        topic="stretching before bed",
        target_length=30,
        style=ScriptStyle.CONVERSATIONAL,
    )
    generated = orchestrator.generate_script(request, profile)
    if not generated.success:
        print(f"Generation failed: {generated.error.message}")
        return 1

    script = generated.script
    print(script.script)
    print(f"\nAttempts: {generated.attempts}, authenticity: {script.authenticity.overall_score}%")

    print("\n" + "=" * 60)
    print("STEP 3: Content validation")
    print("=" * 60)

    report = validate_persona_content(
        script.script,
        profile.voice_profile,
        speech_patterns=profile.speech_patterns,
        generation_parameters=profile.generation_parameters,
        include_rule_validation=True,
        include_detailed_breakdown=True,
    )
    print(report.detailed_breakdown)
    for recommendation in report.recommendations:
        print(f"  * {recommendation}")

    cached = await orchestrator.analyze_voice_persona(UserIdentifier(handle=HANDLE), use_cache=True)
    print(f"\nSecond lookup served from cache: {cached.from_cache}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
