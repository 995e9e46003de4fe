"""
Pydantic schemas for caller-supplied input and analysis configuration.

Degenerate input (empty handle, empty topic, non-positive lengths) is
rejected here, before any analysis or generation work starts.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import PatternSensitivity, ScriptStyle, SocialPlatform


class UserIdentifier(BaseModel):
    """Creator whose feed is analyzed."""
    model_config = ConfigDict(frozen=True)

    handle: str = Field(..., min_length=1)
    platform: SocialPlatform = Field(default=SocialPlatform.TIKTOK)
    user_id: Optional[str] = Field(default=None)

    @field_validator("handle")
    @classmethod
    def strip_handle(cls, v: str) -> str:
        handle = v.strip().lstrip("@")
        if not handle:
            raise ValueError("handle cannot be empty")
        return handle

    @field_validator("platform", mode="before")
    @classmethod
    def parse_platform(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, SocialPlatform):
            return SocialPlatform.from_string(v.strip())
        return v

    @property
    def cache_key(self) -> str:
        return f"{self.handle}:{self.platform.value}"


class ScriptGenerationInput(BaseModel):
    """Request to write a script in a persona's voice."""
    persona_id: str = Field(..., min_length=1)
    topic: str = Field(..., min_length=1, max_length=500)
    target_length: float = Field(default=30, gt=0, le=600)
    style: Optional[ScriptStyle] = Field(default=None)
    custom_instructions: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, v: str) -> str:
        topic = v.strip()
        if not topic:
            raise ValueError("topic cannot be empty")
        return topic


class RateLimitSettings(BaseModel):
    requests_per_minute: int = Field(default=10, gt=0)
    burst_limit: int = Field(default=3, gt=0)


class AnalysisSettings(BaseModel):
    min_transcript_length: int = Field(default=50, ge=0)
    pattern_sensitivity: PatternSensitivity = Field(default=PatternSensitivity.MEDIUM)
    enable_emotional_analysis: bool = Field(default=True)


class PersonaAnalysisConfig(BaseModel):
    """Tunables for feed retrieval, transcription batching and analysis."""
    batch_size: int = Field(default=5, gt=0)
    max_videos: int = Field(default=30, gt=0)
    cache_ttl: int = Field(default=604800, ge=0)  # 7 days
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)

    @classmethod
    def voice_analysis_defaults(cls) -> "PersonaAnalysisConfig":
        """Defaults used by the full voice analysis workflow."""
        return cls(
            max_videos=25,
            rate_limit=RateLimitSettings(requests_per_minute=8),
        )

    @property
    def batch_delay_seconds(self) -> float:
        """Pause between transcription batches."""
        return (60 / self.rate_limit.requests_per_minute) * self.batch_size

    @property
    def persona_delay_seconds(self) -> float:
        """Pause between personas in a multi-persona batch."""
        return 60 / self.rate_limit.requests_per_minute

    def merged(self, overrides: Optional[Dict[str, Any]] = None) -> "PersonaAnalysisConfig":
        """
        Return a new config with overrides applied.

        Top-level scalars replace; the rate_limit and analysis sections
        are merged field by field.
        """
        if not overrides:
            return self

        data = self.model_dump()
        for key, value in overrides.items():
            if key in ("rate_limit", "analysis"):
                section = value.model_dump() if isinstance(value, BaseModel) else dict(value)
                data[key] = {**data[key], **section}
            else:
                data[key] = value
        return PersonaAnalysisConfig.model_validate(data)
