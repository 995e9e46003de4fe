"""
Provider factories.
"""
from typing import Literal

from ..config import config
from .feed import BaseFeedProvider, HostApiFeedProvider, LocalFeedProvider
from .transcription import (
    BaseTranscriptionProvider,
    HostApiTranscriptionProvider,
    LocalTranscriptionProvider,
)


ProviderType = Literal["auto", "host_api", "local"]


class FeedProviderFactory:
    """Factory for feed providers with automatic fallback to local."""

    _providers = {
        "host_api": HostApiFeedProvider,
        "local": LocalFeedProvider,
    }

    @classmethod
    def create(cls, provider: ProviderType = "auto") -> BaseFeedProvider:
        if provider == "auto":
            if config.host_api.is_configured:
                return HostApiFeedProvider()
            return LocalFeedProvider()
        if provider not in cls._providers:
            raise ValueError(f"Unknown feed provider: {provider}")
        return cls._providers[provider]()


class TranscriptionProviderFactory:
    """Factory for transcription providers with automatic fallback to local."""

    _providers = {
        "host_api": HostApiTranscriptionProvider,
        "local": LocalTranscriptionProvider,
    }

    @classmethod
    def create(cls, provider: ProviderType = "auto") -> BaseTranscriptionProvider:
        if provider == "auto":
            if config.host_api.is_configured:
                return HostApiTranscriptionProvider()
            return LocalTranscriptionProvider()
        if provider not in cls._providers:
            raise ValueError(f"Unknown transcription provider: {provider}")
        return cls._providers[provider]()


def get_feed_provider(provider: ProviderType = "auto") -> BaseFeedProvider:
    """Get a feed provider; "auto" uses the host API when a base URL is configured."""
    return FeedProviderFactory.create(provider)


def get_transcription_provider(provider: ProviderType = "auto") -> BaseTranscriptionProvider:
    """Get a transcription provider; "auto" uses the host API when a base URL is configured."""
    return TranscriptionProviderFactory.create(provider)
