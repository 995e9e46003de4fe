"""
Providers Layer.

External collaborators of the persona pipeline:
- Feed retrieval (creator video descriptors)
- Transcription (video URL -> transcript)

Each collaborator has a host-application HTTP implementation and an
in-memory local implementation.
"""
from .exceptions import ProviderError, ProviderUnavailable

from .feed import (
    BaseFeedProvider,
    FeedVideo,
    HostApiFeedProvider,
    LocalFeedProvider,
)

from .transcription import (
    BaseTranscriptionProvider,
    TranscriptionResult,
    HostApiTranscriptionProvider,
    LocalTranscriptionProvider,
)

from .factory import (
    FeedProviderFactory,
    TranscriptionProviderFactory,
    get_feed_provider,
    get_transcription_provider,
)

__all__ = [
    # Exceptions
    "ProviderError",
    "ProviderUnavailable",

    # Feed
    "BaseFeedProvider",
    "FeedVideo",
    "HostApiFeedProvider",
    "LocalFeedProvider",
    "FeedProviderFactory",
    "get_feed_provider",

    # Transcription
    "BaseTranscriptionProvider",
    "TranscriptionResult",
    "HostApiTranscriptionProvider",
    "LocalTranscriptionProvider",
    "TranscriptionProviderFactory",
    "get_transcription_provider",
]
