"""
Creator feed providers.
"""
from .base import BaseFeedProvider, FeedVideo
from .host_api import HostApiFeedProvider
from .local import LocalFeedProvider

__all__ = [
    "BaseFeedProvider",
    "FeedVideo",
    "HostApiFeedProvider",
    "LocalFeedProvider",
]
