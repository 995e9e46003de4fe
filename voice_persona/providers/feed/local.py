"""
Local feed provider.

Serves video descriptors from memory, for offline runs and tests.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .base import BaseFeedProvider, FeedVideo
from ...exceptions import FeedRetrievalError


class LocalFeedProvider(BaseFeedProvider):
    """In-memory handle -> descriptors feed."""

    def __init__(self, feeds: Optional[Mapping[str, Sequence[Dict[str, Any]]]] = None):
        self._feeds: Dict[str, List[Dict[str, Any]]] = {
            handle.lstrip("@"): list(items) for handle, items in (feeds or {}).items()
        }

    @property
    def name(self) -> str:
        return "local"

    @property
    def is_available(self) -> bool:
        return True

    def add_feed(self, handle: str, items: Sequence[Dict[str, Any]]) -> None:
        self._feeds[handle.lstrip("@")] = list(items)

    async def fetch_videos(self, handle: str, count: int) -> List[FeedVideo]:
        items = self._feeds.get(handle)
        if items is None:
            raise FeedRetrievalError(handle, f"User @{handle} not found")
        if not items:
            raise FeedRetrievalError(handle, "No videos found in user feed")
        return [FeedVideo.from_api(item) for item in items[:count]]
