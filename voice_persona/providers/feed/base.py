"""
Base class for creator feed providers.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class FeedVideo:
    """One video descriptor from a creator feed."""
    id: str
    duration: float
    play_count: int = 0
    digg_count: int = 0
    comment_count: int = 0
    author_username: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "FeedVideo":
        """Parse {id, duration, stats{playCount, diggCount, commentCount}, author{username}}."""
        stats = data.get("stats") or {}
        author = data.get("author") or {}
        return cls(
            id=str(data["id"]),
            duration=float(data.get("duration") or 0),
            play_count=int(stats.get("playCount") or 0),
            digg_count=int(stats.get("diggCount") or 0),
            comment_count=int(stats.get("commentCount") or 0),
            author_username=str(author.get("username") or ""),
        )

    @property
    def canonical_url(self) -> str:
        return f"https://www.tiktok.com/@{self.author_username}/video/{self.id}"


class BaseFeedProvider(ABC):
    """Abstract base class for feed providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is available."""
        pass

    @abstractmethod
    async def fetch_videos(self, handle: str, count: int) -> List[FeedVideo]:
        """
        Fetch the most recent videos of a creator.

        Args:
            handle: Creator handle without the leading "@"
            count: Maximum number of videos requested

        Returns:
            Video descriptors, newest first

        Raises:
            FeedRetrievalError: feed could not be fetched or is empty
        """
        pass

    async def close(self) -> None:
        """Release network resources."""
        return None
