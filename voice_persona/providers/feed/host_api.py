"""
Host application feed provider.

Delegates feed scraping to the host application's REST endpoint.
"""
import logging
from typing import List, Optional

import httpx

from .base import BaseFeedProvider, FeedVideo
from ..exceptions import ProviderUnavailable
from ...exceptions import FeedRetrievalError

logger = logging.getLogger(__name__)


class HostApiFeedProvider(BaseFeedProvider):
    """POST {base_url}/api/tiktok/user-feed."""

    ENDPOINT = "/api/tiktok/user-feed"

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if base_url is None:
            from ...config import config
            base_url = config.host_api.base_url
            api_token = api_token or config.host_api.api_token
            timeout = config.host_api.timeout

        self._base_url = (base_url or "").rstrip("/")
        headers = {"Authorization": f"Bearer {api_token}"} if api_token else {}
        self.client = client or httpx.AsyncClient(timeout=timeout, headers=headers)

    @property
    def name(self) -> str:
        return "host_api"

    @property
    def is_available(self) -> bool:
        return bool(self._base_url)

    async def fetch_videos(self, handle: str, count: int) -> List[FeedVideo]:
        if not self.is_available:
            raise ProviderUnavailable(self.name, "Missing host API base URL")

        logger.info(f"[FEED_PROVIDER] Fetching {count} videos for @{handle}")

        try:
            response = await self.client.post(
                f"{self._base_url}{self.ENDPOINT}",
                json={"username": handle, "count": count},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[FEED_PROVIDER] Feed request failed for @{handle}: {e}")
            raise FeedRetrievalError(handle, f"Failed to fetch TikTok user feed: {e}") from e

        if response.status_code >= 400 or not data.get("success"):
            message = data.get("error") or "Failed to fetch TikTok user feed"
            raise FeedRetrievalError(handle, message)

        videos = [FeedVideo.from_api(item) for item in data.get("videos") or []]
        if not videos:
            raise FeedRetrievalError(handle, "No videos found in user feed")

        logger.info(f"[FEED_PROVIDER] Received {len(videos)} videos for @{handle}")
        return videos

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
