"""
Host application transcription provider.
"""
import logging
from typing import Optional

import httpx

from .base import BaseTranscriptionProvider, TranscriptionResult

logger = logging.getLogger(__name__)


class HostApiTranscriptionProvider(BaseTranscriptionProvider):
    """POST {base_url}/api/video/transcribe-from-url."""

    ENDPOINT = "/api/video/transcribe-from-url"

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: float = 120.0,
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

    async def transcribe(self, url: str) -> TranscriptionResult:
        if not self.is_available:
            return TranscriptionResult(success=False, error="Transcription service not configured")

        try:
            response = await self.client.post(
                f"{self._base_url}{self.ENDPOINT}",
                json={"videoUrl": url},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[TRANSCRIPTION_PROVIDER] Request failed for {url}: {e}")
            return TranscriptionResult(success=False, error=f"Transcription request failed: {e}")

        if response.status_code >= 400 or not data.get("success"):
            return TranscriptionResult(
                success=False,
                error=data.get("error") or f"Transcription failed (HTTP {response.status_code})",
            )

        transcript = data.get("transcript")
        if transcript is None:
            transcript = (data.get("data") or {}).get("transcript")
        if not transcript:
            return TranscriptionResult(success=False, error="Transcription returned no transcript")

        return TranscriptionResult(success=True, transcript=transcript)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
