"""
Persona Profile Store.

Key-value storage for analyzed persona profiles. Profiles are immutable, so
a re-analysis saves a new profile under the same key instead of updating
the stored one.
"""
import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..models import PersonaProfile

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 604800  # 7 days


class BasePersonaStore(ABC):
    """Abstract persona profile store."""

    @abstractmethod
    def get(self, key: str) -> Optional[PersonaProfile]:
        """Return the stored profile, or None if missing or expired."""
        pass

    @abstractmethod
    def save(self, key: str, profile: PersonaProfile, ttl: Optional[int] = None) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""
        pass

    @abstractmethod
    def list_ids(self) -> List[str]:
        """Keys of all non-expired entries."""
        pass


@dataclass
class _Entry:
    profile: PersonaProfile
    expires_at: Optional[float]


class InMemoryPersonaStore(BasePersonaStore):
    """
    Process-local store with per-entry TTL.

    A ttl of 0 keeps the entry forever. The clock is injectable so expiry can
    be tested without sleeping.
    """

    def __init__(self, default_ttl: int = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[PersonaProfile]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._is_expired(entry):
                del self._entries[key]
                logger.debug(f"[PERSONA_STORE] Entry expired: {key}")
                return None
            return entry.profile

    def save(self, key: str, profile: PersonaProfile, ttl: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        expires_at = self._clock() + ttl if ttl > 0 else None
        with self._lock:
            self._entries[key] = _Entry(profile=profile, expires_at=expires_at)
        logger.debug(f"[PERSONA_STORE] Saved {key} (persona {profile.persona_id})")

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def list_ids(self) -> List[str]:
        with self._lock:
            expired = [key for key, entry in self._entries.items() if self._is_expired(entry)]
            for key in expired:
                del self._entries[key]
            return sorted(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _is_expired(self, entry: _Entry) -> bool:
        return entry.expires_at is not None and self._clock() >= entry.expires_at
