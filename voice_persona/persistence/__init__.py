"""
Persistence Module.
Provides storage for analyzed persona profiles.
"""
from .persona_store import BasePersonaStore, InMemoryPersonaStore, DEFAULT_TTL_SECONDS

__all__ = [
    "BasePersonaStore",
    "InMemoryPersonaStore",
    "DEFAULT_TTL_SECONDS",
]
