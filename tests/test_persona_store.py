"""
Tests for the persona profile store.
"""
import pytest


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    from voice_persona.persistence import InMemoryPersonaStore
    return InMemoryPersonaStore(default_ttl=60, clock=clock)


class TestInMemoryPersonaStore:
    """Tests for InMemoryPersonaStore."""

    def test_save_and_get(self, store, persona_profile):
        """Saved profiles are returned unchanged."""
        store.save("p1", persona_profile)
        assert store.get("p1") is persona_profile
        assert store.get("missing") is None

    def test_entries_expire(self, store, clock, persona_profile):
        """Entries disappear once their TTL elapses."""
        store.save("p1", persona_profile)

        clock.now += 59
        assert store.get("p1") is persona_profile

        clock.now += 1
        assert store.get("p1") is None
        assert store.list_ids() == []

    def test_per_entry_ttl(self, store, clock, persona_profile):
        """An explicit ttl overrides the default."""
        store.save("short", persona_profile, ttl=10)
        store.save("long", persona_profile)

        clock.now += 30
        assert store.list_ids() == ["long"]

    def test_zero_ttl_never_expires(self, store, clock, persona_profile):
        """A ttl of 0 keeps the entry forever."""
        store.save("p1", persona_profile, ttl=0)

        clock.now += 10 ** 9
        assert store.get("p1") is persona_profile

    def test_delete_and_clear(self, store, persona_profile):
        """delete reports whether the key existed."""
        store.save("p1", persona_profile)
        store.save("p2", persona_profile)

        assert store.delete("p1") is True
        assert store.delete("p1") is False
        assert store.list_ids() == ["p2"]

        store.clear()
        assert store.list_ids() == []

    def test_resave_replaces(self, store, persona_profile):
        """Saving under an existing key stores the new profile."""
        from dataclasses import replace

        store.save("p1", persona_profile)
        newer = replace(persona_profile, persona_id="newer")
        store.save("p1", newer)

        assert store.get("p1").persona_id == "newer"

    def test_stored_analysis_cannot_be_reassigned(self, store, persona_profile):
        """Nested analysis objects of a stored profile are frozen."""
        from dataclasses import FrozenInstanceError

        store.save("p1", persona_profile)
        cached = store.get("p1")

        with pytest.raises(FrozenInstanceError):
            cached.speech_patterns.baseline = None
        with pytest.raises(FrozenInstanceError):
            cached.pattern_mapping.primary_hook.examples = []
        with pytest.raises(FrozenInstanceError):
            cached.speech_patterns.signature_elements.catchphrases.opening = []
