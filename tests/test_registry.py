"""Tests for the profile registry."""

from weight_progress.registry import ProfileRegistry


def _make_registry(*names: str) -> ProfileRegistry:
    registry = ProfileRegistry()
    for name in names:
        registry.add_profile(name)
    return registry


class TestAddProfile:
    def test_first_id_is_one(self):
        outcome = ProfileRegistry().add_profile("Mia")
        assert outcome.ok
        assert outcome.profile.id == 1

    def test_ids_are_monotonic(self):
        registry = _make_registry("A", "B", "C")
        assert [p.id for p in registry] == [1, 2, 3]

    def test_next_id_is_max_plus_one(self):
        registry = _make_registry("A")
        registry.profiles[0].id = 7
        assert registry.add_profile("B").profile.id == 8

    def test_new_profile_defaults(self):
        profile = ProfileRegistry().add_profile("Mia").profile
        assert profile.start_weight is None
        assert profile.visibility_code == ""
        assert profile.measurements == []

    def test_new_profile_is_inactive(self):
        registry = _make_registry("A")
        registry.switch_active(1)
        profile = registry.add_profile("B").profile
        assert not registry.is_active(profile.id)
        assert registry.get_active().id == 1

    def test_blank_name_rejected(self):
        registry = ProfileRegistry()
        outcome = registry.add_profile("   ")
        assert not outcome.ok
        assert outcome.rejection.code == "empty_name"
        assert len(registry) == 0

    def test_name_stored_as_given(self):
        assert ProfileRegistry().add_profile(" Mia ").profile.name == " Mia "


class TestSwitchActive:
    def test_no_active_before_switch(self):
        assert _make_registry("A", "B").get_active() is None

    def test_empty_registry_has_no_active(self):
        assert ProfileRegistry().get_active() is None

    def test_switch_sets_active(self):
        registry = _make_registry("A", "B")
        outcome = registry.switch_active(2)
        assert outcome.ok
        assert registry.get_active().name == "B"
        assert not registry.is_active(1)

    def test_unknown_id_is_noop(self):
        registry = _make_registry("A", "B")
        registry.switch_active(1)
        outcome = registry.switch_active(99)
        assert not outcome.ok
        assert outcome.error_class == "not_found"
        assert registry.get_active().id == 1

    def test_exactly_one_active(self):
        registry = _make_registry("A", "B", "C")
        registry.switch_active(3)
        registry.switch_active(2)
        assert [p.id for p in registry if registry.is_active(p.id)] == [2]
