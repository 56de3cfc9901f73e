"""Mini README: Tests for the drone profile registry.

Ensures presets register on import, unknown identifiers fall back to the
custom camera, and legacy identifiers are migrated.
"""

from waygen.mission import MissionSettings
from waygen.profiles import CUSTOM_PROFILE_ID, REGISTRY, DroneProfile, DroneProfileRegistry

import pytest


def test_registry_contains_builtin_profiles():
    available = REGISTRY.available_profiles()
    assert "dji_mini_4_pro" in available
    assert CUSTOM_PROFILE_ID in available


def test_registered_profile_is_returned_unchanged():
    profile = REGISTRY.resolve("dji_mini_4_pro", custom_fov=60.0, custom_cadence=5.0)
    assert profile.horizontal_fov == pytest.approx(82.1)
    assert profile.max_flight_time > 0


def test_unknown_profile_resolves_to_custom_values():
    profile = REGISTRY.resolve("prototype-x", custom_fov=70.0, custom_cadence=3.5)
    assert profile.is_custom
    assert profile.horizontal_fov == pytest.approx(70.0)
    assert profile.photo_cadence == pytest.approx(3.5)
    assert not profile.has_flight_limit


def test_legacy_alias_is_migrated():
    assert REGISTRY.get("Mini4Pro").profile_id == "dji_mini_4_pro"
    assert MissionSettings(selected_drone="mini4pro").selected_drone == "dji_mini_4_pro"


def test_get_unknown_profile_raises():
    registry = DroneProfileRegistry()
    registry.register(DroneProfile("custom", "Custom", 82.1, 0.0, 2.0))
    with pytest.raises(KeyError):
        registry.get("missing")
