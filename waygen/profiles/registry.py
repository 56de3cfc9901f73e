"""Mini README: Drone/camera profile registry.

Structure:
    * DroneProfile - dataclass describing a hardware preset.
    * DroneProfileRegistry - maps identifiers (and legacy aliases) to presets.
    * REGISTRY - process-wide registry populated with the built-in presets.

Profiles are read-only. ``resolve`` never fails: unknown identifiers fall
back to the ``custom`` sentinel whose field of view and photo cadence come
from the caller's mission settings.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

CUSTOM_PROFILE_ID = "custom"
DEFAULT_PHOTO_CADENCE = 2.0


@dataclass(frozen=True, slots=True)
class DroneProfile:
    """Static camera and endurance characteristics of a drone model."""

    profile_id: str
    display_name: str
    horizontal_fov: float
    max_flight_time: float
    photo_cadence: float

    @property
    def is_custom(self) -> bool:
        return self.profile_id == CUSTOM_PROFILE_ID

    @property
    def has_flight_limit(self) -> bool:
        return self.max_flight_time > 0


class DroneProfileRegistry:
    """Simple registry for mapping profile identifiers to presets."""

    def __init__(self) -> None:
        self._profiles: Dict[str, DroneProfile] = {}
        self._aliases: Dict[str, str] = {}

    def register(self, profile: DroneProfile, *, aliases: Iterable[str] = ()) -> None:
        """Register a profile along with any legacy identifiers it replaces."""

        identifier = profile.profile_id.lower()
        LOGGER.debug("Registering drone profile '%s'", identifier)
        self._profiles[identifier] = profile
        for alias in aliases:
            self._aliases[alias.lower()] = identifier

    def available_profiles(self) -> List[str]:
        """Return identifiers sorted for display."""

        return sorted(self._profiles.keys())

    def profiles(self) -> List[DroneProfile]:
        return [self._profiles[identifier] for identifier in self.available_profiles()]

    def migrate_legacy_id(self, identifier: str) -> str:
        """Rewrite a legacy alias to its current identifier, leaving others untouched."""

        key = identifier.strip().lower()
        return self._aliases.get(key, key)

    def canonical_id(self, identifier: Optional[str]) -> str:
        """Map legacy or differently-cased identifiers onto registered ones."""

        if not identifier:
            return CUSTOM_PROFILE_ID
        key = identifier.strip().lower()
        key = self._aliases.get(key, key)
        return key if key in self._profiles else CUSTOM_PROFILE_ID

    def get(self, identifier: str) -> DroneProfile:
        """Look up a registered profile, raising ``KeyError`` when unknown."""

        key = identifier.strip().lower()
        key = self._aliases.get(key, key)
        if key not in self._profiles:
            raise KeyError(f"Unknown drone profile '{identifier}'")
        return self._profiles[key]

    def resolve(
        self,
        identifier: Optional[str],
        *,
        custom_fov: Optional[float] = None,
        custom_cadence: Optional[float] = None,
    ) -> DroneProfile:
        """Return the effective profile for planning.

        Registered presets are returned unchanged. The ``custom`` sentinel,
        and any identifier the registry does not know, yields a copy of the
        custom profile carrying the caller's field of view and cadence.
        """

        canonical = self.canonical_id(identifier)
        if canonical != CUSTOM_PROFILE_ID:
            return self._profiles[canonical]
        if identifier and identifier.strip().lower() != CUSTOM_PROFILE_ID:
            LOGGER.info("Drone profile '%s' not recognised; using custom camera values", identifier)
        base = self._profiles[CUSTOM_PROFILE_ID]
        return replace(
            base,
            horizontal_fov=custom_fov if custom_fov else base.horizontal_fov,
            photo_cadence=custom_cadence if custom_cadence else base.photo_cadence,
        )


REGISTRY = DroneProfileRegistry()
