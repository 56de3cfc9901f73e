"""Mini README: Drone profile subsystem package initialiser.

Re-exports the profile dataclass and the populated registry. Importing the
package registers the built-in presets.
"""

from .registry import CUSTOM_PROFILE_ID, DEFAULT_PHOTO_CADENCE, REGISTRY, DroneProfile, DroneProfileRegistry
from . import presets  # noqa: F401  # ensure built-in presets register on import

__all__ = [
    "CUSTOM_PROFILE_ID",
    "DEFAULT_PHOTO_CADENCE",
    "DroneProfile",
    "DroneProfileRegistry",
    "REGISTRY",
]
