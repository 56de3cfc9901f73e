"""Mini README: Built-in drone presets.

Importing this module registers the bundled hardware catalog with
``REGISTRY``. Field-of-view values are the manufacturers' published
horizontal angles for the stills camera; flight times are the rated hover
endurance in minutes.
"""

from __future__ import annotations

from .registry import CUSTOM_PROFILE_ID, DEFAULT_PHOTO_CADENCE, REGISTRY, DroneProfile

BUILT_IN_PROFILES = (
    (
        DroneProfile("dji_mini_4_pro", "DJI Mini 4 Pro", 82.1, 34.0, 2.0),
        ("mini4pro", "mini_4_pro", "dji_mini4pro"),
    ),
    (
        DroneProfile("dji_mini_3", "DJI Mini 3", 82.1, 38.0, 2.0),
        ("mini3", "mini_3"),
    ),
    (
        DroneProfile("dji_air_3", "DJI Air 3", 82.0, 46.0, 2.0),
        ("air3", "air_3"),
    ),
    (
        DroneProfile("dji_mavic_3e", "DJI Mavic 3 Enterprise", 84.0, 45.0, 0.7),
        ("mavic3e", "m3e"),
    ),
    (
        DroneProfile("dji_phantom_4_pro", "DJI Phantom 4 Pro V2.0", 73.7, 30.0, 2.0),
        ("phantom4pro", "p4p"),
    ),
    (
        DroneProfile(CUSTOM_PROFILE_ID, "Custom", 82.1, 0.0, DEFAULT_PHOTO_CADENCE),
        (),
    ),
)

for _profile, _aliases in BUILT_IN_PROFILES:
    REGISTRY.register(_profile, aliases=_aliases)
