"""Mini README: Unit conversion and display formatting.

Mission state is always stored in metric units. These helpers convert for
display in the operator's chosen unit system and format distances and
durations the way the control surfaces print them.
"""

from __future__ import annotations

from ..mission import UnitSystem

METERS_TO_FEET = 3.28084
FEET_PER_MILE = 5280


def to_display(meters: float, units: UnitSystem) -> float:
    """Convert a metric length (or speed) into the display unit system."""

    return meters * METERS_TO_FEET if units == UnitSystem.IMPERIAL else meters


def to_metric(value: float, units: UnitSystem) -> float:
    return value / METERS_TO_FEET if units == UnitSystem.IMPERIAL else value


def format_distance(meters: float, units: UnitSystem) -> str:
    """Human friendly distance: m/km for metric, ft/mi for imperial."""

    if units == UnitSystem.METRIC:
        if meters >= 1000:
            return f"{meters / 1000:.2f} km"
        return f"{round(meters)} m"
    feet = meters * METERS_TO_FEET
    if feet >= FEET_PER_MILE:
        return f"{feet / FEET_PER_MILE:.2f} mi"
    return f"{round(feet)} ft"


def format_speed(meters_per_second: float, units: UnitSystem) -> str:
    suffix = "ft/s" if units == UnitSystem.IMPERIAL else "m/s"
    return f"{to_display(meters_per_second, units):.1f} {suffix}"


def format_duration(seconds: float) -> str:
    """Format seconds as ``M:SS``."""

    total = int(round(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"
