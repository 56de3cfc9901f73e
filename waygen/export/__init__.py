"""Mini README: Export utilities for Waygen missions.

Exposes the KMZ mission codec, which writes DJI WPML flight plans with an
embedded session block and reads them (or peer-tool KML/KMZ files) back.
"""

from .mission_codec import MissionCodec, MissionFile

__all__ = ["MissionCodec", "MissionFile"]
