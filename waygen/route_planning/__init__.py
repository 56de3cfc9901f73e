"""Mini README: Route planning subsystem for survey mission design.

Exports the path synthesizer, which turns a boundary polygon and a
``MissionSettings`` snapshot into an ordered waypoint list using either a
boustrophedon grid or a circular orbit.
"""

from .planner import PathSynthesizer, SynthesisResult, resolve_profile, synthesize_path

__all__ = ["PathSynthesizer", "SynthesisResult", "resolve_profile", "synthesize_path"]
