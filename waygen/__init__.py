"""Mini README: Core package initializer for the Waygen mission planner.

Waygen turns a drawn survey boundary and a set of camera/drone settings into
an ordered waypoint mission, evaluates its flight time and safety margins,
and reads/writes DJI-compatible KMZ packages. Sub-packages:

    * geometry - geodesy kernel and camera footprints.
    * profiles - drone/camera preset registry.
    * route_planning - grid and orbit path synthesis.
    * metrics - safe speed, mission time, warning levels.
    * export - KMZ mission codec.

Heavy imports are left to the sub-packages so importing ``waygen`` stays
cheap.
"""

from .logging_utils import get_logger

__version__ = "0.3.0"

__all__ = ["__version__", "get_logger"]
