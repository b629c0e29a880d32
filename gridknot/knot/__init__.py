"""knot: closed-curve tracing and path geometry for grid diagrams."""

from gridknot.knot.path import (
    KnotPath,
    PathVertex,
    build_knot_paths,
    component_count,
    trace_components,
)
from gridknot.knot.polyline import Polyline

__all__ = [
    "KnotPath",
    "PathVertex",
    "Polyline",
    "build_knot_paths",
    "component_count",
    "trace_components",
]
