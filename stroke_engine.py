"""
Trace Validation Engine
- Decides whether a traced point set reproduces a target character
- Waypoint hit-testing against the template library
- Bounding-box coverage fallback for characters without a template
"""

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

import config
from letter_templates import DEFAULT_LIBRARY, TemplateLibrary, Waypoint

logger = logging.getLogger(__name__)

CanvasSize = Union[float, Tuple[float, float]]


class Point(NamedTuple):
    """Canvas pixel coordinate."""
    x: float
    y: float


# Pen-lift sentinel inside a flattened point list
BREAK_MARKER = Point(math.nan, math.nan)


# ===============================
# Geometry & Normalization Utils
# ===============================

def dist(a, b):
    """Euclidean distance between two points."""
    a = np.array(a, dtype=np.float64)
    b = np.array(b, dtype=np.float64)
    return float(np.linalg.norm(a - b))


def is_break(pt) -> bool:
    """True for a stroke break marker (any non-finite coordinate)."""
    return not (math.isfinite(pt[0]) and math.isfinite(pt[1]))


def _is_point(item) -> bool:
    return len(item) == 2 and isinstance(item[0], Real) and isinstance(item[1], Real)


def real_points(points) -> List[Point]:
    """
    Flatten captured input into real points only.

    Accepts a flat sequence of (x, y) pairs that may contain break
    markers, or a sequence of strokes (each a sequence of pairs).
    """
    out = []
    for item in points:
        if _is_point(item):
            if not is_break(item):
                out.append(Point(float(item[0]), float(item[1])))
        else:
            out.extend(real_points(item))
    return out


def canvas_dimensions(canvas_size: CanvasSize) -> Tuple[float, float]:
    """Return (width, height); a single number means a square canvas."""
    if isinstance(canvas_size, (tuple, list)):
        width, height = canvas_size
    else:
        width = height = canvas_size
    if not (width > 0 and height > 0):
        raise ValueError(f"canvas size must be positive, got {canvas_size!r}")
    return float(width), float(height)


def normalize_trace(pts: Sequence[Point], canvas_size: CanvasSize) -> np.ndarray:
    """Scale canvas pixels into the unit square, x by width and y by height."""
    width, height = canvas_dimensions(canvas_size)
    arr = np.asarray(pts, dtype=np.float64).reshape(-1, 2)
    return arr / np.array([width, height])


def bounding_box_coverage(pts: Sequence[Point], canvas_size: CanvasSize) -> float:
    """Area of the points' axis-aligned bounding box over canvas area."""
    width, height = canvas_dimensions(canvas_size)
    if len(pts) == 0:
        return 0.0
    arr = np.asarray(pts, dtype=np.float64)
    span = arr.max(axis=0) - arr.min(axis=0)
    return float(span[0] * span[1] / (width * height))


# ===============================
# Waypoint Matching
# ===============================

def waypoint_hits(
    normalized: np.ndarray,
    waypoints: Sequence[Waypoint],
    radius: float = config.WAYPOINT_RADIUS
) -> np.ndarray:
    """
    Boolean mask over `waypoints`: True where some normalized trace point
    lies strictly within `radius`. Order of the trace is ignored.
    """
    wps = np.asarray(waypoints, dtype=np.float64).reshape(-1, 2)
    if len(normalized) == 0:
        return np.zeros(len(wps), dtype=bool)
    # (waypoints, points) distance matrix
    deltas = wps[:, None, :] - normalized[None, :, :]
    d = np.sqrt((deltas ** 2).sum(axis=2))
    return (d < radius).any(axis=1)


def min_hit_ratio(waypoint_count: int) -> float:
    """Fraction of waypoints that must be hit for a template of this size."""
    if waypoint_count <= 3:
        return 1.0
    if waypoint_count <= 5:
        return 0.6
    return 0.5


@dataclass(frozen=True)
class TraceVerdict:
    """Outcome of validating one trace."""
    accepted: bool
    method: str                 # "too_short", "waypoints" or "coverage"
    point_count: int
    hits: int = 0
    total: int = 0
    hit_ratio: float = 0.0
    coverage: float = 0.0

    def __bool__(self):
        return self.accepted


def score_trace(
    points,
    target: str,
    canvas_size: CanvasSize,
    library: Optional[TemplateLibrary] = None
) -> TraceVerdict:
    """
    Validate a trace and report how it was judged.

    1. Fewer than MIN_TRACE_POINTS real points is always a rejection.
    2. Without a template, accept when the bounding box covers at least
       MIN_COVERAGE_RATIO of the canvas.
    3. Otherwise accept when the share of waypoints hit meets
       min_hit_ratio() for the template's size.
    """
    canvas_dimensions(canvas_size)
    if library is None:
        library = DEFAULT_LIBRARY
    pts = real_points(points)
    n = len(pts)

    if n < config.MIN_TRACE_POINTS:
        verdict = TraceVerdict(accepted=False, method="too_short", point_count=n)
        logger.debug("%r rejected: only %d points", target, n)
        return verdict

    waypoints = library.lookup(target)
    if waypoints is None:
        coverage = bounding_box_coverage(pts, canvas_size)
        verdict = TraceVerdict(
            accepted=coverage >= config.MIN_COVERAGE_RATIO,
            method="coverage",
            point_count=n,
            coverage=coverage,
        )
        logger.debug("%r coverage=%.4f accepted=%s", target, coverage, verdict.accepted)
        return verdict

    hits = int(waypoint_hits(normalize_trace(pts, canvas_size), waypoints).sum())
    total = len(waypoints)
    ratio = hits / total
    verdict = TraceVerdict(
        accepted=ratio >= min_hit_ratio(total),
        method="waypoints",
        point_count=n,
        hits=hits,
        total=total,
        hit_ratio=ratio,
    )
    logger.debug("%r hits=%d/%d accepted=%s", target, hits, total, verdict.accepted)
    return verdict


def validate_trace(
    points,
    target: str,
    canvas_size: CanvasSize,
    library: Optional[TemplateLibrary] = None
) -> bool:
    """True if the trace sufficiently matches the target's shape."""
    return score_trace(points, target, canvas_size, library).accepted


def missed_waypoints(
    points,
    target: str,
    canvas_size: CanvasSize,
    library: Optional[TemplateLibrary] = None
) -> List[Waypoint]:
    """Waypoints of the target's template not yet hit by the trace."""
    if library is None:
        library = DEFAULT_LIBRARY
    waypoints = library.lookup(target)
    if waypoints is None:
        return []
    pts = real_points(points)
    mask = waypoint_hits(normalize_trace(pts, canvas_size), waypoints)
    return [wp for wp, hit in zip(waypoints, mask) if not hit]


if __name__ == "__main__":
    size = 200
    trace = [(100, y) for y in range(30, 171, 10)]
    print(f"'I' straight down: {score_trace(trace, 'I', size)}")
    print(f"'I' top half only: {score_trace(trace[:8], 'I', size)}")
