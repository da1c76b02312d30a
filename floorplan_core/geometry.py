"""Stateless geometry primitives for floor plan shapes.

Every helper takes value types and returns new values. Rects, ellipses and
rings are the frozen models from :mod:`floorplan_core.models`; points are plain
``(x, y)`` tuples. ``bounds`` is anything exposing ``width`` and ``height``
(usually the plan ``Canvas``) and ``delta`` is a ``(dx, dy)`` pair.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from .config import CoreSettings
from .models import (
    EllipseShape,
    MultiPolygonShape,
    PartitionDirection,
    Point,
    PolygonShape,
    RectHandle,
    RectShape,
    Ring,
)

MIN_SIZE = CoreSettings.min_size
SNAP_ANGLES = (0.0, 15.0, 30.0, 45.0, 90.0, 135.0, 180.0, 225.0, 270.0, 315.0)

Delta = Tuple[float, float]


class Bounds(Protocol):
    width: float
    height: float


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def to_rect(self) -> RectShape:
        return RectShape(x=self.x, y=self.y, width=self.width, height=self.height)


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


# ---------------------------------------------------------------------------
# Points and rings


def translate_points(points: Iterable[Point], delta: Delta) -> Ring:
    dx, dy = delta
    return tuple((x + dx, y + dy) for x, y in points)


def polygon_area(points: Sequence[Point]) -> float:
    """Return the absolute shoelace area of an open ring."""

    if len(points) < 3:
        return 0.0
    arr = np.asarray(points, dtype=float)
    x = arr[:, 0]
    y = arr[:, 1]
    return float(0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def polygon_area_with_holes(points: Sequence[Point], holes: Optional[Sequence[Sequence[Point]]] = None) -> float:
    outer = polygon_area(points)
    hole_area = sum(polygon_area(hole) for hole in holes or ())
    return max(0.0, outer - hole_area)


def rotate_point(point: Point, center: Point, angle_deg: float) -> Point:
    angle = math.radians(angle_deg)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    dx = point[0] - center[0]
    dy = point[1] - center[1]
    return (center[0] + dx * cos_a - dy * sin_a, center[1] + dx * sin_a + dy * cos_a)


def rotate_points(points: Iterable[Point], center: Point, angle_deg: float) -> Ring:
    """Rotate every point counter-clockwise by ``angle_deg`` about ``center``."""

    return tuple(rotate_point(p, center, angle_deg) for p in points)


def polygon_centroid(points: Sequence[Point]) -> Point:
    """Area centroid of an open ring in either winding; degenerate rings give the vertex mean."""

    if not points:
        return (0.0, 0.0)
    arr = np.asarray(points, dtype=float)
    x = arr[:, 0]
    y = arr[:, 1]
    x_next = np.roll(x, -1)
    y_next = np.roll(y, -1)
    cross = x * y_next - x_next * y
    signed_area = 0.5 * float(np.sum(cross))
    if abs(signed_area) <= 1e-12:
        return (float(x.mean()), float(y.mean()))
    cx = float(np.sum((x + x_next) * cross)) / (6.0 * signed_area)
    cy = float(np.sum((y + y_next) * cross)) / (6.0 * signed_area)
    return (cx, cy)


def points_bounding_box(points: Sequence[Point]) -> BoundingBox:
    if not points:
        return BoundingBox(0.0, 0.0, 0.0, 0.0)
    arr = np.asarray(points, dtype=float)
    min_x, min_y = arr.min(axis=0)
    max_x, max_y = arr.max(axis=0)
    return BoundingBox(float(min_x), float(min_y), float(max_x - min_x), float(max_y - min_y))


def clamp_delta_for_polygon(points: Sequence[Point], bounds: Bounds, delta: Delta) -> Delta:
    """Reduce ``delta`` so the translated points stay inside ``bounds``.

    Each component only shrinks toward zero: a ring that already sits off the
    canvas is never pulled back by a move that does not head that way.
    """

    if not points:
        return delta
    dx, dy = delta
    box = points_bounding_box(points)
    min_x, max_x = box.x + dx, box.max_x + dx
    min_y, max_y = box.y + dy, box.max_y + dy
    if min_x < 0:
        dx -= min_x
    if max_x > bounds.width:
        dx += bounds.width - max_x
    if min_y < 0:
        dy -= min_y
    if max_y > bounds.height:
        dy += bounds.height - max_y
    dx = clamp(dx, min(0.0, delta[0]), max(0.0, delta[0]))
    dy = clamp(dy, min(0.0, delta[1]), max(0.0, delta[1]))
    return (dx, dy)


def clamp_delta_for_multipolygon(
    polygons: Sequence[Sequence[Point]],
    bounds: Bounds,
    delta: Delta,
    holes: Optional[Sequence[Sequence[Sequence[Point]]]] = None,
) -> Delta:
    pts: List[Point] = [p for ring in polygons for p in ring]
    for hole_list in holes or ():
        for ring in hole_list:
            pts.extend(ring)
    return clamp_delta_for_polygon(pts, bounds, delta)


# ---------------------------------------------------------------------------
# Rects


def rect_corners(rect: RectShape) -> Ring:
    x, y, w, h = rect.x, rect.y, rect.width, rect.height
    return ((x, y), (x + w, y), (x + w, y + h), (x, y + h))


def rect_edges(rect: RectShape) -> Tuple[float, float, float, float]:
    return (rect.x, rect.x + rect.width, rect.y, rect.y + rect.height)


def move_rect(rect: RectShape, delta: Delta, bounds: Bounds) -> RectShape:
    """Translate ``rect`` and keep it fully on the canvas; size never changes."""

    x = clamp(rect.x + delta[0], 0.0, max(0.0, bounds.width - rect.width))
    y = clamp(rect.y + delta[1], 0.0, max(0.0, bounds.height - rect.height))
    return rect.model_copy(update={"x": x, "y": y})


def apply_rect_resize(
    rect: RectShape,
    handle: RectHandle,
    delta: Delta,
    bounds: Bounds,
    min_size: float = MIN_SIZE,
) -> RectShape:
    """Drag one of the eight resize handles by ``delta``.

    East/south edges grow the size, west/north edges move the origin and shrink
    the opposite dimension. A second, global clamp afterwards keeps the rect
    between ``min_size`` and the canvas size and fully on the canvas, so
    dragging past an edge can neither invert nor overflow the rect.
    """

    x, y, width, height = rect.x, rect.y, rect.width, rect.height
    dx, dy = delta
    max_width = bounds.width
    max_height = bounds.height

    if "e" in handle:
        width = clamp(width + dx, min_size, max_width - x)
    if "s" in handle:
        height = clamp(height + dy, min_size, max_height - y)
    if "w" in handle:
        next_x = clamp(x + dx, 0.0, x + width - min_size)
        width = clamp(width - (next_x - x), min_size, max_width - next_x)
        x = next_x
    if "n" in handle:
        next_y = clamp(y + dy, 0.0, y + height - min_size)
        height = clamp(height - (next_y - y), min_size, max_height - next_y)
        y = next_y

    width = max(min_size, min(width, max_width))
    height = max(min_size, min(height, max_height))
    x = clamp(x, 0.0, max_width - width)
    y = clamp(y, 0.0, max_height - height)
    return rect.model_copy(update={"x": x, "y": y, "width": width, "height": height})


def constrain_rect_to_bounds(rect: RectShape, bounds: Bounds, min_size: float = MIN_SIZE) -> RectShape:
    """Clamp the origin first, then fit the size into the remaining space."""

    x = clamp(rect.x, 0.0, max(0.0, bounds.width - min_size))
    y = clamp(rect.y, 0.0, max(0.0, bounds.height - min_size))
    width = clamp(rect.width, min_size, bounds.width - x)
    height = clamp(rect.height, min_size, bounds.height - y)
    return rect.model_copy(update={"x": x, "y": y, "width": width, "height": height})


def snap_value(value: float, step: float = MIN_SIZE) -> float:
    return round(value / step) * step


def snap_rect(
    rect: RectShape,
    step: float,
    neighbor_edges: Iterable[float] = (),
    tolerance_ratio: float = CoreSettings.snap_tolerance_ratio,
    min_size: float = MIN_SIZE,
) -> RectShape:
    """Snap to the grid, then pull each edge onto a close neighbor edge.

    A grid-snapped edge is replaced by the nearest neighbor edge lying strictly
    within ``tolerance_ratio * step`` of it. Width and height are derived from
    the two snapped edges, never snapped on their own.
    """

    edges = list(neighbor_edges)
    limit = step * tolerance_ratio

    def snap_edge(value: float) -> float:
        best = value
        best_delta = limit
        for edge in edges:
            d = abs(edge - value)
            if d < best_delta:
                best_delta = d
                best = edge
        return best

    x = snap_edge(snap_value(rect.x, step))
    y = snap_edge(snap_value(rect.y, step))
    width = snap_edge(x + snap_value(rect.width, step)) - x
    height = snap_edge(y + snap_value(rect.height, step)) - y
    return rect.model_copy(
        update={"x": x, "y": y, "width": max(width, min_size), "height": max(height, min_size)}
    )


def split_rect_evenly(rect: RectShape, count: int, direction: PartitionDirection) -> List[RectShape]:
    """Tile ``rect`` with ``count`` equal slices; each slice is derived from the original size."""

    if count <= 1:
        return [rect.model_copy()]
    if direction == "vertical":
        size = rect.width / count
        return [
            RectShape(x=rect.x + size * i, y=rect.y, width=size, height=rect.height)
            for i in range(count)
        ]
    if direction == "horizontal":
        size = rect.height / count
        return [
            RectShape(x=rect.x, y=rect.y + size * i, width=rect.width, height=size)
            for i in range(count)
        ]
    raise ValueError(f"Unknown partition direction '{direction}'")


def default_direction(width: float, height: float) -> PartitionDirection:
    return "vertical" if width >= height else "horizontal"


# ---------------------------------------------------------------------------
# Ellipses


def ellipse_to_rect(ellipse: EllipseShape) -> RectShape:
    return RectShape(
        x=ellipse.cx - ellipse.rx,
        y=ellipse.cy - ellipse.ry,
        width=ellipse.rx * 2.0,
        height=ellipse.ry * 2.0,
    )


def rect_to_ellipse(rect: RectShape) -> EllipseShape:
    rx = rect.width / 2.0
    ry = rect.height / 2.0
    return EllipseShape(cx=rect.x + rx, cy=rect.y + ry, rx=rx, ry=ry)


def ellipse_ring(ellipse: EllipseShape, segments: int = CoreSettings.ellipse_segments) -> Ring:
    """Sample the ellipse outline as an open ring of ``segments`` points."""

    angle = np.linspace(0.0, 2.0 * math.pi, segments, endpoint=False)
    x = ellipse.cx + ellipse.rx * np.cos(angle)
    y = ellipse.cy + ellipse.ry * np.sin(angle)
    return tuple((float(px), float(py)) for px, py in zip(x, y))


# ---------------------------------------------------------------------------
# Shape-level helpers


def shape_bounding_box(shape) -> BoundingBox:
    if isinstance(shape, RectShape):
        return BoundingBox(shape.x, shape.y, shape.width, shape.height)
    if isinstance(shape, EllipseShape):
        return BoundingBox(shape.cx - shape.rx, shape.cy - shape.ry, shape.rx * 2.0, shape.ry * 2.0)
    if isinstance(shape, PolygonShape):
        pts = list(shape.points)
        for hole in shape.holes or ():
            pts.extend(hole)
        return points_bounding_box(pts)
    if isinstance(shape, MultiPolygonShape):
        pts = [p for ring in shape.polygons for p in ring]
        for hole_list in shape.holes or ():
            for hole in hole_list:
                pts.extend(hole)
        return points_bounding_box(pts)
    raise TypeError(f"Unsupported shape {shape!r}")


def shape_area(shape) -> float:
    """Net area of a shape, holes subtracted."""

    if isinstance(shape, RectShape):
        return shape.width * shape.height
    if isinstance(shape, EllipseShape):
        return math.pi * shape.rx * shape.ry
    if isinstance(shape, PolygonShape):
        return polygon_area_with_holes(shape.points, shape.holes)
    if isinstance(shape, MultiPolygonShape):
        holes = shape.holes or ()
        total = 0.0
        for idx, ring in enumerate(shape.polygons):
            total += polygon_area_with_holes(ring, holes[idx] if idx < len(holes) else None)
        return total
    raise TypeError(f"Unsupported shape {shape!r}")


def translate_shape(shape, delta: Delta):
    """Translate any shape variant without clamping."""

    dx, dy = delta
    if isinstance(shape, RectShape):
        return shape.model_copy(update={"x": shape.x + dx, "y": shape.y + dy})
    if isinstance(shape, EllipseShape):
        return shape.model_copy(update={"cx": shape.cx + dx, "cy": shape.cy + dy})
    if isinstance(shape, PolygonShape):
        holes = None
        if shape.holes is not None:
            holes = tuple(translate_points(h, delta) for h in shape.holes)
        return shape.model_copy(update={"points": translate_points(shape.points, delta), "holes": holes})
    if isinstance(shape, MultiPolygonShape):
        holes = None
        if shape.holes is not None:
            holes = tuple(tuple(translate_points(h, delta) for h in hole_list) for hole_list in shape.holes)
        polygons = tuple(translate_points(ring, delta) for ring in shape.polygons)
        return shape.model_copy(update={"polygons": polygons, "holes": holes})
    raise TypeError(f"Unsupported shape {shape!r}")


def _mirror_ring(ring: Iterable[Point], axis: str, center: Point) -> Ring:
    if axis == "vertical":
        return tuple((2.0 * center[0] - x, y) for x, y in ring)
    return tuple((x, 2.0 * center[1] - y) for x, y in ring)


def mirror_shape(shape, axis: str):
    """Reflect polygon rings about their own bounding-box centre.

    ``vertical`` flips x, ``horizontal`` flips y. Rects and ellipses are
    symmetric about their own centre and come back unchanged.
    """

    if axis not in ("vertical", "horizontal"):
        raise ValueError(f"Unknown mirror axis '{axis}'")
    if isinstance(shape, (RectShape, EllipseShape)):
        return shape
    center = shape_bounding_box(shape).center
    if isinstance(shape, PolygonShape):
        holes = None
        if shape.holes is not None:
            holes = tuple(_mirror_ring(h, axis, center) for h in shape.holes)
        return shape.model_copy(update={"points": _mirror_ring(shape.points, axis, center), "holes": holes})
    if isinstance(shape, MultiPolygonShape):
        holes = None
        if shape.holes is not None:
            holes = tuple(tuple(_mirror_ring(h, axis, center) for h in hole_list) for hole_list in shape.holes)
        polygons = tuple(_mirror_ring(ring, axis, center) for ring in shape.polygons)
        return shape.model_copy(update={"polygons": polygons, "holes": holes})
    raise TypeError(f"Unsupported shape {shape!r}")


def snap_angle(angle: float, enabled: bool) -> float:
    """Snap ``angle`` (degrees) to the closest entry of ``SNAP_ANGLES``."""

    if not enabled:
        return angle
    best = angle
    best_delta = 360.0
    for candidate in SNAP_ANGLES:
        d = abs(((angle - candidate + 540.0) % 360.0) - 180.0)
        if d < best_delta:
            best_delta = d
            best = candidate
    return best


__all__ = [
    "MIN_SIZE",
    "SNAP_ANGLES",
    "Bounds",
    "BoundingBox",
    "clamp",
    "translate_points",
    "polygon_area",
    "polygon_area_with_holes",
    "rotate_point",
    "rotate_points",
    "polygon_centroid",
    "points_bounding_box",
    "clamp_delta_for_polygon",
    "clamp_delta_for_multipolygon",
    "rect_corners",
    "rect_edges",
    "move_rect",
    "apply_rect_resize",
    "constrain_rect_to_bounds",
    "snap_value",
    "snap_rect",
    "split_rect_evenly",
    "default_direction",
    "ellipse_to_rect",
    "rect_to_ellipse",
    "ellipse_ring",
    "shape_bounding_box",
    "shape_area",
    "translate_shape",
    "mirror_shape",
    "snap_angle",
]
