"""2D polygon boolean helpers (union / difference / intersection).

Shapes are bridged to a ring-based representation before any set operation:
a *multi* is a list of polygons, a polygon is a list of rings (outer ring
first, then holes) and each ring is an explicitly closed list of points. The
core only depends on the :class:`PolygonSetOperations` protocol; the default
implementation is backed by shapely.
"""
from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, Tuple

from shapely.geometry import MultiPolygon as _SGMultiPolygon
from shapely.geometry import Polygon as _SGPolygon
from shapely.geometry.polygon import orient
from shapely.ops import unary_union

from .config import CoreSettings
from .geometry import ellipse_ring, polygon_area, rect_corners
from .models import EllipseShape, MultiPolygonShape, Point, PolygonShape, RectShape, Ring

RingList = List[Point]
PolygonRings = List[RingList]
MultiRings = List[PolygonRings]

AREA_EPS = 1e-12


class PolygonSetOperations(Protocol):
    def union(self, *inputs: MultiRings) -> MultiRings:
        ...

    def difference(self, subject: MultiRings, *clips: MultiRings) -> MultiRings:
        ...

    def intersection(self, *inputs: MultiRings) -> MultiRings:
        ...


# ---------------------------------------------------------------------------
# Shape <-> ring conversion


def close_ring(points: Sequence[Point]) -> RingList:
    ring = [(float(x), float(y)) for x, y in points]
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def open_ring(ring: Sequence[Point]) -> Ring:
    pts = [(float(x), float(y)) for x, y in ring]
    if len(pts) > 1 and pts[0] == pts[-1]:
        pts = pts[:-1]
    return tuple(pts)


def shape_to_polygons(shape, segments: int = CoreSettings.ellipse_segments) -> MultiRings:
    """Convert any shape variant into closed rings."""

    if isinstance(shape, RectShape):
        return [[close_ring(rect_corners(shape))]]
    if isinstance(shape, EllipseShape):
        return [[close_ring(ellipse_ring(shape, segments))]]
    if isinstance(shape, PolygonShape):
        return [[close_ring(shape.points)] + [close_ring(h) for h in shape.holes or ()]]
    if isinstance(shape, MultiPolygonShape):
        holes = shape.holes or ()
        polys: MultiRings = []
        for idx, ring in enumerate(shape.polygons):
            hole_list = holes[idx] if idx < len(holes) else ()
            polys.append([close_ring(ring)] + [close_ring(h) for h in hole_list])
        return polys
    raise TypeError(f"Unsupported shape {shape!r}")


def _usable(ring: Ring) -> bool:
    return len(ring) >= 3 and polygon_area(ring) > AREA_EPS


def polygons_to_shape(polygons: MultiRings, max_holes: Optional[int] = None):
    """Turn set-operation output back into a polygon or multipolygon.

    The first ring of each component is its outline and the rings after it are
    holes, limited to the first ``max_holes`` when given. Degenerate rings are
    dropped; ``None`` means nothing survived.
    """

    outlines: List[Ring] = []
    holes: List[Tuple[Ring, ...]] = []
    hole_end = None if max_holes is None else 1 + max_holes
    for poly in polygons:
        if not poly:
            continue
        outer = open_ring(poly[0])
        if not _usable(outer):
            continue
        outlines.append(outer)
        holes.append(tuple(h for h in (open_ring(r) for r in poly[1:hole_end]) if _usable(h)))
    if not outlines:
        return None
    if len(outlines) == 1:
        return PolygonShape(points=outlines[0], holes=holes[0] or None)
    has_holes = any(holes)
    return MultiPolygonShape(polygons=tuple(outlines), holes=tuple(holes) if has_holes else None)


# ---------------------------------------------------------------------------
# shapely backend


def _to_geometry(polygons: MultiRings):
    parts = []
    for rings in polygons:
        if not rings or len(rings[0]) < 4:
            continue
        interiors = [r for r in rings[1:] if len(r) >= 4]
        parts.append(_SGPolygon(rings[0], interiors).buffer(0.0))
    return unary_union(parts) if parts else _SGPolygon()


def _explode_polygons(geom) -> MultiRings:
    if geom.is_empty:
        return []
    if isinstance(geom, _SGPolygon):
        parts = [geom]
    elif isinstance(geom, _SGMultiPolygon):
        parts = list(geom.geoms)
    else:
        parts = [g for g in getattr(geom, "geoms", ()) if isinstance(g, _SGPolygon)]
    out: MultiRings = []
    for part in parts:
        if part.is_empty:
            continue
        part = orient(part, sign=1.0)
        rings = [[(float(x), float(y)) for x, y in part.exterior.coords]]
        rings.extend([(float(x), float(y)) for x, y in interior.coords] for interior in part.interiors)
        out.append(rings)
    return out


class ShapelySetOperations:
    """:class:`PolygonSetOperations` implemented with shapely's overlay engine."""

    def union(self, *inputs: MultiRings) -> MultiRings:
        geoms = [_to_geometry(item) for item in inputs]
        return _explode_polygons(unary_union(geoms))

    def difference(self, subject: MultiRings, *clips: MultiRings) -> MultiRings:
        result = _to_geometry(subject)
        if clips:
            result = result.difference(unary_union([_to_geometry(c) for c in clips]))
        return _explode_polygons(result)

    def intersection(self, *inputs: MultiRings) -> MultiRings:
        if not inputs:
            return []
        result = _to_geometry(inputs[0])
        for item in inputs[1:]:
            result = result.intersection(_to_geometry(item))
        return _explode_polygons(result)


default_operations: PolygonSetOperations = ShapelySetOperations()


# ---------------------------------------------------------------------------
# Shape-level operations


def merge_shapes(shapes: Sequence, ops: Optional[PolygonSetOperations] = None):
    """Union of all ``shapes``; ``None`` when the union is empty.

    Only the first interior ring of each merged component is kept as a hole.
    """

    ops = ops or default_operations
    merged = ops.union(*[shape_to_polygons(s) for s in shapes])
    return polygons_to_shape(merged, max_holes=1)


def subtract_shapes(subject, cutters: Sequence, ops: Optional[PolygonSetOperations] = None):
    """``subject`` minus the union of ``cutters``; ``None`` when nothing is left."""

    ops = ops or default_operations
    result = ops.difference(shape_to_polygons(subject), *[shape_to_polygons(c) for c in cutters])
    return polygons_to_shape(result)


def intersect_shapes(shapes: Sequence, ops: Optional[PolygonSetOperations] = None):
    ops = ops or default_operations
    return polygons_to_shape(ops.intersection(*[shape_to_polygons(s) for s in shapes]))


def shape_outline(shape, segments: int = CoreSettings.ellipse_segments) -> Tuple[List[Ring], List[Tuple[Ring, ...]]]:
    """Outline rings and per-ring holes of a shape, without any boolean step."""

    if isinstance(shape, RectShape):
        return [rect_corners(shape)], [()]
    if isinstance(shape, EllipseShape):
        return [ellipse_ring(shape, segments)], [()]
    if isinstance(shape, PolygonShape):
        return [shape.points], [tuple(shape.holes or ())]
    if isinstance(shape, MultiPolygonShape):
        holes = shape.holes or ()
        return list(shape.polygons), [tuple(holes[i]) if i < len(holes) else () for i in range(len(shape.polygons))]
    raise TypeError(f"Unsupported shape {shape!r}")


__all__ = [
    "PolygonSetOperations",
    "ShapelySetOperations",
    "default_operations",
    "close_ring",
    "open_ring",
    "shape_to_polygons",
    "polygons_to_shape",
    "merge_shapes",
    "subtract_shapes",
    "intersect_shapes",
    "shape_outline",
]
