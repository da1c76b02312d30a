"""The command interpreter: ``(plan, command) -> CommandResult``.

Handlers never raise for well-typed input. A bad reference, a variant
mismatch or degenerate geometry hands back the *same* plan object, which is
how the history layer recognises a no-op. Handlers that do change something
build a new plan value and stamp ``meta.updatedAt``.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from . import boolean2d
from . import commands as cmd
from .config import CoreSettings, get_settings
from .geometry import (
    apply_rect_resize,
    clamp_delta_for_multipolygon,
    clamp_delta_for_polygon,
    constrain_rect_to_bounds,
    default_direction,
    ellipse_to_rect,
    mirror_shape,
    move_rect,
    rect_corners,
    rect_edges,
    rect_to_ellipse,
    shape_area,
    shape_bounding_box,
    snap_rect,
    split_rect_evenly,
    translate_shape,
)
from .grouping import add_group, delete_group, set_group_locked, set_group_visibility
from .models import (
    EMPTY_SELECTION,
    Area,
    EllipseShape,
    MultiPolygonShape,
    Plan,
    PolygonShape,
    RectShape,
    Ring,
    Selection,
    utc_now,
)
from .naming import default_area_name, new_id, partition_names
from .plan_factory import (
    ELLIPSE_FILL,
    ELLIPSE_STROKE,
    POLYGON_FILL,
    POLYGON_STROKE,
    RECT_FILL,
    RECT_STROKE,
    create_blank_plan,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    plan: Plan
    selection: Optional[Selection] = None
    description: Optional[str] = None


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def _valid_rect(rect: RectShape) -> bool:
    return _finite(rect.x, rect.y, rect.width, rect.height) and rect.width > 0 and rect.height > 0


def _valid_ellipse(ellipse: EllipseShape) -> bool:
    return _finite(ellipse.cx, ellipse.cy, ellipse.rx, ellipse.ry) and ellipse.rx > 0 and ellipse.ry > 0


def _valid_holes(holes: Optional[Sequence[Ring]]):
    """Keep only hole rings with at least three points; ``None`` if none remain."""

    kept = tuple(h for h in holes or () if len(h) >= 3)
    return kept or None


def _valid_hole_lists(holes: Optional[Sequence[Sequence[Ring]]], count: int):
    """One filtered hole list per polygon, trimmed or padded to ``count``; ``None`` if all are empty."""

    source = holes or ()
    lists = tuple(
        tuple(h for h in (source[idx] if idx < len(source) else ()) if len(h) >= 3)
        for idx in range(count)
    )
    return lists if any(lists) else None


def neighbor_edges(plan: Plan, exclude: Iterable[str] = ()) -> List[float]:
    """Edge coordinates of every rect area not listed in ``exclude``."""

    skip = set(exclude)
    edges: List[float] = []
    for area in plan.areas:
        if area.id in skip or not isinstance(area.shape, RectShape):
            continue
        edges.extend(rect_edges(area.shape))
    return edges


def _replace_area(plan: Plan, area: Area) -> Plan:
    areas = tuple(area if a.id == area.id else a for a in plan.areas)
    return plan.model_copy(update={"areas": areas})


def _without(plan: Plan, ids: Iterable[str]) -> Plan:
    drop = set(ids)
    return plan.model_copy(update={"areas": tuple(a for a in plan.areas if a.id not in drop)})


def _with_areas(plan: Plan, new_areas: Iterable[Area]) -> Plan:
    return plan.model_copy(update={"areas": plan.areas + tuple(new_areas)})


class CommandInterpreter:
    """Pure state-transition function over plan documents."""

    def __init__(
        self,
        settings: Optional[CoreSettings] = None,
        operations: Optional[boolean2d.PolygonSetOperations] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.operations = operations or boolean2d.default_operations
        self._handlers: Dict[type, Callable[[Plan, object], CommandResult]] = {
            cmd.CreatePlan: self._create_plan,
            cmd.ResizePlanBoundary: self._resize_boundary,
            cmd.SetViewport: self._set_viewport,
            cmd.LoadPlan: self._load_plan,
            cmd.CreateArea: self._create_area,
            cmd.CreatePolygon: self._create_polygon,
            cmd.CreateEllipse: self._create_ellipse,
            cmd.PasteAreas: self._paste_areas,
            cmd.MoveArea: self._move_area,
            cmd.ResizeArea: self._resize_area,
            cmd.MovePolygon: self._move_polygon,
            cmd.MoveMany: self._move_many,
            cmd.SetRect: self._set_rect,
            cmd.SetRectBatch: self._set_rect_batch,
            cmd.SetPolygon: self._set_polygon,
            cmd.SetMultiPolygon: self._set_multipolygon,
            cmd.SetEllipse: self._set_ellipse,
            cmd.MirrorArea: self._mirror_area,
            cmd.RenameArea: self._rename_area,
            cmd.RecolorArea: self._recolor_area,
            cmd.DeleteArea: self._delete_area,
            cmd.DivideArea: self._divide_area,
            cmd.MergeAreas: self._merge_areas,
            cmd.SubtractAreas: self._subtract_areas,
            cmd.ConvertToPolygon: self._convert_to_polygon,
            cmd.CreateGroup: self._create_group,
            cmd.DeleteGroup: self._delete_group,
            cmd.SetGroupVisibility: self._set_group_visibility,
            cmd.SetGroupLocked: self._set_group_locked,
            cmd.SetSelection: self._set_selection,
        }

    def apply(self, plan: Plan, command) -> CommandResult:
        handler = self._handlers.get(type(command))
        if handler is None:
            return self._noop(plan, f"unknown command {command!r}")
        return handler(plan, command)

    # ------------------------------------------------------------------
    # helpers

    def _noop(self, plan: Plan, reason: str, selection: Optional[Selection] = None) -> CommandResult:
        logger.debug("No-op: %s", reason)
        return CommandResult(plan=plan, selection=selection)

    def _commit(
        self,
        plan: Plan,
        next_plan: Plan,
        description: str,
        selection: Optional[Selection] = None,
    ) -> CommandResult:
        if next_plan.content_equals(plan):
            return CommandResult(plan=plan, selection=selection)
        meta = next_plan.meta.model_copy(update={"updated_at": utc_now()})
        return CommandResult(
            plan=next_plan.model_copy(update={"meta": meta}),
            selection=selection,
            description=description,
        )

    def _target(self, plan: Plan, area_id: str, *kinds: type) -> Optional[Area]:
        area = plan.find_area(area_id)
        if area is None:
            logger.debug("Area %s not found", area_id)
            return None
        if kinds and not isinstance(area.shape, kinds):
            logger.debug("Area %s is a %s, expected %s", area_id, area.shape.type, [k.__name__ for k in kinds])
            return None
        return area

    def _clamp_rect(self, plan: Plan, rect: RectShape) -> RectShape:
        return constrain_rect_to_bounds(rect, plan.canvas, self.settings.min_size)

    def _clamp_ellipse(self, plan: Plan, ellipse: EllipseShape) -> EllipseShape:
        return rect_to_ellipse(self._clamp_rect(plan, ellipse_to_rect(ellipse)))

    def _snap(self, plan: Plan, rect: RectShape, step: Optional[float], area_id: str) -> RectShape:
        if step is None or not _finite(step) or step <= 0:
            return rect
        snapped = snap_rect(
            rect,
            step,
            neighbor_edges(plan, exclude=[area_id]),
            self.settings.snap_tolerance_ratio,
            self.settings.min_size,
        )
        return self._clamp_rect(plan, snapped)

    def _translate_polygonal(self, plan: Plan, shape, dx: float, dy: float, clamp: bool = True):
        delta = (dx, dy)
        if clamp and isinstance(shape, PolygonShape):
            points = shape.points + tuple(p for hole in shape.holes or () for p in hole)
            delta = clamp_delta_for_polygon(points, plan.canvas, delta)
        elif clamp and isinstance(shape, MultiPolygonShape):
            delta = clamp_delta_for_multipolygon(shape.polygons, plan.canvas, delta, shape.holes)
        return translate_shape(shape, delta)

    def _new_area(
        self,
        name: str,
        fill: str,
        stroke: str,
        shape,
        parent_id: Optional[str] = None,
        stroke_width: Optional[float] = None,
    ) -> Area:
        return Area(
            id=new_id(),
            name=name,
            fill=fill,
            stroke=stroke,
            stroke_width=self.settings.default_stroke_width if stroke_width is None else stroke_width,
            shape=shape,
            parent_id=parent_id,
        )

    # ------------------------------------------------------------------
    # plan

    def _create_plan(self, plan: Plan, c: cmd.CreatePlan) -> CommandResult:
        if not _finite(c.width, c.height) or c.width <= 0 or c.height <= 0:
            return self._noop(plan, "invalid plan size")
        floor = self.settings.min_canvas_size
        fresh = create_blank_plan(max(c.width, floor), max(c.height, floor), c.units, c.name or "New Plan")
        return CommandResult(plan=fresh, selection=EMPTY_SELECTION, description="Create plan")

    def _resize_boundary(self, plan: Plan, c: cmd.ResizePlanBoundary) -> CommandResult:
        floor = self.settings.min_canvas_size
        update = {}
        if c.width is not None and _finite(c.width):
            update["width"] = max(c.width, floor)
        if c.height is not None and _finite(c.height):
            update["height"] = max(c.height, floor)
        canvas = plan.canvas.model_copy(update=update)
        return self._commit(plan, plan.model_copy(update={"canvas": canvas}), "Resize plan")

    def _set_viewport(self, plan: Plan, c: cmd.SetViewport) -> CommandResult:
        update = {}
        if c.zoom is not None and _finite(c.zoom):
            update["zoom"] = max(self.settings.min_zoom, c.zoom)
        if c.pan is not None:
            update["pan"] = c.pan
        canvas = plan.canvas.model_copy(update=update)
        return self._commit(plan, plan.model_copy(update={"canvas": canvas}), "Viewport change")

    def _load_plan(self, plan: Plan, c: cmd.LoadPlan) -> CommandResult:
        return CommandResult(plan=c.plan, selection=EMPTY_SELECTION, description="Load plan")

    # ------------------------------------------------------------------
    # creation

    def _create_area(self, plan: Plan, c: cmd.CreateArea) -> CommandResult:
        if not _valid_rect(c.rect):
            return self._noop(plan, "invalid rect")
        partitions = max(1, c.partitions or 1)
        rect = self._clamp_rect(plan, c.rect)
        direction = c.direction or default_direction(rect.width, rect.height)
        base_name = c.name or default_area_name(plan)
        names = partition_names(base_name, partitions)
        created = [
            self._new_area(names[idx], c.fill or RECT_FILL, c.stroke or RECT_STROKE, part, parent_id=c.parent_id)
            for idx, part in enumerate(split_rect_evenly(rect, partitions, direction))
        ]
        selection = Selection(area_ids=tuple(a.id for a in created))
        return self._commit(plan, _with_areas(plan, created), "Create area", selection)

    def _create_polygon(self, plan: Plan, c: cmd.CreatePolygon) -> CommandResult:
        if len(c.points) < 3:
            return self._noop(plan, "polygon needs at least three points")
        shape = PolygonShape(points=c.points, holes=_valid_holes(c.holes))
        area = self._new_area(c.name or default_area_name(plan), c.fill or POLYGON_FILL, c.stroke or POLYGON_STROKE, shape)
        return self._commit(plan, _with_areas(plan, [area]), "Create polygon", Selection(area_ids=(area.id,)))

    def _create_ellipse(self, plan: Plan, c: cmd.CreateEllipse) -> CommandResult:
        if not _valid_ellipse(c.ellipse):
            return self._noop(plan, "invalid ellipse radii")
        shape = self._clamp_ellipse(plan, c.ellipse)
        area = self._new_area(c.name or default_area_name(plan), c.fill or ELLIPSE_FILL, c.stroke or ELLIPSE_STROKE, shape)
        return self._commit(plan, _with_areas(plan, [area]), "Create ellipse", Selection(area_ids=(area.id,)))

    def _paste_areas(self, plan: Plan, c: cmd.PasteAreas) -> CommandResult:
        if not _finite(c.dx, c.dy):
            return self._noop(plan, "invalid paste offset")
        created: List[Area] = []
        for source in c.areas:
            shape = translate_shape(source.shape, (c.dx, c.dy))
            if isinstance(shape, RectShape):
                shape = self._clamp_rect(plan, shape)
            elif isinstance(shape, EllipseShape):
                shape = self._clamp_ellipse(plan, shape)
            elif isinstance(shape, PolygonShape):
                if len(shape.points) < 3:
                    continue
                shape = shape.model_copy(update={"holes": _valid_holes(shape.holes)})
            elif isinstance(shape, MultiPolygonShape):
                if not shape.polygons or any(len(ring) < 3 for ring in shape.polygons):
                    continue
                shape = shape.model_copy(update={"holes": _valid_hole_lists(shape.holes, len(shape.polygons))})
            name = f"{source.name} {c.name_suffix}" if c.name_suffix else source.name
            created.append(
                self._new_area(name, source.fill, source.stroke, shape, stroke_width=source.stroke_width)
            )
        if not created:
            return self._noop(plan, "nothing to paste")
        selection = Selection(area_ids=tuple(a.id for a in created))
        return self._commit(plan, _with_areas(plan, created), "Paste areas", selection)

    # ------------------------------------------------------------------
    # geometry edits

    def _move_area(self, plan: Plan, c: cmd.MoveArea) -> CommandResult:
        area = self._target(plan, c.id, RectShape)
        if area is None or not _finite(c.dx, c.dy):
            return self._noop(plan, "move target unusable")
        rect = move_rect(area.shape, (c.dx, c.dy), plan.canvas)
        rect = self._snap(plan, rect, c.snap_step, area.id)
        next_plan = _replace_area(plan, area.model_copy(update={"shape": rect}))
        return self._commit(plan, next_plan, "Move area", Selection(area_ids=(area.id,)))

    def _resize_area(self, plan: Plan, c: cmd.ResizeArea) -> CommandResult:
        area = self._target(plan, c.id, RectShape)
        if area is None or not _finite(c.dx, c.dy):
            return self._noop(plan, "resize target unusable")
        rect = apply_rect_resize(area.shape, c.handle, (c.dx, c.dy), plan.canvas, self.settings.min_size)
        rect = self._snap(plan, rect, c.snap_step, area.id)
        next_plan = _replace_area(plan, area.model_copy(update={"shape": rect}))
        return self._commit(plan, next_plan, "Resize area", Selection(area_ids=(area.id,)))

    def _move_polygon(self, plan: Plan, c: cmd.MovePolygon) -> CommandResult:
        area = self._target(plan, c.id, PolygonShape, MultiPolygonShape)
        if area is None or not _finite(c.dx, c.dy):
            return self._noop(plan, "polygon move target unusable")
        shape = self._translate_polygonal(plan, area.shape, c.dx, c.dy, clamp=c.clamp)
        next_plan = _replace_area(plan, area.model_copy(update={"shape": shape}))
        return self._commit(plan, next_plan, "Move polygon", Selection(area_ids=(area.id,)))

    def _move_many(self, plan: Plan, c: cmd.MoveMany) -> CommandResult:
        if not _finite(c.dx, c.dy):
            return self._noop(plan, "invalid move offset")
        next_plan = plan
        moved: List[str] = []
        for area_id in c.ids:
            area = next_plan.find_area(area_id)
            if area is None:
                continue
            shape = area.shape
            if isinstance(shape, RectShape):
                shape = move_rect(shape, (c.dx, c.dy), plan.canvas)
            elif isinstance(shape, EllipseShape):
                shape = rect_to_ellipse(move_rect(ellipse_to_rect(shape), (c.dx, c.dy), plan.canvas))
            else:
                shape = self._translate_polygonal(plan, shape, c.dx, c.dy)
            next_plan = _replace_area(next_plan, area.model_copy(update={"shape": shape}))
            moved.append(area_id)
        return self._commit(plan, next_plan, "Move areas", Selection(area_ids=tuple(moved)))

    def _set_rect(self, plan: Plan, c: cmd.SetRect) -> CommandResult:
        area = self._target(plan, c.id, RectShape)
        if area is None or not _valid_rect(c.rect):
            return self._noop(plan, "rect update unusable")
        next_plan = _replace_area(plan, area.model_copy(update={"shape": self._clamp_rect(plan, c.rect)}))
        return self._commit(plan, next_plan, "Update area", Selection(area_ids=(area.id,)))

    def _set_rect_batch(self, plan: Plan, c: cmd.SetRectBatch) -> CommandResult:
        next_plan = plan
        applied: List[str] = []
        for update in c.updates:
            area = self._target(next_plan, update.id, RectShape)
            if area is None or not _valid_rect(update.rect):
                continue
            rect = self._clamp_rect(plan, update.rect)
            next_plan = _replace_area(next_plan, area.model_copy(update={"shape": rect}))
            applied.append(update.id)
        return self._commit(plan, next_plan, "Update areas", Selection(area_ids=tuple(applied)))

    def _set_polygon(self, plan: Plan, c: cmd.SetPolygon) -> CommandResult:
        area = self._target(plan, c.id, PolygonShape)
        if area is None or len(c.points) < 3:
            return self._noop(plan, "polygon update unusable")
        shape = area.shape.model_copy(update={"points": c.points, "holes": _valid_holes(c.holes)})
        next_plan = _replace_area(plan, area.model_copy(update={"shape": shape}))
        return self._commit(plan, next_plan, "Edit polygon", Selection(area_ids=(area.id,)))

    def _set_multipolygon(self, plan: Plan, c: cmd.SetMultiPolygon) -> CommandResult:
        area = self._target(plan, c.id, MultiPolygonShape)
        if area is None or not c.polygons or any(len(ring) < 3 for ring in c.polygons):
            return self._noop(plan, "multipolygon update unusable")
        holes = _valid_hole_lists(c.holes, len(c.polygons))
        shape = area.shape.model_copy(update={"polygons": c.polygons, "holes": holes})
        next_plan = _replace_area(plan, area.model_copy(update={"shape": shape}))
        return self._commit(plan, next_plan, "Edit multipolygon", Selection(area_ids=(area.id,)))

    def _set_ellipse(self, plan: Plan, c: cmd.SetEllipse) -> CommandResult:
        area = self._target(plan, c.id, EllipseShape)
        if area is None or not _valid_ellipse(c.ellipse):
            return self._noop(plan, "ellipse update unusable")
        next_plan = _replace_area(plan, area.model_copy(update={"shape": self._clamp_ellipse(plan, c.ellipse)}))
        return self._commit(plan, next_plan, "Edit ellipse", Selection(area_ids=(area.id,)))

    def _mirror_area(self, plan: Plan, c: cmd.MirrorArea) -> CommandResult:
        area = self._target(plan, c.id)
        if area is None:
            return self._noop(plan, "mirror target missing")
        next_plan = _replace_area(plan, area.model_copy(update={"shape": mirror_shape(area.shape, c.axis)}))
        return self._commit(plan, next_plan, "Mirror area", Selection(area_ids=(area.id,)))

    # ------------------------------------------------------------------
    # attributes and lifecycle

    def _rename_area(self, plan: Plan, c: cmd.RenameArea) -> CommandResult:
        area = self._target(plan, c.id)
        if area is None:
            return self._noop(plan, "rename target missing")
        next_plan = _replace_area(plan, area.model_copy(update={"name": c.name}))
        return self._commit(plan, next_plan, "Rename area", Selection(area_ids=(area.id,)))

    def _recolor_area(self, plan: Plan, c: cmd.RecolorArea) -> CommandResult:
        area = self._target(plan, c.id)
        if area is None:
            return self._noop(plan, "recolor target missing")
        update = {"fill": c.fill}
        if c.stroke is not None:
            update["stroke"] = c.stroke
        next_plan = _replace_area(plan, area.model_copy(update=update))
        return self._commit(plan, next_plan, "Recolor area", Selection(area_ids=(area.id,)))

    def _delete_area(self, plan: Plan, c: cmd.DeleteArea) -> CommandResult:
        return self._commit(plan, _without(plan, [c.id]), "Delete area", EMPTY_SELECTION)

    def _divide_area(self, plan: Plan, c: cmd.DivideArea) -> CommandResult:
        area = self._target(plan, c.id)
        if area is None:
            return self._noop(plan, "divide target missing")
        partitions = max(2, c.partitions)
        names = partition_names(area.name, partitions)
        if isinstance(area.shape, RectShape):
            direction = c.direction or default_direction(area.shape.width, area.shape.height)
            shapes = split_rect_evenly(area.shape, partitions, direction)
        else:
            box = shape_bounding_box(area.shape)
            direction = c.direction or "horizontal"
            shapes = [PolygonShape(points=rect_corners(r)) for r in split_rect_evenly(box.to_rect(), partitions, direction)]
        created = [
            self._new_area(names[idx], area.fill, area.stroke, shape, parent_id=area.id, stroke_width=area.stroke_width)
            for idx, shape in enumerate(shapes)
        ]
        next_plan = _with_areas(_without(plan, [area.id]), created)
        return self._commit(plan, next_plan, "Divide area", Selection(area_ids=tuple(a.id for a in created)))

    def _collect(self, plan: Plan, ids: Sequence[str]) -> List[Area]:
        seen = set()
        found: List[Area] = []
        for area_id in ids:
            if area_id in seen:
                continue
            seen.add(area_id)
            area = plan.find_area(area_id)
            if area is not None:
                found.append(area)
        return found

    def _merge_areas(self, plan: Plan, c: cmd.MergeAreas) -> CommandResult:
        targets = self._collect(plan, c.ids)
        if len(targets) < 2:
            return self._noop(plan, "merge needs two existing areas")
        shape = boolean2d.merge_shapes([t.shape for t in targets], self.operations)
        if shape is None:
            return self._noop(plan, "merge produced no polygon")
        first = targets[0]
        merged = self._new_area(
            c.name or default_area_name(plan),
            c.fill or first.fill,
            c.stroke or first.stroke,
            shape,
            stroke_width=first.stroke_width,
        )
        next_plan = _with_areas(_without(plan, [t.id for t in targets]), [merged])
        return self._commit(plan, next_plan, "Merge areas", Selection(area_ids=(merged.id,)))

    def _subtract_areas(self, plan: Plan, c: cmd.SubtractAreas) -> CommandResult:
        targets = self._collect(plan, c.ids)
        if len(targets) < 2:
            return self._noop(plan, "subtract needs two existing areas")
        # max() keeps the first of equally large candidates
        subject = max(targets, key=lambda a: shape_area(a.shape))
        cutters = [t.shape for t in targets if t.id != subject.id]
        shape = boolean2d.subtract_shapes(subject.shape, cutters, self.operations)
        if shape is None:
            next_plan = _without(plan, [t.id for t in targets])
            return self._commit(plan, next_plan, "Subtract areas", EMPTY_SELECTION)
        next_plan = _replace_area(plan, subject.model_copy(update={"shape": shape}))
        next_plan = _without(next_plan, [t.id for t in targets if t.id != subject.id])
        return self._commit(plan, next_plan, "Subtract areas", Selection(area_ids=(subject.id,)))

    def _convert_to_polygon(self, plan: Plan, c: cmd.ConvertToPolygon) -> CommandResult:
        targets = self._collect(plan, c.ids)
        if not targets:
            return self._noop(plan, "nothing to convert")
        outlines: List[Ring] = []
        holes: List[tuple] = []
        for target in targets:
            rings, ring_holes = boolean2d.shape_outline(target.shape, self.settings.ellipse_segments)
            outlines.extend(rings)
            holes.extend(ring_holes)
        if len(outlines) == 1:
            shape = PolygonShape(points=outlines[0], holes=holes[0] or None)
        else:
            shape = MultiPolygonShape(polygons=tuple(outlines), holes=tuple(holes) if any(holes) else None)
        first = targets[0]
        converted = self._new_area(
            c.name or default_area_name(plan),
            c.fill or first.fill,
            c.stroke or first.stroke,
            shape,
            stroke_width=first.stroke_width,
        )
        next_plan = _with_areas(_without(plan, [t.id for t in targets]), [converted])
        return self._commit(plan, next_plan, "Convert to polygon", Selection(area_ids=(converted.id,)))

    # ------------------------------------------------------------------
    # groups and selection

    def _create_group(self, plan: Plan, c: cmd.CreateGroup) -> CommandResult:
        return self._commit(plan, add_group(plan, c.name, c.area_ids), "Create group", Selection(area_ids=c.area_ids))

    def _delete_group(self, plan: Plan, c: cmd.DeleteGroup) -> CommandResult:
        return self._commit(plan, delete_group(plan, c.id), "Delete group")

    def _set_group_visibility(self, plan: Plan, c: cmd.SetGroupVisibility) -> CommandResult:
        return self._commit(plan, set_group_visibility(plan, c.id, c.visible), "Toggle group visibility")

    def _set_group_locked(self, plan: Plan, c: cmd.SetGroupLocked) -> CommandResult:
        return self._commit(plan, set_group_locked(plan, c.id, c.locked), "Toggle group lock")

    def _set_selection(self, plan: Plan, c: cmd.SetSelection) -> CommandResult:
        return CommandResult(plan=plan, selection=Selection(area_ids=c.area_ids), description="Select")


def perform_command(plan: Plan, command, settings: Optional[CoreSettings] = None) -> CommandResult:
    """Apply ``command`` to ``plan`` with a default interpreter."""

    return CommandInterpreter(settings).apply(plan, command)


__all__ = ["CommandResult", "CommandInterpreter", "perform_command", "neighbor_edges"]
