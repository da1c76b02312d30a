from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import make_area, with_areas
from floorplan_core import commands as cmd
from floorplan_core.geometry import shape_area, shape_bounding_box
from floorplan_core.interpreter import CommandInterpreter, neighbor_edges, perform_command
from floorplan_core.models import (
    EllipseShape,
    MultiPolygonShape,
    Pan,
    PolygonShape,
    RectShape,
)
from floorplan_core.plan_factory import ELLIPSE_FILL, RECT_FILL


def rect_of(plan, area_id):
    shape = plan.find_area(area_id).shape
    return (shape.x, shape.y, shape.width, shape.height)


# plan ---------------------------------------------------------------------


def test_create_plan_starts_fresh(interpreter, two_room_plan) -> None:
    result = interpreter.apply(two_room_plan, cmd.CreatePlan(width=20, height=0.1, units="ft", name="Shed"))
    assert result.plan.areas == ()
    assert result.plan.canvas.width == 20.0
    assert result.plan.canvas.height == 0.5
    assert result.plan.units == "ft"
    assert result.plan.meta.name == "Shed"
    assert result.selection.area_ids == ()
    assert result.description == "Create plan"


def test_create_plan_rejects_non_positive_size(interpreter, two_room_plan) -> None:
    assert interpreter.apply(two_room_plan, cmd.CreatePlan(width=0, height=5)).plan is two_room_plan
    assert interpreter.apply(two_room_plan, cmd.CreatePlan(width=float("nan"), height=5)).plan is two_room_plan


def test_resize_boundary_floors_size(interpreter, blank_plan) -> None:
    result = interpreter.apply(blank_plan, cmd.ResizePlanBoundary(width=0.2))
    assert result.plan.canvas.width == 0.5
    assert result.plan.canvas.height == 10.0
    assert result.description == "Resize plan"


def test_set_viewport_floors_zoom(interpreter, blank_plan) -> None:
    result = interpreter.apply(blank_plan, cmd.SetViewport(zoom=0.01, pan=Pan(x=3, y=4)))
    assert result.plan.canvas.zoom == 0.1
    assert result.plan.canvas.pan == Pan(x=3, y=4)


def test_set_viewport_without_change_is_noop(interpreter, blank_plan) -> None:
    assert interpreter.apply(blank_plan, cmd.SetViewport(zoom=1.0)).plan is blank_plan


# creation -----------------------------------------------------------------


def test_create_area_with_partitions(interpreter, blank_plan) -> None:
    result = interpreter.apply(blank_plan, cmd.CreateArea(rect=RectShape(x=1, y=1, width=4, height=2), partitions=2))
    areas = result.plan.areas
    assert [a.name for a in areas] == ["Area 1 A", "Area 1 B"]
    assert [(a.shape.x, a.shape.width) for a in areas] == [(1.0, 2.0), (3.0, 2.0)]
    assert all(a.fill == RECT_FILL for a in areas)
    assert result.selection.area_ids == tuple(a.id for a in areas)
    assert result.plan.meta.updated_at >= blank_plan.meta.updated_at
    assert result.description == "Create area"


def test_create_area_names_continue_numbering(interpreter, two_room_plan) -> None:
    result = interpreter.apply(two_room_plan, cmd.CreateArea(rect=RectShape(x=1, y=6, width=1, height=1)))
    assert result.plan.areas[-1].name == "Area 3"


def test_create_area_clamps_to_canvas(interpreter, blank_plan) -> None:
    result = interpreter.apply(blank_plan, cmd.CreateArea(rect=RectShape(x=8, y=-2, width=5, height=3)))
    shape = result.plan.areas[0].shape
    assert (shape.x, shape.y, shape.width, shape.height) == (8.0, 0.0, 2.0, 3.0)


def test_create_area_rejects_degenerate_rect(interpreter, blank_plan) -> None:
    result = interpreter.apply(blank_plan, cmd.CreateArea(rect=RectShape(x=1, y=1, width=0, height=2)))
    assert result.plan is blank_plan


def test_create_polygon(interpreter, blank_plan) -> None:
    ok = interpreter.apply(blank_plan, cmd.CreatePolygon(points=((0, 0), (2, 0), (1, 2)), name="Nook"))
    assert ok.plan.areas[0].name == "Nook"
    assert isinstance(ok.plan.areas[0].shape, PolygonShape)
    too_few = interpreter.apply(blank_plan, cmd.CreatePolygon(points=((0, 0), (2, 0))))
    assert too_few.plan is blank_plan


def test_create_ellipse_is_kept_on_canvas(interpreter, blank_plan) -> None:
    result = interpreter.apply(blank_plan, cmd.CreateEllipse(ellipse=EllipseShape(cx=9.5, cy=5, rx=1, ry=1)))
    area = result.plan.areas[0]
    assert area.fill == ELLIPSE_FILL
    box = shape_bounding_box(area.shape)
    assert box.x >= 0 and box.max_x <= 10.0
    assert interpreter.apply(blank_plan, cmd.CreateEllipse(ellipse=EllipseShape(cx=1, cy=1, rx=0, ry=1))).plan is blank_plan


def test_paste_areas_copies_with_offset(interpreter, two_room_plan) -> None:
    source = two_room_plan.find_area("a")
    result = interpreter.apply(two_room_plan, cmd.PasteAreas(areas=(source,), dx=1, dy=1, name_suffix="copy"))
    pasted = result.plan.areas[-1]
    assert pasted.id != "a"
    assert pasted.name == "Area 1 copy"
    assert (pasted.shape.x, pasted.shape.y) == (1.0, 1.0)
    assert result.selection.area_ids == (pasted.id,)


# geometry edits -------------------------------------------------------------


def test_move_area_clamps(interpreter, two_room_plan) -> None:
    result = interpreter.apply(two_room_plan, cmd.MoveArea(id="a", dx=20, dy=-3))
    assert rect_of(result.plan, "a") == (6.0, 0.0, 4.0, 2.0)
    assert result.selection.area_ids == ("a",)
    assert result.description == "Move area"


def test_zero_move_is_noop(interpreter, two_room_plan) -> None:
    assert interpreter.apply(two_room_plan, cmd.MoveArea(id="a", dx=0, dy=0)).plan is two_room_plan


def test_move_area_snaps_to_neighbor_edge(interpreter, blank_plan) -> None:
    plan = with_areas(
        blank_plan,
        make_area("a", RectShape(x=0, y=0, width=4, height=2)),
        make_area("b", RectShape(x=5.1, y=0, width=2, height=2)),
    )
    result = interpreter.apply(plan, cmd.MoveArea(id="a", dx=1.0, dy=0.0, snap_step=0.25))
    x, _, width, _ = rect_of(result.plan, "a")
    assert x == 1.0
    assert x + width == pytest.approx(5.1)


def test_neighbor_edges_skip_excluded_and_non_rects(two_room_plan) -> None:
    plan = with_areas(two_room_plan, make_area("e", EllipseShape(cx=1, cy=8, rx=1, ry=1)))
    assert neighbor_edges(plan, exclude=["a"]) == [5.0, 7.0, 5.0, 7.0]


def test_resize_area(interpreter, two_room_plan) -> None:
    result = interpreter.apply(two_room_plan, cmd.ResizeArea(id="b", handle="se", dx=10, dy=1))
    assert rect_of(result.plan, "b") == (5.0, 5.0, 5.0, 3.0)


def test_move_on_wrong_variant_is_noop(interpreter, blank_plan) -> None:
    plan = with_areas(blank_plan, make_area("p", PolygonShape(points=((1, 1), (3, 1), (3, 3)))))
    assert interpreter.apply(plan, cmd.MoveArea(id="p", dx=1, dy=1)).plan is plan
    assert interpreter.apply(plan, cmd.ResizeArea(id="p", handle="e", dx=1, dy=0)).plan is plan
    assert interpreter.apply(plan, cmd.SetRect(id="p", rect=RectShape(x=0, y=0, width=1, height=1))).plan is plan


def test_move_polygon_clamps_unless_disabled(interpreter, blank_plan) -> None:
    plan = with_areas(blank_plan, make_area("p", PolygonShape(points=((1, 1), (3, 1), (3, 3)))))
    clamped = interpreter.apply(plan, cmd.MovePolygon(id="p", dx=-5, dy=0))
    assert clamped.plan.find_area("p").shape.points == ((0.0, 1.0), (2.0, 1.0), (2.0, 3.0))
    free = interpreter.apply(plan, cmd.MovePolygon(id="p", dx=-5, dy=0, clamp=False))
    assert free.plan.find_area("p").shape.points[0] == (-4.0, 1.0)


def test_move_many(interpreter, two_room_plan) -> None:
    result = interpreter.apply(two_room_plan, cmd.MoveMany(ids=("a", "b", "missing"), dx=10, dy=0))
    assert rect_of(result.plan, "a")[0] == 6.0
    assert rect_of(result.plan, "b")[0] == 8.0
    assert result.selection.area_ids == ("a", "b")


def test_set_rect_batch_skips_unusable_updates(interpreter, two_room_plan) -> None:
    updates = (
        cmd.RectUpdate(id="a", rect=RectShape(x=1, y=1, width=1, height=1)),
        cmd.RectUpdate(id="missing", rect=RectShape(x=1, y=1, width=1, height=1)),
        cmd.RectUpdate(id="b", rect=RectShape(x=1, y=1, width=-1, height=1)),
    )
    result = interpreter.apply(two_room_plan, cmd.SetRectBatch(updates=updates))
    assert rect_of(result.plan, "a") == (1.0, 1.0, 1.0, 1.0)
    assert rect_of(result.plan, "b") == (5.0, 5.0, 2.0, 2.0)
    assert result.selection.area_ids == ("a",)


def test_set_polygon_and_multipolygon(interpreter, blank_plan) -> None:
    plan = with_areas(
        blank_plan,
        make_area("p", PolygonShape(points=((1, 1), (3, 1), (3, 3)))),
        make_area("m", MultiPolygonShape(polygons=(((0, 0), (1, 0), (1, 1)), ((5, 5), (6, 5), (6, 6))))),
    )
    edited = interpreter.apply(plan, cmd.SetPolygon(id="p", points=((0, 0), (4, 0), (4, 4), (0, 4))))
    assert len(edited.plan.find_area("p").shape.points) == 4
    assert interpreter.apply(plan, cmd.SetPolygon(id="m", points=((0, 0), (4, 0), (4, 4)))).plan is plan
    multi = interpreter.apply(plan, cmd.SetMultiPolygon(id="m", polygons=(((0, 0), (2, 0), (2, 2)),)))
    assert len(multi.plan.find_area("m").shape.polygons) == 1
    assert interpreter.apply(plan, cmd.SetMultiPolygon(id="m", polygons=(((0, 0), (2, 0)),))).plan is plan


def test_set_ellipse(interpreter, blank_plan) -> None:
    plan = with_areas(blank_plan, make_area("e", EllipseShape(cx=5, cy=5, rx=1, ry=1)))
    result = interpreter.apply(plan, cmd.SetEllipse(id="e", ellipse=EllipseShape(cx=2, cy=2, rx=1, ry=0.5)))
    assert result.plan.find_area("e").shape == EllipseShape(cx=2, cy=2, rx=1, ry=0.5)
    assert result.description == "Edit ellipse"


def test_mirror_area(interpreter, blank_plan) -> None:
    plan = with_areas(
        blank_plan,
        make_area("p", PolygonShape(points=((0, 0), (2, 0), (0, 1)))),
        make_area("r", RectShape(x=1, y=1, width=1, height=1)),
    )
    result = interpreter.apply(plan, cmd.MirrorArea(id="p", axis="vertical"))
    assert result.plan.find_area("p").shape.points == ((2.0, 0.0), (0.0, 0.0), (2.0, 1.0))
    assert interpreter.apply(plan, cmd.MirrorArea(id="r", axis="horizontal")).plan is plan


# attributes and lifecycle -----------------------------------------------------


def test_rename_and_recolor(interpreter, two_room_plan) -> None:
    renamed = interpreter.apply(two_room_plan, cmd.RenameArea(id="a", name="Kitchen"))
    assert renamed.plan.find_area("a").name == "Kitchen"
    assert renamed.plan is not two_room_plan
    recolored = interpreter.apply(renamed.plan, cmd.RecolorArea(id="a", fill="#000000"))
    area = recolored.plan.find_area("a")
    assert (area.fill, area.stroke) == ("#000000", "#000000")
    assert recolored.description == "Recolor area"


def test_rename_missing_area_is_noop(interpreter, two_room_plan) -> None:
    assert interpreter.apply(two_room_plan, cmd.RenameArea(id="zzz", name="x")).plan is two_room_plan


def test_delete_area(interpreter, two_room_plan) -> None:
    result = interpreter.apply(two_room_plan, cmd.DeleteArea(id="a"))
    assert [a.id for a in result.plan.areas] == ["b"]
    assert result.selection.area_ids == ()
    missing = interpreter.apply(two_room_plan, cmd.DeleteArea(id="zzz"))
    assert missing.plan is two_room_plan
    assert missing.selection.area_ids == ()


def test_delete_area_keeps_group_reference(interpreter, two_room_plan) -> None:
    grouped = interpreter.apply(two_room_plan, cmd.CreateGroup(name="Wing", area_ids=("a", "b"))).plan
    result = interpreter.apply(grouped, cmd.DeleteArea(id="a"))
    assert result.plan.area_groups[0].area_ids == ("a", "b")


def test_divide_rect(interpreter, two_room_plan) -> None:
    result = interpreter.apply(two_room_plan, cmd.DivideArea(id="a", partitions=2))
    assert result.plan.find_area("a") is None
    parts = [a for a in result.plan.areas if a.parent_id == "a"]
    assert [a.name for a in parts] == ["Area 1 A", "Area 1 B"]
    assert [(a.shape.x, a.shape.y, a.shape.width, a.shape.height) for a in parts] == [
        (0.0, 0.0, 2.0, 2.0),
        (2.0, 0.0, 2.0, 2.0),
    ]
    assert result.selection.area_ids == tuple(a.id for a in parts)


def test_divide_forces_at_least_two_parts(interpreter, two_room_plan) -> None:
    result = interpreter.apply(two_room_plan, cmd.DivideArea(id="b", partitions=1, direction="horizontal"))
    parts = [a for a in result.plan.areas if a.parent_id == "b"]
    assert len(parts) == 2
    assert all(a.shape.height == 1.0 for a in parts)


def test_divide_polygon_slices_its_bounding_box(interpreter, blank_plan) -> None:
    plan = with_areas(blank_plan, make_area("p", PolygonShape(points=((0, 0), (4, 0), (4, 2))), "Hall"))
    result = interpreter.apply(plan, cmd.DivideArea(id="p", partitions=2))
    parts = result.plan.areas
    assert [a.name for a in parts] == ["Hall A", "Hall B"]
    assert all(isinstance(a.shape, PolygonShape) for a in parts)
    assert sum(shape_area(a.shape) for a in parts) == pytest.approx(8.0)


def test_merge_touching_rects(interpreter, blank_plan) -> None:
    plan = with_areas(
        blank_plan,
        make_area("a", RectShape(x=0, y=0, width=1, height=1), "Area 1"),
        make_area("b", RectShape(x=1, y=0, width=1, height=1), "Area 2"),
    )
    result = interpreter.apply(plan, cmd.MergeAreas(ids=("a", "b")))
    assert len(result.plan.areas) == 1
    merged = result.plan.areas[0]
    assert isinstance(merged.shape, PolygonShape)
    assert shape_area(merged.shape) == pytest.approx(2.0)
    assert merged.name == "Area 3"
    assert merged.fill == "#ffffff"
    assert result.selection.area_ids == (merged.id,)


def test_merge_disjoint_rects_keeps_components(interpreter, two_room_plan) -> None:
    result = interpreter.apply(two_room_plan, cmd.MergeAreas(ids=("a", "b"), name="Wing"))
    merged = result.plan.areas[0]
    assert merged.name == "Wing"
    assert isinstance(merged.shape, MultiPolygonShape)
    assert shape_area(merged.shape) == pytest.approx(12.0)


def test_merge_needs_two_existing_areas(interpreter, two_room_plan) -> None:
    assert interpreter.apply(two_room_plan, cmd.MergeAreas(ids=("a",))).plan is two_room_plan
    assert interpreter.apply(two_room_plan, cmd.MergeAreas(ids=("a", "a"))).plan is two_room_plan
    assert interpreter.apply(two_room_plan, cmd.MergeAreas(ids=("a", "missing"))).plan is two_room_plan


def test_subtract_uses_largest_area_as_subject(interpreter, blank_plan) -> None:
    plan = with_areas(
        blank_plan,
        make_area("small", RectShape(x=1, y=1, width=2, height=2)),
        make_area("big", RectShape(x=0, y=0, width=4, height=4)),
    )
    result = interpreter.apply(plan, cmd.SubtractAreas(ids=("small", "big")))
    assert [a.id for a in result.plan.areas] == ["big"]
    shape = result.plan.find_area("big").shape
    assert isinstance(shape, PolygonShape)
    assert len(shape.holes) == 1
    assert shape_area(shape) == pytest.approx(12.0)
    assert result.selection.area_ids == ("big",)


def test_subtract_to_nothing_removes_targets(interpreter, blank_plan) -> None:
    plan = with_areas(
        blank_plan,
        make_area("a", RectShape(x=1, y=1, width=2, height=2)),
        make_area("b", RectShape(x=1, y=1, width=2, height=2)),
        make_area("c", RectShape(x=5, y=5, width=1, height=1)),
    )
    result = interpreter.apply(plan, cmd.SubtractAreas(ids=("a", "b")))
    assert [a.id for a in result.plan.areas] == ["c"]
    assert result.selection.area_ids == ()


def test_convert_to_polygon(interpreter, two_room_plan) -> None:
    single = interpreter.apply(two_room_plan, cmd.ConvertToPolygon(ids=("a",), name="Poly"))
    converted = single.plan.areas[-1]
    assert converted.name == "Poly"
    assert converted.shape.points == ((0.0, 0.0), (4.0, 0.0), (4.0, 2.0), (0.0, 2.0))
    both = interpreter.apply(two_room_plan, cmd.ConvertToPolygon(ids=("a", "b")))
    assert isinstance(both.plan.areas[0].shape, MultiPolygonShape)
    assert interpreter.apply(two_room_plan, cmd.ConvertToPolygon(ids=("zzz",))).plan is two_room_plan


# groups and selection ---------------------------------------------------------


def test_group_lifecycle(interpreter, two_room_plan) -> None:
    created = interpreter.apply(two_room_plan, cmd.CreateGroup(name="Wing", area_ids=("a",)))
    group = created.plan.area_groups[0]
    assert (group.name, group.area_ids, group.visible, group.locked) == ("Wing", ("a",), True, False)
    hidden = interpreter.apply(created.plan, cmd.SetGroupVisibility(id=group.id, visible=False))
    assert hidden.plan.area_groups[0].visible is False
    locked = interpreter.apply(hidden.plan, cmd.SetGroupLocked(id=group.id, locked=True))
    assert locked.plan.area_groups[0].locked is True
    deleted = interpreter.apply(locked.plan, cmd.DeleteGroup(id=group.id))
    assert deleted.plan.area_groups == ()


def test_group_edits_on_missing_group_are_noops(interpreter, two_room_plan) -> None:
    assert interpreter.apply(two_room_plan, cmd.DeleteGroup(id="nope")).plan is two_room_plan
    assert interpreter.apply(two_room_plan, cmd.SetGroupVisibility(id="nope", visible=False)).plan is two_room_plan


def test_set_selection_leaves_plan_untouched(interpreter, two_room_plan) -> None:
    result = interpreter.apply(two_room_plan, cmd.SetSelection(area_ids=("a", "b")))
    assert result.plan is two_room_plan
    assert result.selection.area_ids == ("a", "b")


def test_unknown_command_is_noop(interpreter, two_room_plan) -> None:
    assert interpreter.apply(two_room_plan, object()).plan is two_room_plan


# parsing ------------------------------------------------------------------------


def test_parse_command_reads_camel_case() -> None:
    command = cmd.parse_command({"type": "area/create", "rect": {"x": 1, "y": 1, "width": 2, "height": 2}, "parentId": "p"})
    assert isinstance(command, cmd.CreateArea)
    assert command.parent_id == "p"
    assert command.payload["parentId"] == "p"
    assert "type" not in command.payload


def test_parse_command_unknown_and_malformed() -> None:
    assert cmd.parse_command({"type": "area/teleport"}) is None
    with pytest.raises(ValidationError):
        cmd.parse_command({"type": "area/move", "id": "a"})


def test_command_types_cover_every_kind() -> None:
    assert len(cmd.COMMAND_TYPES) == 30
    assert "group/lock" in cmd.COMMAND_TYPES


def test_perform_command_uses_default_interpreter(two_room_plan) -> None:
    result = perform_command(two_room_plan, cmd.RenameArea(id="b", name="Bath"))
    assert result.plan.find_area("b").name == "Bath"


def test_interpreter_accepts_custom_operations(two_room_plan) -> None:
    calls = []

    class Recording:
        def union(self, *inputs):
            calls.append(len(inputs))
            return [inputs[0][0]]

        def difference(self, subject, *clips):
            return subject

        def intersection(self, *inputs):
            return []

    interpreter = CommandInterpreter(operations=Recording())
    result = interpreter.apply(two_room_plan, cmd.MergeAreas(ids=("a", "b")))
    assert calls == [2]
    assert shape_area(result.plan.areas[0].shape) == pytest.approx(8.0)


def test_subtract_equal_areas_keeps_first_listed_as_subject(interpreter, blank_plan) -> None:
    plan = with_areas(
        blank_plan,
        make_area("a", RectShape(x=0, y=0, width=2, height=2)),
        make_area("b", RectShape(x=1, y=1, width=2, height=2)),
    )
    result = interpreter.apply(plan, cmd.SubtractAreas(ids=("b", "a")))
    assert [a.id for a in result.plan.areas] == ["b"]
    shape = result.plan.find_area("b").shape
    assert isinstance(shape, PolygonShape)
    assert shape_area(shape) == pytest.approx(3.0)
    assert shape_bounding_box(shape) == shape_bounding_box(RectShape(x=1, y=1, width=2, height=2))
    assert result.selection.area_ids == ("b",)


def test_set_multipolygon_normalises_hole_lists(interpreter, blank_plan) -> None:
    tri = ((0.0, 0.0), (4.0, 0.0), (4.0, 4.0))
    hole = ((2.5, 0.5), (3.5, 0.5), (3.5, 1.5))
    plan = with_areas(blank_plan, make_area("m", MultiPolygonShape(polygons=(tri, ((5, 5), (6, 5), (6, 6))))))

    stray = interpreter.apply(plan, cmd.SetMultiPolygon(id="m", polygons=(tri,), holes=((((0.5, 0.5),),), (), ())))
    assert stray.plan.find_area("m").shape.holes is None

    kept = interpreter.apply(plan, cmd.SetMultiPolygon(id="m", polygons=(tri, tri), holes=((((0.5, 0.5),), hole),)))
    assert kept.plan.find_area("m").shape.holes == ((hole,), ())


def test_paste_filters_degenerate_holes(interpreter, blank_plan) -> None:
    hole = ((1.0, 1.0), (2.0, 1.0), (2.0, 2.0))
    sources = (
        make_area("p", PolygonShape(points=((0, 0), (4, 0), (4, 4)), holes=(((0.5, 0.5),), hole))),
        make_area(
            "m",
            MultiPolygonShape(polygons=(((0, 0), (4, 0), (4, 4)),), holes=((((0.5, 0.5),),), (hole,))),
        ),
    )
    result = interpreter.apply(blank_plan, cmd.PasteAreas(areas=sources))
    polygon, multi = result.plan.areas
    assert polygon.shape.holes == (hole,)
    assert multi.shape.holes is None


def test_zero_move_of_off_canvas_polygon_is_noop(interpreter, blank_plan) -> None:
    plan = with_areas(blank_plan, make_area("p", PolygonShape(points=((-5, 1), (-1, 1), (-1, 3)))))
    assert interpreter.apply(plan, cmd.MovePolygon(id="p", dx=0, dy=0)).plan is plan
    back = interpreter.apply(plan, cmd.MovePolygon(id="p", dx=2, dy=0))
    assert back.plan.find_area("p").shape.points[0] == (-3.0, 1.0)


def test_divide_polygon_defaults_to_horizontal(interpreter, blank_plan) -> None:
    plan = with_areas(blank_plan, make_area("p", PolygonShape(points=((0, 0), (4, 0), (4, 2)))))
    parts = interpreter.apply(plan, cmd.DivideArea(id="p", partitions=2)).plan.areas
    boxes = [shape_bounding_box(a.shape) for a in parts]
    assert [(b.x, b.y, b.width, b.height) for b in boxes] == [(0.0, 0.0, 4.0, 1.0), (0.0, 1.0, 4.0, 1.0)]
