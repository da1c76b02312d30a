"""Render-boundary helpers: resolved shapes and selection state per area.

Nothing here knows about pixels; renderers map plan units to the screen.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional

from .geometry import BoundingBox, shape_area, shape_bounding_box
from .models import Area, Plan, Selection


@dataclass(frozen=True)
class AreaView:
    area: Area
    shape: object
    bbox: BoundingBox
    net_area: float
    selected: bool
    is_draft: bool


def resolve_shape(area: Area, drafts: Optional[Mapping[str, object]] = None):
    """The caller-supplied draft for ``area`` if any, else its committed shape."""

    if drafts and area.id in drafts:
        return drafts[area.id]
    return area.shape


def build_view(
    plan: Plan,
    selection: Optional[Selection] = None,
    drafts: Optional[Mapping[str, object]] = None,
) -> List[AreaView]:
    selected = set(selection.area_ids) if selection else set()
    views: List[AreaView] = []
    for area in plan.areas:
        shape = resolve_shape(area, drafts)
        views.append(
            AreaView(
                area=area,
                shape=shape,
                bbox=shape_bounding_box(shape),
                net_area=shape_area(shape),
                selected=area.id in selected,
                is_draft=shape is not area.shape,
            )
        )
    return views


__all__ = ["AreaView", "resolve_shape", "build_view"]
