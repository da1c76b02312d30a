"""Blank and demo plan construction."""
from __future__ import annotations

from .config import CoreSettings
from .models import Area, Canvas, Plan, PlanMeta, RectShape, Units, utc_now
from .naming import default_area_name, new_id

RECT_FILL = "#bfdbfe"
RECT_STROKE = "#1d4ed8"
POLYGON_FILL = "#d8b4fe"
POLYGON_STROKE = "#6b21a8"
ELLIPSE_FILL = "#bbf7d0"
ELLIPSE_STROKE = "#15803d"


def create_blank_plan(width: float, height: float, units: Units = "m", name: str = "New Plan") -> Plan:
    now = utc_now()
    return Plan(
        units=units,
        canvas=Canvas(width=width, height=height),
        meta=PlanMeta(name=name, created_at=now, updated_at=now),
    )


def seed_plan() -> Plan:
    """A 12 x 9 m demo floor with two rooms."""

    plan = create_blank_plan(12.0, 9.0, "m", "Demo Floor")
    base_name = default_area_name(plan)
    stroke_width = CoreSettings.default_stroke_width
    areas = (
        Area(
            id=new_id(),
            name=base_name,
            fill=RECT_FILL,
            stroke=RECT_STROKE,
            stroke_width=stroke_width,
            shape=RectShape(x=1.0, y=1.0, width=4.0, height=3.0),
        ),
        Area(
            id=new_id(),
            name=f"{base_name} B",
            fill="#fecdd3",
            stroke="#be123c",
            stroke_width=stroke_width,
            shape=RectShape(x=6.0, y=2.0, width=4.5, height=4.0),
        ),
    )
    return plan.model_copy(update={"areas": areas})


__all__ = [
    "create_blank_plan",
    "seed_plan",
    "RECT_FILL",
    "RECT_STROKE",
    "POLYGON_FILL",
    "POLYGON_STROKE",
    "ELLIPSE_FILL",
    "ELLIPSE_STROKE",
]
