"""Plan document models.

Every model is a frozen pydantic model and every sequence is a tuple, so a
``Plan`` value can be shared freely between history snapshots: editing always
produces a new value via ``model_copy(update=...)``. JSON field names are
camelCase, Python attributes are snake_case.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = "1.0"

Units = Literal["cm", "m", "ft"]
PartitionDirection = Literal["horizontal", "vertical"]
RectHandle = Literal["n", "s", "e", "w", "ne", "nw", "se", "sw"]
MirrorAxis = Literal["vertical", "horizontal"]

Point = Tuple[float, float]
Ring = Tuple[Point, ...]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentModel(BaseModel):
    """Base for immutable document values."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class RectShape(DocumentModel):
    type: Literal["rect"] = "rect"
    x: float
    y: float
    width: float
    height: float


class EllipseShape(DocumentModel):
    type: Literal["ellipse"] = "ellipse"
    cx: float
    cy: float
    rx: float
    ry: float


class PolygonShape(DocumentModel):
    type: Literal["polygon"] = "polygon"
    points: Ring
    holes: Optional[Tuple[Ring, ...]] = None


class MultiPolygonShape(DocumentModel):
    type: Literal["multipolygon"] = "multipolygon"
    polygons: Tuple[Ring, ...]
    holes: Optional[Tuple[Tuple[Ring, ...], ...]] = None


Shape = Annotated[
    Union[RectShape, EllipseShape, PolygonShape, MultiPolygonShape],
    Field(discriminator="type"),
]


class Area(DocumentModel):
    id: str
    name: str
    fill: str
    stroke: str
    stroke_width: float
    shape: Shape
    parent_id: Optional[str] = None


class AreaGroup(DocumentModel):
    id: str
    name: str
    area_ids: Tuple[str, ...] = ()
    visible: bool = True
    locked: bool = False


class Pan(DocumentModel):
    x: float = 0.0
    y: float = 0.0


class Canvas(DocumentModel):
    width: float
    height: float
    zoom: float = 1.0
    pan: Pan = Field(default_factory=Pan)


class PlanMeta(DocumentModel):
    name: str = "New Plan"
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Plan(DocumentModel):
    version: Literal["1.0"] = SCHEMA_VERSION
    units: Units = "m"
    canvas: Canvas
    areas: Tuple[Area, ...] = ()
    area_groups: Tuple[AreaGroup, ...] = ()
    meta: PlanMeta = Field(default_factory=PlanMeta)

    def find_area(self, area_id: str) -> Optional[Area]:
        """Look up an area by id; weak references may legitimately miss."""

        for area in self.areas:
            if area.id == area_id:
                return area
        return None

    def content_equals(self, other: "Plan") -> bool:
        """Compare two plans ignoring the ``updatedAt`` stamp."""

        meta = self.meta.model_copy(update={"updated_at": other.meta.updated_at})
        return self.model_copy(update={"meta": meta}) == other


class Selection(DocumentModel):
    area_ids: Tuple[str, ...] = ()


EMPTY_SELECTION = Selection()


def clone_plan(plan: Plan) -> Plan:
    """Return a structurally unshared copy of ``plan``."""

    return plan.model_copy(deep=True)


__all__ = [
    "SCHEMA_VERSION",
    "Units",
    "PartitionDirection",
    "RectHandle",
    "MirrorAxis",
    "Point",
    "Ring",
    "RectShape",
    "EllipseShape",
    "PolygonShape",
    "MultiPolygonShape",
    "Shape",
    "Area",
    "AreaGroup",
    "Pan",
    "Canvas",
    "PlanMeta",
    "Plan",
    "Selection",
    "EMPTY_SELECTION",
    "clone_plan",
    "utc_now",
]
