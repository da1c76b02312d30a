"""Command models: the closed, tagged set of plan edits.

Each command is a frozen pydantic model whose ``type`` literal is the
discriminator of the :data:`Command` union. Payload fields sit next to
``type``; :attr:`BaseCommand.payload` returns them as a JSON-ready dict.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Tuple, Union

from pydantic import Field, TypeAdapter

from .models import (
    Area,
    DocumentModel,
    EllipseShape,
    MirrorAxis,
    Pan,
    PartitionDirection,
    Plan,
    RectHandle,
    RectShape,
    Ring,
    Units,
)


class BaseCommand(DocumentModel):
    type: str

    @property
    def payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude={"type"}, exclude_none=True)


# plan ---------------------------------------------------------------------


class CreatePlan(BaseCommand):
    type: Literal["plan/create"] = "plan/create"
    width: float
    height: float
    units: Units = "m"
    name: Optional[str] = None


class ResizePlanBoundary(BaseCommand):
    type: Literal["plan/resize-boundary"] = "plan/resize-boundary"
    width: Optional[float] = None
    height: Optional[float] = None


class SetViewport(BaseCommand):
    type: Literal["plan/set-viewport"] = "plan/set-viewport"
    zoom: Optional[float] = None
    pan: Optional[Pan] = None


class LoadPlan(BaseCommand):
    type: Literal["plan/load"] = "plan/load"
    plan: Plan


# area creation --------------------------------------------------------------


class CreateArea(BaseCommand):
    type: Literal["area/create"] = "area/create"
    rect: RectShape
    partitions: Optional[int] = None
    direction: Optional[PartitionDirection] = None
    fill: Optional[str] = None
    stroke: Optional[str] = None
    name: Optional[str] = None
    parent_id: Optional[str] = None


class CreatePolygon(BaseCommand):
    type: Literal["area/create-polygon"] = "area/create-polygon"
    points: Ring
    holes: Optional[Tuple[Ring, ...]] = None
    fill: Optional[str] = None
    stroke: Optional[str] = None
    name: Optional[str] = None


class CreateEllipse(BaseCommand):
    type: Literal["area/create-ellipse"] = "area/create-ellipse"
    ellipse: EllipseShape
    fill: Optional[str] = None
    stroke: Optional[str] = None
    name: Optional[str] = None


class PasteAreas(BaseCommand):
    type: Literal["area/paste"] = "area/paste"
    areas: Tuple[Area, ...]
    dx: float = 0.0
    dy: float = 0.0
    name_suffix: Optional[str] = None


# area geometry --------------------------------------------------------------


class MoveArea(BaseCommand):
    type: Literal["area/move"] = "area/move"
    id: str
    dx: float
    dy: float
    snap_step: Optional[float] = None


class ResizeArea(BaseCommand):
    type: Literal["area/resize"] = "area/resize"
    id: str
    handle: RectHandle
    dx: float
    dy: float
    snap_step: Optional[float] = None


class MovePolygon(BaseCommand):
    type: Literal["area/move-polygon"] = "area/move-polygon"
    id: str
    dx: float
    dy: float
    clamp: bool = True


class MoveMany(BaseCommand):
    type: Literal["area/move-multi"] = "area/move-multi"
    ids: Tuple[str, ...]
    dx: float
    dy: float


class SetRect(BaseCommand):
    type: Literal["area/set-rect"] = "area/set-rect"
    id: str
    rect: RectShape


class RectUpdate(DocumentModel):
    id: str
    rect: RectShape


class SetRectBatch(BaseCommand):
    type: Literal["area/set-rect-batch"] = "area/set-rect-batch"
    updates: Tuple[RectUpdate, ...]


class SetPolygon(BaseCommand):
    type: Literal["area/set-polygon"] = "area/set-polygon"
    id: str
    points: Ring
    holes: Optional[Tuple[Ring, ...]] = None


class SetMultiPolygon(BaseCommand):
    type: Literal["area/set-multipolygon"] = "area/set-multipolygon"
    id: str
    polygons: Tuple[Ring, ...]
    holes: Optional[Tuple[Tuple[Ring, ...], ...]] = None


class SetEllipse(BaseCommand):
    type: Literal["area/set-ellipse"] = "area/set-ellipse"
    id: str
    ellipse: EllipseShape


class MirrorArea(BaseCommand):
    type: Literal["area/mirror"] = "area/mirror"
    id: str
    axis: MirrorAxis


# area attributes / lifecycle ------------------------------------------------


class RenameArea(BaseCommand):
    type: Literal["area/rename"] = "area/rename"
    id: str
    name: str


class RecolorArea(BaseCommand):
    type: Literal["area/recolor"] = "area/recolor"
    id: str
    fill: str
    stroke: Optional[str] = None


class DeleteArea(BaseCommand):
    type: Literal["area/delete"] = "area/delete"
    id: str


class DivideArea(BaseCommand):
    type: Literal["area/divide"] = "area/divide"
    id: str
    partitions: int
    direction: Optional[PartitionDirection] = None


class MergeAreas(BaseCommand):
    type: Literal["area/merge"] = "area/merge"
    ids: Tuple[str, ...]
    name: Optional[str] = None
    fill: Optional[str] = None
    stroke: Optional[str] = None


class SubtractAreas(BaseCommand):
    type: Literal["area/subtract"] = "area/subtract"
    ids: Tuple[str, ...]


class ConvertToPolygon(BaseCommand):
    type: Literal["area/convert-to-polygon"] = "area/convert-to-polygon"
    ids: Tuple[str, ...]
    name: Optional[str] = None
    fill: Optional[str] = None
    stroke: Optional[str] = None


# groups / selection ---------------------------------------------------------


class CreateGroup(BaseCommand):
    type: Literal["group/create"] = "group/create"
    name: str
    area_ids: Tuple[str, ...] = ()


class DeleteGroup(BaseCommand):
    type: Literal["group/delete"] = "group/delete"
    id: str


class SetGroupVisibility(BaseCommand):
    type: Literal["group/visibility"] = "group/visibility"
    id: str
    visible: bool


class SetGroupLocked(BaseCommand):
    type: Literal["group/lock"] = "group/lock"
    id: str
    locked: bool


class SetSelection(BaseCommand):
    type: Literal["selection/set"] = "selection/set"
    area_ids: Tuple[str, ...] = ()


Command = Annotated[
    Union[
        CreatePlan,
        ResizePlanBoundary,
        SetViewport,
        LoadPlan,
        CreateArea,
        CreatePolygon,
        CreateEllipse,
        PasteAreas,
        MoveArea,
        ResizeArea,
        MovePolygon,
        MoveMany,
        SetRect,
        SetRectBatch,
        SetPolygon,
        SetMultiPolygon,
        SetEllipse,
        MirrorArea,
        RenameArea,
        RecolorArea,
        DeleteArea,
        DivideArea,
        MergeAreas,
        SubtractAreas,
        ConvertToPolygon,
        CreateGroup,
        DeleteGroup,
        SetGroupVisibility,
        SetGroupLocked,
        SetSelection,
    ],
    Field(discriminator="type"),
]

_command_adapter: TypeAdapter = TypeAdapter(Command)

COMMAND_TYPES = frozenset(
    model.model_fields["type"].default
    for model in BaseCommand.__subclasses__()
)


def parse_command(data: Mapping[str, Any]) -> Optional[BaseCommand]:
    """Validate a command dict; unknown kinds yield ``None``.

    A known kind with a malformed payload raises pydantic's ``ValidationError``.
    """

    if data.get("type") not in COMMAND_TYPES:
        return None
    return _command_adapter.validate_python(dict(data))


__all__ = [
    "BaseCommand",
    "Command",
    "COMMAND_TYPES",
    "parse_command",
    "CreatePlan",
    "ResizePlanBoundary",
    "SetViewport",
    "LoadPlan",
    "CreateArea",
    "CreatePolygon",
    "CreateEllipse",
    "PasteAreas",
    "MoveArea",
    "ResizeArea",
    "MovePolygon",
    "MoveMany",
    "SetRect",
    "RectUpdate",
    "SetRectBatch",
    "SetPolygon",
    "SetMultiPolygon",
    "SetEllipse",
    "MirrorArea",
    "RenameArea",
    "RecolorArea",
    "DeleteArea",
    "DivideArea",
    "MergeAreas",
    "SubtractAreas",
    "ConvertToPolygon",
    "CreateGroup",
    "DeleteGroup",
    "SetGroupVisibility",
    "SetGroupLocked",
    "SetSelection",
]
