from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, ValidationError

from floorplan_core.commands import parse_command
from floorplan_core.models import Plan, Selection, Shape, Units
from floorplan_core.plan_io import export_plan_to_json, import_plan_from_json
from floorplan_core.views import build_view

from .. import sessions


class SessionCreate(BaseModel):
    width: float = Field(default=12.0, gt=0.0, description="Canvas width")
    height: float = Field(default=9.0, gt=0.0, description="Canvas height")
    units: Units = Field(default="m", description="Length unit")
    name: Optional[str] = Field(default=None, description="Plan name")
    seed: bool = Field(default=False, description="Start from the demo floor")


class SessionSummary(BaseModel):
    id: str
    name: str
    created_at: str
    updated_at: str
    area_count: int
    undo_depth: int
    redo_depth: int


class EditorState(BaseModel):
    plan: Plan
    selection: Selection
    description: Optional[str] = None
    recorded: bool = False
    undo_depth: int
    redo_depth: int


class ImportRequest(BaseModel):
    document: str = Field(..., description="Plan document as JSON text")


class ViewRequest(BaseModel):
    drafts: Dict[str, Shape] = Field(default_factory=dict, description="Interaction-time shapes keyed by area id")


class AreaViewResponse(BaseModel):
    id: str
    name: str
    shape: Shape
    bbox: Dict[str, float]
    net_area: float
    selected: bool
    is_draft: bool


router = APIRouter(prefix="/plans", tags=["plans"])


def _session(session_id: str) -> sessions.Session:
    try:
        return sessions.require_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan session not found") from exc


def _state(session: sessions.Session, description: Optional[str] = None, recorded: bool = False) -> EditorState:
    editor = session.editor
    return EditorState(
        plan=editor.plan,
        selection=editor.selection,
        description=description,
        recorded=recorded,
        undo_depth=len(editor.history.undo),
        redo_depth=len(editor.history.redo),
    )


def _view(session: sessions.Session, drafts: Dict[str, Any]) -> List[AreaViewResponse]:
    editor = session.editor
    return [
        AreaViewResponse(
            id=item.area.id,
            name=item.area.name,
            shape=item.shape,
            bbox={"x": item.bbox.x, "y": item.bbox.y, "width": item.bbox.width, "height": item.bbox.height},
            net_area=item.net_area,
            selected=item.selected,
            is_draft=item.is_draft,
        )
        for item in build_view(editor.plan, editor.selection, drafts)
    ]


@router.get("/", response_model=List[SessionSummary])
async def list_sessions() -> List[SessionSummary]:
    return [SessionSummary(**sessions.serialize_session(item)) for item in sessions.get_store().list()]


@router.post("/", response_model=SessionSummary, status_code=status.HTTP_201_CREATED)
async def create_session(body: SessionCreate) -> SessionSummary:
    session = sessions.create_session(body.model_dump())
    return SessionSummary(**sessions.serialize_session(session))


@router.get("/{session_id}", response_model=EditorState)
async def get_session(session_id: str) -> EditorState:
    return _state(_session(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str) -> None:
    if not sessions.get_store().delete(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan session not found")


@router.post("/{session_id}/commands", response_model=EditorState)
async def apply_command(session_id: str, body: Dict[str, Any]) -> EditorState:
    session = _session(session_id)
    try:
        command = parse_command(body)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if command is None:
        return _state(session)
    record = session.editor.apply(command)
    if record is None:
        return _state(session)
    session.touch()
    return _state(session, description=record.description, recorded=True)


@router.post("/{session_id}/undo", response_model=EditorState)
async def undo(session_id: str) -> EditorState:
    session = _session(session_id)
    record = session.editor.undo()
    if record is not None:
        session.touch()
    return _state(session, description=record.description if record else None)


@router.post("/{session_id}/redo", response_model=EditorState)
async def redo(session_id: str) -> EditorState:
    session = _session(session_id)
    record = session.editor.redo()
    if record is not None:
        session.touch()
    return _state(session, description=record.description if record else None)


@router.get("/{session_id}/export", response_class=PlainTextResponse)
async def export_plan(session_id: str) -> PlainTextResponse:
    session = _session(session_id)
    return PlainTextResponse(export_plan_to_json(session.editor.plan), media_type="application/json")


@router.post("/{session_id}/import", response_model=EditorState)
async def import_plan(session_id: str, body: ImportRequest) -> EditorState:
    session = _session(session_id)
    plan = import_plan_from_json(body.document)
    if plan is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid plan document")
    session.editor.load(plan)
    session.touch()
    return _state(session, description="Load plan")


@router.get("/{session_id}/view", response_model=List[AreaViewResponse])
async def get_view(session_id: str) -> List[AreaViewResponse]:
    return _view(_session(session_id), {})


@router.post("/{session_id}/view", response_model=List[AreaViewResponse])
async def post_view(session_id: str, body: ViewRequest) -> List[AreaViewResponse]:
    return _view(_session(session_id), body.drafts)
