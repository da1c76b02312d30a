"""In-memory editing sessions, one :class:`PlanEditor` per session."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from floorplan_core.history import PlanEditor
from floorplan_core.models import Plan
from floorplan_core.plan_factory import create_blank_plan, seed_plan


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Session:
    """Stored session with metadata."""

    id: str
    editor: PlanEditor
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def touch(self) -> None:
        self.updated_at = _utcnow()


class SessionStore:
    """Simple store backing the plan routes."""

    def __init__(self) -> None:
        self._items: Dict[str, Session] = {}

    def create(self, plan: Plan) -> Session:
        session = Session(id=str(uuid4()), editor=PlanEditor(plan))
        self._items[session.id] = session
        return session

    def list(self) -> List[Session]:
        return list(self._items.values())

    def get(self, session_id: str) -> Optional[Session]:
        return self._items.get(session_id)

    def delete(self, session_id: str) -> bool:
        return self._items.pop(session_id, None) is not None

    def clear(self) -> None:
        self._items.clear()


_store = SessionStore()


def get_store() -> SessionStore:
    return _store


def create_session(payload: Dict[str, Any]) -> Session:
    if payload.get("seed"):
        plan = seed_plan()
    else:
        plan = create_blank_plan(
            float(payload.get("width", 12.0)),
            float(payload.get("height", 9.0)),
            payload.get("units", "m"),
            payload.get("name") or "New Plan",
        )
    return _store.create(plan)


def require_session(session_id: str) -> Session:
    session = _store.get(session_id)
    if session is None:
        raise KeyError(session_id)
    return session


def serialize_session(session: Session) -> Dict[str, Any]:
    editor = session.editor
    return {
        "id": session.id,
        "name": editor.plan.meta.name,
        "created_at": session.created_at.isoformat(),
        "updated_at": session.updated_at.isoformat(),
        "area_count": len(editor.plan.areas),
        "undo_depth": len(editor.history.undo),
        "redo_depth": len(editor.history.redo),
    }


__all__ = [
    "Session",
    "SessionStore",
    "get_store",
    "create_session",
    "require_session",
    "serialize_session",
]
