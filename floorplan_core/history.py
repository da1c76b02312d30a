"""Snapshot-based undo/redo around the command interpreter."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .commands import BaseCommand, LoadPlan
from .config import CoreSettings, get_settings
from .interpreter import CommandInterpreter
from .models import EMPTY_SELECTION, Plan, Selection
from .plan_factory import seed_plan

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class CommandRecord:
    """One effective command with the plan before and after it."""

    command: BaseCommand
    description: str
    before: Plan
    after: Plan
    timestamp: int = field(default_factory=_now_ms)

    @property
    def type(self) -> str:
        return self.command.type

    @property
    def payload(self) -> Dict[str, Any]:
        return self.command.payload


@dataclass
class HistoryStack:
    undo: List[CommandRecord] = field(default_factory=list)
    redo: List[CommandRecord] = field(default_factory=list)


class PlanEditor:
    """Single-writer owner of the live plan, its selection and its history.

    All mutation goes through :meth:`apply`, :meth:`undo`, :meth:`redo` and
    :meth:`load`. Undo and redo restore stored snapshots; they never re-run
    commands.
    """

    def __init__(
        self,
        plan: Optional[Plan] = None,
        settings: Optional[CoreSettings] = None,
        interpreter: Optional[CommandInterpreter] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.interpreter = interpreter or CommandInterpreter(self.settings)
        self.plan: Plan = plan if plan is not None else seed_plan()
        self.selection: Selection = EMPTY_SELECTION
        self.history = HistoryStack()

    def apply(self, command) -> Optional[CommandRecord]:
        """Run ``command``; return the pushed record, or ``None`` when nothing changed."""

        if isinstance(command, LoadPlan):
            self.load(command.plan)
            return None
        before = self.plan
        result = self.interpreter.apply(before, command)
        if result.selection is not None:
            self.selection = result.selection
        if result.plan is before or result.plan == before:
            logger.debug("Suppressed %s: plan unchanged", getattr(command, "type", command))
            return None
        record = CommandRecord(
            command=command,
            description=result.description or command.type,
            before=before,
            after=result.plan,
        )
        self.history.undo.append(record)
        if len(self.history.undo) > self.settings.history_limit:
            self.history.undo.pop(0)
        self.history.redo.clear()
        self.plan = result.plan
        logger.debug("Recorded %s (%s); undo depth %d", record.type, record.description, len(self.history.undo))
        return record

    def undo(self) -> Optional[CommandRecord]:
        if not self.history.undo:
            return None
        record = self.history.undo.pop()
        self.history.redo.insert(0, record)
        self.plan = record.before
        self.selection = EMPTY_SELECTION
        logger.debug("Undo %s", record.description)
        return record

    def redo(self) -> Optional[CommandRecord]:
        if not self.history.redo:
            return None
        record = self.history.redo.pop(0)
        self.history.undo.append(record)
        self.plan = record.after
        self.selection = EMPTY_SELECTION
        logger.debug("Redo %s", record.description)
        return record

    def load(self, plan: Plan) -> None:
        """Replace the plan wholesale and forget all history."""

        self.plan = plan
        self.selection = EMPTY_SELECTION
        self.history = HistoryStack()
        logger.debug("Loaded plan %r", plan.meta.name)

    def can_undo(self) -> bool:
        return bool(self.history.undo)

    def can_redo(self) -> bool:
        return bool(self.history.redo)


__all__ = ["CommandRecord", "HistoryStack", "PlanEditor"]
