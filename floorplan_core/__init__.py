"""Geometry-and-command core for editing 2D floor plans.

The core is a pure interpreter: an immutable :class:`Plan` plus a command
yields a new :class:`Plan`. :class:`PlanEditor` wraps it with snapshot based
undo/redo.
"""
from .commands import COMMAND_TYPES, Command, parse_command
from .config import CoreSettings, get_settings
from .history import CommandRecord, HistoryStack, PlanEditor
from .interpreter import CommandInterpreter, CommandResult, perform_command
from .models import Area, AreaGroup, Canvas, Plan, Selection, clone_plan
from .plan_factory import create_blank_plan, seed_plan
from .plan_io import export_plan_to_json, import_plan_from_json

__version__ = "0.1.0"

__all__ = [
    "COMMAND_TYPES",
    "Command",
    "parse_command",
    "CoreSettings",
    "get_settings",
    "CommandRecord",
    "HistoryStack",
    "PlanEditor",
    "CommandInterpreter",
    "CommandResult",
    "perform_command",
    "Area",
    "AreaGroup",
    "Canvas",
    "Plan",
    "Selection",
    "clone_plan",
    "create_blank_plan",
    "seed_plan",
    "export_plan_to_json",
    "import_plan_from_json",
]
