"""JSON export/import of plan documents."""
from __future__ import annotations

import json
import logging
from typing import Optional

from pydantic import ValidationError

from .models import Plan

logger = logging.getLogger(__name__)


def export_plan_to_json(plan: Plan) -> str:
    return plan.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def import_plan_from_json(text: str) -> Optional[Plan]:
    """Parse a plan document; ``None`` signals invalid input."""

    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        logger.warning("Invalid plan JSON: %s", exc)
        return None
    if not isinstance(data, dict) or not data.get("version"):
        logger.warning("Plan JSON has no version tag")
        return None
    try:
        return Plan.model_validate(data)
    except ValidationError as exc:
        logger.warning("Plan JSON failed validation: %s", exc)
        return None


__all__ = ["export_plan_to_json", "import_plan_from_json"]
