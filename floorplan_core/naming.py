"""Area identity and naming helpers. Pure: they only read plan state."""
from __future__ import annotations

import re
import string
from typing import List
from uuid import uuid4

from .models import Plan

_NUMBER = re.compile(r"(\d+)")
_SUFFIXES = string.ascii_uppercase


def new_id() -> str:
    return str(uuid4())


def next_area_index(plan: Plan) -> int:
    """One past the largest number found in any existing area name."""

    highest = 0
    for area in plan.areas:
        match = _NUMBER.search(area.name)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest + 1


def default_area_name(plan: Plan) -> str:
    return f"Area {next_area_index(plan)}"


def partition_names(base: str, count: int) -> List[str]:
    """``["Hall A", "Hall B", ...]``; past ``Z`` the 1-based index is used."""

    if count <= 1:
        return [base]
    trimmed = base.rstrip()
    return [f"{trimmed} {_SUFFIXES[i] if i < len(_SUFFIXES) else i + 1}" for i in range(count)]


__all__ = ["new_id", "next_area_index", "default_area_name", "partition_names"]
