"""Named collections of area references.

Groups hold plain area ids; deleting an area never touches a group that
references it.
"""
from __future__ import annotations

from typing import Iterable, Optional

from .models import AreaGroup, Plan
from .naming import new_id


def find_group(plan: Plan, group_id: str) -> Optional[AreaGroup]:
    for group in plan.area_groups:
        if group.id == group_id:
            return group
    return None


def add_group(plan: Plan, name: str, area_ids: Iterable[str]) -> Plan:
    group = AreaGroup(id=new_id(), name=name, area_ids=tuple(area_ids), visible=True)
    return plan.model_copy(update={"area_groups": plan.area_groups + (group,)})


def delete_group(plan: Plan, group_id: str) -> Plan:
    groups = tuple(g for g in plan.area_groups if g.id != group_id)
    return plan.model_copy(update={"area_groups": groups})


def _update_group(plan: Plan, group_id: str, **changes) -> Plan:
    groups = tuple(g.model_copy(update=changes) if g.id == group_id else g for g in plan.area_groups)
    return plan.model_copy(update={"area_groups": groups})


def set_group_visibility(plan: Plan, group_id: str, visible: bool) -> Plan:
    return _update_group(plan, group_id, visible=visible)


def set_group_locked(plan: Plan, group_id: str, locked: bool) -> Plan:
    return _update_group(plan, group_id, locked=locked)


__all__ = ["find_group", "add_group", "delete_group", "set_group_visibility", "set_group_locked"]
