from __future__ import annotations

import pytest

from floorplan_core.config import CoreSettings
from floorplan_core.interpreter import CommandInterpreter
from floorplan_core.models import Area, Plan, RectShape
from floorplan_core.plan_factory import create_blank_plan


def make_area(area_id: str, shape, name: str = "Room") -> Area:
    return Area(id=area_id, name=name, fill="#ffffff", stroke="#000000", stroke_width=0.04, shape=shape)


def with_areas(plan: Plan, *areas: Area) -> Plan:
    return plan.model_copy(update={"areas": plan.areas + tuple(areas)})


@pytest.fixture
def settings() -> CoreSettings:
    return CoreSettings()


@pytest.fixture
def interpreter(settings: CoreSettings) -> CommandInterpreter:
    return CommandInterpreter(settings)


@pytest.fixture
def blank_plan() -> Plan:
    return create_blank_plan(10.0, 10.0, "m", "Test Plan")


@pytest.fixture
def two_room_plan(blank_plan: Plan) -> Plan:
    return with_areas(
        blank_plan,
        make_area("a", RectShape(x=0.0, y=0.0, width=4.0, height=2.0), "Area 1"),
        make_area("b", RectShape(x=5.0, y=5.0, width=2.0, height=2.0), "Area 2"),
    )
