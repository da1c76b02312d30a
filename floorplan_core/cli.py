"""Command line interface for floor plan documents."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterable, List

from .commands import BaseCommand, parse_command
from .config import get_settings
from .geometry import shape_area, shape_bounding_box
from .history import PlanEditor
from .models import Plan
from .plan_factory import create_blank_plan, seed_plan
from .plan_io import export_plan_to_json, import_plan_from_json

logger = logging.getLogger(__name__)


def _ensure_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _read_plan(path: Path) -> Plan:
    plan = import_plan_from_json(path.read_text(encoding="utf-8"))
    if plan is None:
        raise ValueError(f"{path} is not a valid plan document.")
    return plan


def _write_plan(path: Path, plan: Plan) -> None:
    _ensure_dir(path)
    path.write_text(export_plan_to_json(plan) + "\n", encoding="utf-8")


def _read_commands(path: Path) -> List[BaseCommand]:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, dict):
        data = data.get("commands", [data])
    if not isinstance(data, list):
        raise ValueError("Command file must contain a list of commands.")
    parsed: List[BaseCommand] = []
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Command {idx} must be an object.")
        command = parse_command(item)
        if command is None:
            logger.warning("Skipping command %d with unknown type %r", idx, item.get("type"))
            continue
        parsed.append(command)
    return parsed


def _cmd_new(args: argparse.Namespace) -> None:
    if args.seed:
        plan = seed_plan()
    else:
        plan = create_blank_plan(args.width, args.height, args.units, args.name)
    out_path = Path(args.output)
    _write_plan(out_path, plan)
    print(f"Wrote {out_path} | {plan.canvas.width:g}x{plan.canvas.height:g} {plan.units} areas={len(plan.areas)}")


def _cmd_info(args: argparse.Namespace) -> None:
    plan = _read_plan(Path(args.plan))
    print(f"{plan.meta.name}: {plan.canvas.width:g}x{plan.canvas.height:g} {plan.units}")
    print(f"Areas ({len(plan.areas)}):")
    for area in plan.areas:
        box = shape_bounding_box(area.shape)
        print(
            f"  - {area.name} [{area.shape.type}] area={shape_area(area.shape):.3f} "
            f"bbox=({box.x:g}, {box.y:g}, {box.width:g}, {box.height:g})"
        )
    if plan.area_groups:
        print(f"Groups ({len(plan.area_groups)}):")
        for group in plan.area_groups:
            flag = "visible" if group.visible else "hidden"
            print(f"  - {group.name} ({len(group.area_ids)} areas, {flag})")


def _cmd_apply(args: argparse.Namespace) -> None:
    plan_path = Path(args.plan)
    editor = PlanEditor(_read_plan(plan_path), settings=get_settings())
    commands = _read_commands(Path(args.commands))
    recorded = 0
    for command in commands:
        if editor.apply(command) is not None:
            recorded += 1
    out_path = Path(args.output or plan_path)
    _write_plan(out_path, editor.plan)
    print(f"Wrote {out_path} | commands={len(commands)} applied={recorded} areas={len(editor.plan.areas)}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="floorplan",
        description="Floor plan command line interface",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    creator = sub.add_parser("new", help="Write a blank (or demo) plan document")
    creator.add_argument("output", help="Output JSON path")
    creator.add_argument("--width", type=float, default=12.0, help="Canvas width")
    creator.add_argument("--height", type=float, default=9.0, help="Canvas height")
    creator.add_argument("--units", default="m", choices=["cm", "m", "ft"], help="Length unit")
    creator.add_argument("--name", default="New Plan", help="Plan name")
    creator.add_argument("--seed", action="store_true", help="Write the demo floor instead of a blank plan")
    creator.set_defaults(func=_cmd_new)

    info = sub.add_parser("info", help="Summarise areas and groups of a plan")
    info.add_argument("plan", help="Plan JSON path")
    info.set_defaults(func=_cmd_info)

    applier = sub.add_parser("apply", help="Apply a JSON list of commands to a plan")
    applier.add_argument("plan", help="Plan JSON path")
    applier.add_argument("commands", help="JSON file holding a list of commands")
    applier.add_argument("--output", help="Output path (defaults to overwriting the plan)")
    applier.set_defaults(func=_cmd_apply)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        args.func(args)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
