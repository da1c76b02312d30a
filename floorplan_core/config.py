"""Tunable constants for the floor plan core."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from functools import lru_cache
from typing import Mapping, Optional

ENV_PREFIX = "FLOORPLAN_"


@dataclass(frozen=True)
class CoreSettings:
    """Numeric policy shared by geometry, commands and history."""

    min_size: float = 0.25
    min_canvas_size: float = 0.5
    min_zoom: float = 0.1
    history_limit: int = 100
    snap_tolerance_ratio: float = 0.6
    ellipse_segments: int = 48
    default_stroke_width: float = 0.04

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CoreSettings":
        """Build settings, overriding defaults with ``FLOORPLAN_<FIELD>`` variables."""

        env = os.environ if environ is None else environ
        overrides = {}
        for item in fields(cls):
            raw = env.get(ENV_PREFIX + item.name.upper())
            if raw is None or raw == "":
                continue
            caster = int if item.type in ("int", int) else float
            try:
                overrides[item.name] = caster(raw)
            except ValueError as exc:
                raise ValueError(f"Invalid value for {ENV_PREFIX}{item.name.upper()}: {raw!r}") from exc
        return cls(**overrides)


@lru_cache(maxsize=1)
def get_settings() -> CoreSettings:
    return CoreSettings.from_env()


__all__ = ["CoreSettings", "get_settings", "ENV_PREFIX"]
