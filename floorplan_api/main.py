from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from floorplan_core import COMMAND_TYPES, __version__

from . import sessions
from .routers import plans as plans_router


app = FastAPI(
    title="Floor Plan API",
    version=__version__,
    description="Apply floor plan commands with undo/redo over HTTP",
)
app.include_router(plans_router.router)


@app.get("/")
async def index() -> Dict[str, Any]:
    return {
        "name": "floorplan-api",
        "version": app.version,
        "routes": [
            {"path": "/plans", "methods": ["GET", "POST"]},
            {"path": "/plans/{id}/commands", "methods": ["POST"]},
            {"path": "/plans/{id}/undo", "methods": ["POST"]},
            {"path": "/plans/{id}/redo", "methods": ["POST"]},
        ],
        "commands": sorted(COMMAND_TYPES),
        "session_count": len(sessions.get_store().list()),
    }
