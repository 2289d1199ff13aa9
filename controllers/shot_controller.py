from fastapi import Request, HTTPException
from typing import Dict, Any

from services.shots.shot_log import CLUBS, RESULTS, ShotLog


def _shot_log(request: Request) -> ShotLog:
    shot_log = getattr(request.app.state, "shot_log", None)
    if shot_log is None:
        raise HTTPException(status_code=500, detail="Shot log not initialized.")
    return shot_log


async def list_shots(request: Request) -> Dict[str, Any]:
    """Return logged shots (newest first) with the tracker's aggregate stats."""
    shot_log = _shot_log(request)
    return {
        "shots": [shot.to_dict() for shot in shot_log.shots],
        "stats": shot_log.stats().to_dict(),
    }


async def log_shot(request: Request, club: str, distance: Any, result: str) -> Dict[str, Any]:
    """Record a shot and return it together with refreshed stats.

    Raises:
        ValueError: If the club, result, or distance is not valid.
    """
    shot_log = _shot_log(request)
    shot = shot_log.log(club, distance, result)
    return {"shot": shot.to_dict(), "stats": shot_log.stats().to_dict()}


async def shot_options() -> Dict[str, Any]:
    return {"clubs": list(CLUBS), "results": list(RESULTS)}
