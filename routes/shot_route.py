from typing import Union

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from controllers.shot_controller import list_shots, log_shot, shot_options

router = APIRouter(prefix="/shots", tags=["shots"])


class ShotPayload(BaseModel):
	club: str
	distance: Union[int, str]
	result: str


@router.get("")
async def get_shots(request: Request):
	"""Return logged shots and aggregate stats."""
	try:
		return await list_shots(request)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("", status_code=201)
async def post_shot(request: Request, payload: ShotPayload):
	"""Log a shot entered by hand."""
	try:
		return await log_shot(request, payload.club, payload.distance, payload.result)
	except HTTPException:
		raise
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc))
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.get("/options")
async def get_shot_options():
	"""Return the club and result vocabularies."""
	return await shot_options()
