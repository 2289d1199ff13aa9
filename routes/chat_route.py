"""FastAPI routes for chat views."""

from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from pydantic import BaseModel

from controllers.chat_controller import (
	clear_attachment,
	get_view,
	mount_view,
	select_attachment,
	send_message,
	unmount_view,
)

router = APIRouter(prefix="/chat/views", tags=["chat"])


class MountPayload(BaseModel):
	persona: str = "coach"


@router.post("")
async def mount_view_route(request: Request, payload: MountPayload):
	try:
		return await mount_view(request, payload.persona)
	except HTTPException:
		raise
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{view_id}")
async def get_view_route(request: Request, view_id: str):
	try:
		return await get_view(request, view_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.delete("/{view_id}")
async def unmount_view_route(request: Request, view_id: str):
	try:
		return await unmount_view(request, view_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("/{view_id}/attachment")
async def select_attachment_route(request: Request, view_id: str, image: UploadFile = File(...)):
	try:
		return await select_attachment(request, view_id, image)
	except HTTPException:
		raise
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.delete("/{view_id}/attachment")
async def clear_attachment_route(request: Request, view_id: str):
	try:
		return await clear_attachment(request, view_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("/{view_id}/messages", status_code=202)
async def send_message_route(
	request: Request,
	view_id: str,
	text: str = Form(""),
	image: Optional[UploadFile] = File(None),
):
	"""Submit a turn; the reply is folded into the transcript in the background."""
	try:
		return await send_message(request, view_id, text, image)
	except HTTPException:
		raise
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))
