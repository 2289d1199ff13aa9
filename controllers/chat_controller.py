"""Chat view lifecycle helpers for the REST surface."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, UploadFile

from services.chat.chat_view import ChatView
from services.chat.personas import parse_persona
from services.chat.view_store import ViewStore
from utils.media_validation import read_image_upload


def _store(request: Request) -> ViewStore:
	store = getattr(request.app.state, "view_store", None)
	if store is None:
		raise HTTPException(status_code=500, detail="Chat views unavailable")
	return store


def _view(request: Request, view_id: str) -> ChatView:
	try:
		return _store(request).get(view_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc


async def mount_view(request: Request, persona: str) -> Dict[str, Any]:
	"""Create a chat view seeded with the persona's greeting."""
	view = _store(request).create(parse_persona(persona))
	return view.to_dict()


async def get_view(request: Request, view_id: str) -> Dict[str, Any]:
	return _view(request, view_id).to_dict()


async def unmount_view(request: Request, view_id: str) -> Dict[str, Any]:
	"""Discard a view and its transcript."""
	try:
		_store(request).close(view_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	return {"view_id": view_id, "closed": True}


async def select_attachment(request: Request, view_id: str, image: UploadFile) -> Dict[str, Any]:
	"""Validate an uploaded photo and hold it for the next submission."""
	view = _view(request, view_id)
	ref = await read_image_upload(image)
	view.select_attachment(ref)
	return {"view_id": view_id, "pending_attachment": ref.to_dict()}


async def clear_attachment(request: Request, view_id: str) -> Dict[str, Any]:
	view = _view(request, view_id)
	view.clear_attachment()
	return {"view_id": view_id, "pending_attachment": None}


async def send_message(
	request: Request,
	view_id: str,
	text: str,
	image: Optional[UploadFile] = None,
) -> Dict[str, Any]:
	"""Submit a turn without waiting for the reply.

	The user turn is in the returned transcript; the assistant turn arrives
	later and can be read back with `get_view`.
	"""
	view = _view(request, view_id)
	if image is not None and image.filename:
		view.select_attachment(await read_image_upload(image))
	task = view.send(text or "")
	return {
		"view_id": view_id,
		"accepted": task is not None,
		"busy": view.busy,
		"transcript": view.transcript.to_dict(),
	}
