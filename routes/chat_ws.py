"""WebSocket endpoint for streamed coaching chats."""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, HTTPException, WebSocket
from starlette.websockets import WebSocketDisconnect

from services.chat.personas import parse_persona
from services.chat.view_store import ViewStore
from services.chat.ws_chat import ChatSocketHandler

router = APIRouter()


def _require_view_store(websocket: WebSocket) -> ViewStore:
	store = getattr(websocket.app.state, "view_store", None)
	if store is None:
		raise HTTPException(status_code=500, detail="Chat views unavailable")
	return store


@router.websocket("/ws/chat/{persona}")
async def chat_socket(websocket: WebSocket, persona: str, store: ViewStore = Depends(_require_view_store)):
	"""Mount a chat view for the connection and stream its transcript updates."""
	await websocket.accept()
	try:
		selected = parse_persona(persona)
	except ValueError as exc:
		await websocket.send_text(json.dumps({"type": "error", "detail": str(exc)}))
		await websocket.close()
		return

	handler = ChatSocketHandler(store, websocket)
	await handler.mount(selected)
	try:
		while True:
			try:
				raw = await websocket.receive_text()
			except WebSocketDisconnect:
				break
			try:
				payload = json.loads(raw)
			except json.JSONDecodeError:
				await websocket.send_text(json.dumps({"type": "error", "detail": "Payload must be JSON"}))
				continue
			if not isinstance(payload, dict):
				await websocket.send_text(json.dumps({"type": "error", "detail": "Payload must be a JSON object"}))
				continue
			await handler.handle(payload)
	finally:
		handler.unmount()
