"""Dispatch chat websocket events to a mounted chat view."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from fastapi import WebSocket

from services.chat.chat_view import ChatView
from services.chat.personas import Persona
from services.chat.view_store import ViewStore
from utils.media_validation import build_image_ref, decode_base64_image

LOGGER = logging.getLogger(__name__)


class ChatSocketHandler:
	"""Route websocket messages for the chat view bound to one connection."""

	def __init__(self, store: ViewStore, websocket: WebSocket) -> None:
		self.store = store
		self.websocket = websocket
		self.view: Optional[ChatView] = None
		self._open = True

	async def mount(self, persona: Persona) -> ChatView:
		"""Create this connection's view and announce its transcript."""
		self.view = self.store.create(persona, listener=self._send)
		await self._send({"type": "view.mounted", **self.view.to_dict()})
		return self.view

	def unmount(self) -> None:
		self._open = False
		if self.view is not None:
			try:
				self.store.close(self.view.view_id)
			except KeyError:
				pass

	async def handle(self, payload: Dict[str, Any]) -> None:
		"""Process a single inbound websocket payload."""
		request_id = payload.get("request_id")
		message_type = payload.get("type")
		try:
			if self.view is None:
				raise RuntimeError("No chat view is mounted on this connection.")
			if message_type == "message.send":
				result = self._send_message(payload)
			elif message_type == "attachment.select":
				result = self._select_attachment(payload)
			elif message_type == "attachment.clear":
				self.view.clear_attachment()
				result = {"type": "attachment.cleared"}
			elif message_type == "transcript.get":
				result = {"type": "transcript", **self.view.to_dict()}
			else:
				raise ValueError("Unsupported message type.")
			result["request_id"] = request_id
			await self._send(result)
		except Exception as exc:
			await self._send_error(request_id, str(exc))

	def _send_message(self, payload: Dict[str, Any]) -> Dict[str, Any]:
		task = self.view.send(payload.get("text") or "")
		return {"type": "message.accepted", "accepted": task is not None, "busy": self.view.busy}

	def _select_attachment(self, payload: Dict[str, Any]) -> Dict[str, Any]:
		image_bytes = decode_base64_image(payload.get("image_b64") or "")
		image = build_image_ref(image_bytes, payload.get("mime_type") or "image/jpeg", payload.get("filename"))
		self.view.select_attachment(image)
		return {"type": "attachment.selected", "attachment": image.to_dict()}

	async def _send_error(self, request_id: Any, detail: str) -> None:
		await self._send({"type": "error", "request_id": request_id, "detail": detail})

	async def _send(self, payload: Dict[str, Any]) -> None:
		if not self._open:
			return
		try:
			await self.websocket.send_text(json.dumps(payload))
		except Exception as exc:
			# Client went away mid-reply; the turn still completes server-side.
			LOGGER.debug("Dropping chat event after send failure: %s", exc)
			self._open = False
