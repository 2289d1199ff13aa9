"""Simple in-memory store for mounted chat views."""

from __future__ import annotations

from typing import Dict, Optional
from uuid import uuid4

from services.chat.chat_view import ChatView
from services.chat.personas import Persona
from services.chat.session_registry import SessionRegistry
from services.chat.turn_orchestrator import Listener


class ViewStore:
	"""Mount, look up, and unmount chat views.

	Views share the registry, so every coach view talks to the same coach
	conversation while keeping its own transcript.
	"""

	def __init__(self, registry: SessionRegistry, *, analysis_model: str) -> None:
		self.registry = registry
		self.analysis_model = analysis_model
		self._views: Dict[str, ChatView] = {}

	def __len__(self) -> int:
		return len(self._views)

	def create(self, persona: Persona, listener: Optional[Listener] = None) -> ChatView:
		"""Mount a new view for the persona and return it."""
		view_id = uuid4().hex
		view = ChatView(
			view_id,
			self.registry.config(persona),
			self.registry,
			self.registry.provider,
			analysis_model=self.analysis_model,
			listener=listener,
		)
		self._views[view_id] = view
		return view

	def get(self, view_id: str) -> ChatView:
		"""Return a view or raise KeyError if missing."""
		view = self._views.get(view_id)
		if view is None:
			raise KeyError(f"View {view_id} not found")
		return view

	def close(self, view_id: str) -> ChatView:
		"""Unmount a view; its transcript is discarded."""
		view = self.get(view_id)
		del self._views[view_id]
		return view
