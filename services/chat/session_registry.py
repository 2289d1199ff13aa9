"""In-memory registry of one long-lived conversation per persona."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable

from services.chat.personas import Persona, PersonaConfig
from services.provider import ConversationHandle, GenAIProvider

LOGGER = logging.getLogger(__name__)


class SessionRegistry:
	"""Create each persona's conversation on first use and reuse it afterwards.

	Handles live as long as the registry. There is no eviction or reset, so a
	persona's context keeps accumulating across views.
	"""

	def __init__(self, provider: GenAIProvider, personas: Dict[Persona, PersonaConfig]) -> None:
		self.provider = provider
		self._personas = dict(personas)
		self._handles: Dict[Persona, ConversationHandle] = {}
		self._lock = asyncio.Lock()

	async def get_or_create(self, persona: Persona) -> ConversationHandle:
		"""Return the persona's conversation, creating it on the first call.

		Provider errors during creation propagate to the caller and nothing is
		cached, so the next call tries again.
		"""
		handle = self._handles.get(persona)
		if handle is not None:
			return handle
		config = self.config(persona)
		async with self._lock:
			handle = self._handles.get(persona)
			if handle is None:
				handle = await self.provider.create_conversation(config.model, config.system_instruction)
				self._handles[persona] = handle
				LOGGER.info("Created %s conversation", persona.value)
		return handle

	def config(self, persona: Persona) -> PersonaConfig:
		"""Return the fixed configuration for a persona or raise KeyError."""
		config = self._personas.get(persona)
		if config is None:
			raise KeyError(f"Persona {persona} is not configured")
		return config

	def has(self, persona: Persona) -> bool:
		"""True once the persona's conversation has been created."""
		return persona in self._handles

	def active(self) -> Iterable[Persona]:
		return [persona for persona in self._personas if persona in self._handles]
