"""Boundary between the coaching features and a generative-AI backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Dict, Optional


class ConversationHandle:
    """Opaque, persona-scoped reference to a server-side conversation.

    Providers subclass this to carry whatever they need to keep context
    between turns. Callers treat it as a token and never inspect it.
    """

    def __init__(self, model: str, system_instruction: str) -> None:
        self.model = model
        self.system_instruction = system_instruction


class GenAIProvider(ABC):
    """Operations the application needs from a generative-AI API."""

    @abstractmethod
    async def create_conversation(self, model: str, system_instruction: str) -> ConversationHandle:
        """Open a conversation that keeps context across turns."""

    @abstractmethod
    def send_and_stream(self, handle: ConversationHandle, text: str) -> AsyncIterator[str]:
        """Send one user message and yield the reply as text fragments.

        The returned iterator is finite and forward-only; every fragment is
        delivered once, in order.
        """

    @abstractmethod
    async def send_multimodal(
        self,
        model: str,
        instruction: str,
        user_text: str,
        image_b64: str,
        mime_type: str,
    ) -> str:
        """Return the full reply to a single stateless image request."""

    @abstractmethod
    async def generate_image(self, model: str, prompt: str, config: Dict[str, Any]) -> Optional[str]:
        """Return base64 image bytes for the prompt, or None if nothing was generated."""

    @abstractmethod
    async def find_structured(self, model: str, prompt: str, schema: Dict[str, Any], name: str) -> Any:
        """Return the parsed JSON reply constrained by a JSON schema."""
