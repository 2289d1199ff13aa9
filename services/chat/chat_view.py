"""Server-side state of one mounted chat screen."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from models.chat_models import ImageRef, Transcript
from services.chat.personas import PersonaConfig
from services.chat.session_registry import SessionRegistry
from services.chat.turn_orchestrator import Listener, TurnOrchestrator
from services.provider import GenAIProvider


class ChatView:
    """Transcript, pending attachment, and orchestrator for one persona screen.

    The transcript starts with the persona's greeting and lives as long as the
    view. The pending attachment is released as soon as a submission that
    carries it is accepted, so the next turn can be composed while the reply
    is still streaming.
    """

    def __init__(
        self,
        view_id: str,
        config: PersonaConfig,
        registry: SessionRegistry,
        provider: GenAIProvider,
        *,
        analysis_model: str,
        listener: Optional[Listener] = None,
    ) -> None:
        self.view_id = view_id
        self.config = config
        self.transcript = Transcript()
        self.transcript.append_assistant(config.greeting)
        self.pending_attachment: Optional[ImageRef] = None
        self.orchestrator = TurnOrchestrator(
            config,
            registry,
            provider,
            self.transcript,
            analysis_model=analysis_model,
            listener=listener,
        )

    @property
    def busy(self) -> bool:
        return self.orchestrator.busy

    def select_attachment(self, image: ImageRef) -> None:
        if not self.config.accepts_images:
            raise ValueError(f"{self.config.display_name} does not accept image attachments.")
        self.pending_attachment = image

    def clear_attachment(self) -> None:
        self.pending_attachment = None

    def send(self, text: str) -> Optional[asyncio.Task]:
        """Submit the composed turn with any pending attachment."""
        task = self.orchestrator.submit(text, self.pending_attachment)
        if task is not None:
            self.pending_attachment = None
        return task

    def to_dict(self) -> Dict[str, Any]:
        return {
            "view_id": self.view_id,
            "persona": self.config.persona.value,
            "display_name": self.config.display_name,
            "accepts_images": self.config.accepts_images,
            "busy": self.busy,
            "pending_attachment": self.pending_attachment.to_dict() if self.pending_attachment else None,
            "transcript": self.transcript.to_dict(),
        }
