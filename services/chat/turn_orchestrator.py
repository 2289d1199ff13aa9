"""Submit user turns and fold the assistant's reply into the transcript.

A submission runs in one of two modes:

- An attached image is analyzed with one stateless multimodal request, and
  the whole reply lands as a single assistant turn.
- Plain text goes through the persona's long-lived conversation. The reply
  streams back as fragments that grow an assistant placeholder in place
  until the stream ends.

Any failure on the way is caught here and replaces the reply with a fixed
apology, so the view is always left ready for the next submission.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from typing import Any, Awaitable, Callable, Dict, Optional

from models.chat_models import ImageRef, Transcript, Turn
from services.chat.personas import FALLBACK_MESSAGE, SWING_ANALYSIS_PROMPT, PersonaConfig
from services.chat.session_registry import SessionRegistry
from services.provider import GenAIProvider
from utils.media_validation import encode_image

LOGGER = logging.getLogger(__name__)

Listener = Callable[[Dict[str, Any]], Awaitable[None]]


class StreamCursor:
    """Accumulate streamed fragments into the transcript's trailing placeholder."""

    def __init__(self, transcript: Transcript) -> None:
        self.transcript = transcript
        transcript.begin_assistant()
        self.index = len(transcript) - 1
        self.text = ""

    def fold(self, fragment: str) -> str:
        self.text += fragment
        self.transcript.replace_last(self.text)
        return self.text

    def finalize(self) -> Turn:
        return self.transcript.finalize_last()

    def abort(self, message: str) -> Turn:
        return self.transcript.abort_last(message)


class TurnOrchestrator:
    """Single entry point for submitting turns to one transcript.

    Only one submission is in flight at a time. A call made while busy, or
    one with neither text nor an image, is ignored without touching the
    transcript.
    """

    def __init__(
        self,
        config: PersonaConfig,
        registry: SessionRegistry,
        provider: GenAIProvider,
        transcript: Transcript,
        *,
        analysis_model: str,
        listener: Optional[Listener] = None,
    ) -> None:
        self.config = config
        self.registry = registry
        self.provider = provider
        self.transcript = transcript
        self.analysis_model = analysis_model
        self.listener = listener
        self._busy = False
        self._task: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self._busy

    def submit(self, text: str, attachment: Optional[ImageRef] = None) -> Optional[asyncio.Task]:
        """Start a submission in the background.

        Returns the scheduled task, or None when the submission was rejected.
        """
        loop = asyncio.get_running_loop()
        cleaned = self._accept(text, attachment)
        if cleaned is None:
            return None
        self._task = loop.create_task(self._respond(cleaned, attachment))
        return self._task

    async def send(self, text: str, attachment: Optional[ImageRef] = None) -> bool:
        """Run a submission to completion. Returns False if it was rejected."""
        cleaned = self._accept(text, attachment)
        if cleaned is None:
            return False
        await self._respond(cleaned, attachment)
        return True

    def _accept(self, text: str, attachment: Optional[ImageRef]) -> Optional[str]:
        cleaned = (text or "").strip()
        if not cleaned and attachment is None:
            return None
        if self._busy:
            LOGGER.info("Ignoring %s submission while a reply is in flight", self.config.persona.value)
            return None
        self._busy = True
        self.transcript.append_user(cleaned, attachment)
        return cleaned

    async def _respond(self, text: str, attachment: Optional[ImageRef]) -> None:
        cursor: Optional[StreamCursor] = None
        try:
            await self._emit({"type": "chat.busy", "busy": True})
            await self._emit_turn("turn.appended", len(self.transcript) - 1)

            if attachment is not None:
                reply = await self._analyze(text, attachment)
                self.transcript.append_assistant(reply)
                await self._emit_turn("turn.appended", len(self.transcript) - 1)
                return

            handle = await self.registry.get_or_create(self.config.persona)
            cursor = StreamCursor(self.transcript)
            await self._emit_turn("turn.appended", cursor.index)
            async with aclosing(self.provider.send_and_stream(handle, text)) as fragments:
                async for fragment in fragments:
                    if not fragment:
                        continue
                    cursor.fold(fragment)
                    await self._emit({"type": "turn.delta", "index": cursor.index, "delta": fragment, "text": cursor.text})
            cursor.finalize()
            await self._emit_turn("turn.finalized", cursor.index)
        except Exception:
            LOGGER.exception("Failed to get a %s reply", self.config.persona.value)
            if cursor is not None and self.transcript.in_progress:
                cursor.abort(FALLBACK_MESSAGE)
                await self._emit_turn("turn.finalized", cursor.index)
            else:
                self.transcript.append_assistant(FALLBACK_MESSAGE)
                await self._emit_turn("turn.appended", len(self.transcript) - 1)
        finally:
            if cursor is not None and self.transcript.in_progress:
                cursor.abort(FALLBACK_MESSAGE)
            self._busy = False
            await self._emit({"type": "chat.busy", "busy": False})

    async def _analyze(self, text: str, attachment: ImageRef) -> str:
        image_b64, mime_type = encode_image(attachment)
        return await self.provider.send_multimodal(
            self.analysis_model,
            SWING_ANALYSIS_PROMPT,
            text,
            image_b64,
            mime_type,
        )

    async def _emit_turn(self, event_type: str, index: int) -> None:
        await self._emit({"type": event_type, "index": index, "turn": self.transcript[index].to_dict()})

    async def _emit(self, event: Dict[str, Any]) -> None:
        # A failing listener must not turn a delivered reply into the fallback.
        if self.listener is None:
            return
        try:
            await self.listener(event)
        except Exception:
            LOGGER.exception("Listener failed on %s event", event.get("type"))
