"""
Shared pytest fixtures for the caddy service tests.

Provides:
- A scripted FakeProvider standing in for the OpenAI backend
- Persona, registry, and chat view fixtures
- A FastAPI app wired with the fake provider (no network, no API key)
"""

import asyncio
import io
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import pytest
from PIL import Image

from main import create_app, wire_services
from models.chat_models import ImageRef
from services.chat.personas import build_personas
from services.chat.session_registry import SessionRegistry
from services.chat.view_store import ViewStore
from services.provider import ConversationHandle, GenAIProvider
from utils.settings import Settings

TEST_SETTINGS = Settings(openai_api_key="sk-test", chat_model="chat-test", analysis_model="vision-test")


class FakeConversation(ConversationHandle):
    pass


class FakeProvider(GenAIProvider):
    """Records every call and replays scripted replies.

    - `fragments`: streamed reply pieces
    - `fail_create` / `fail_multimodal`: raise on those calls
    - `fail_stream_after`: raise after yielding this many fragments
    - `gate`: when set, streaming waits on it before the first fragment
    """

    def __init__(self, fragments: Optional[List[str]] = None, reply: str = "Great extension at the top.") -> None:
        self.fragments = list(fragments if fragments is not None else ["Keep ", "your head ", "still."])
        self.reply = reply
        self.fail_create = False
        self.fail_multimodal = False
        self.fail_stream_after: Optional[int] = None
        self.gate: Optional[asyncio.Event] = None
        self.created: List[FakeConversation] = []
        self.streamed: List[tuple] = []
        self.closed_streams = 0
        self.multimodal_calls: List[Dict[str, Any]] = []
        self.image_calls: List[Dict[str, Any]] = []
        self.structured_calls: List[Dict[str, Any]] = []
        self.image_b64: Optional[str] = "aW1hZ2U="
        self.structured_payload: Any = {
            "courses": [
                {"name": "Torrey Pines South", "description": "Clifftop championship golf.", "features": ["ocean views"]},
            ]
        }
        self.structured_error: Optional[Exception] = None
        self.image_error: Optional[Exception] = None

    async def create_conversation(self, model: str, system_instruction: str) -> ConversationHandle:
        if self.fail_create:
            raise ConnectionError("provider unreachable")
        handle = FakeConversation(model, system_instruction)
        self.created.append(handle)
        return handle

    async def send_and_stream(self, handle: ConversationHandle, text: str):
        self.streamed.append((handle, text))
        try:
            if self.gate is not None:
                await self.gate.wait()
            for count, fragment in enumerate(self.fragments):
                if self.fail_stream_after is not None and count >= self.fail_stream_after:
                    raise ConnectionError("stream dropped")
                await asyncio.sleep(0)
                yield fragment
            if self.fail_stream_after is not None and self.fail_stream_after >= len(self.fragments):
                raise ConnectionError("stream dropped")
        finally:
            self.closed_streams += 1

    async def send_multimodal(self, model, instruction, user_text, image_b64, mime_type) -> str:
        self.multimodal_calls.append(
            {
                "model": model,
                "instruction": instruction,
                "user_text": user_text,
                "image_b64": image_b64,
                "mime_type": mime_type,
            }
        )
        await asyncio.sleep(0)
        if self.fail_multimodal:
            raise ConnectionError("vision request failed")
        return self.reply

    async def generate_image(self, model, prompt, config):
        self.image_calls.append({"model": model, "prompt": prompt, "config": config})
        if self.image_error is not None:
            raise self.image_error
        return self.image_b64

    async def find_structured(self, model, prompt, schema, name):
        self.structured_calls.append({"model": model, "prompt": prompt, "schema": schema, "name": name})
        if self.structured_error is not None:
            raise self.structured_error
        return self.structured_payload


def make_png(size=(320, 240), color=(34, 139, 34)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def personas():
    return build_personas(TEST_SETTINGS.chat_model)


@pytest.fixture
def registry(provider, personas) -> SessionRegistry:
    return SessionRegistry(provider, personas)


@pytest.fixture
def view_store(registry) -> ViewStore:
    return ViewStore(registry, analysis_model=TEST_SETTINGS.analysis_model)


@pytest.fixture
def jpeg_ref() -> ImageRef:
    return ImageRef(data=b"\xff\xd8\xff\xe0fake-jpeg-bytes", mime_type="image/jpeg", filename="backswing.jpg")


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def app(provider):
    """FastAPI app whose lifespan wires the fake provider instead of OpenAI."""

    @asynccontextmanager
    async def fake_lifespan(app):
        wire_services(app, provider, TEST_SETTINGS)
        yield

    return create_app(lifespan_handler=fake_lifespan)
