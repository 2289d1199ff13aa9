"""OpenAI implementation of the generative-AI provider boundary."""

import json
import logging
import time
from typing import Any, AsyncIterator, Dict, Optional

from openai import AsyncOpenAI

from services.openai.media_inputs import build_analysis_inputs
from services.openai.response_parser import extract_image_b64, extract_text, extract_usage
from services.provider import ConversationHandle, GenAIProvider

LOGGER = logging.getLogger(__name__)


class OpenAIConversation(ConversationHandle):
    """Conversation kept server-side by chaining `previous_response_id`."""

    def __init__(self, model: str, system_instruction: str) -> None:
        super().__init__(model, system_instruction)
        self.last_response_id: Optional[str] = None
        self.turns = 0


class OpenAIProvider(GenAIProvider):
    """Talk to the OpenAI Responses and Images APIs."""

    def __init__(self, client: AsyncOpenAI) -> None:
        if client is None:
            raise ValueError("OpenAI AsyncOpenAI client is required.")
        self.client = client

    async def create_conversation(self, model: str, system_instruction: str) -> ConversationHandle:
        LOGGER.info("Opening conversation on %s", model)
        return OpenAIConversation(model, system_instruction)

    async def send_and_stream(self, handle: ConversationHandle, text: str) -> AsyncIterator[str]:
        if not isinstance(handle, OpenAIConversation):
            raise TypeError("Conversation handle was not created by OpenAIProvider.")

        start = time.time()
        try:
            async with self.client.responses.stream(
                model=handle.model,
                instructions=handle.system_instruction,
                input=[{"type": "message", "role": "user", "content": [{"type": "input_text", "text": text}]}],
                previous_response_id=handle.last_response_id,
            ) as stream:
                async for event in stream:
                    if getattr(event, "type", None) == "response.output_text.delta" and event.delta:
                        yield event.delta
                response = await stream.get_final_response()
        except Exception as exc:
            LOGGER.error("OpenAI streaming error: %s", exc)
            raise

        # Only a completed reply becomes part of the server-side context.
        handle.last_response_id = getattr(response, "id", None)
        handle.turns += 1
        LOGGER.info(
            "Streamed reply in %.3fs (%s)",
            time.time() - start,
            extract_usage(response),
        )

    async def send_multimodal(
        self,
        model: str,
        instruction: str,
        user_text: str,
        image_b64: str,
        mime_type: str,
    ) -> str:
        inputs = build_analysis_inputs(instruction, user_text=user_text, image_b64=image_b64, mime_type=mime_type)
        try:
            response = await self.client.responses.create(model=model, input=inputs)
        except Exception as exc:
            LOGGER.error("Error during OpenAI image analysis: %s", exc)
            raise
        return extract_text(response)

    async def generate_image(self, model: str, prompt: str, config: Dict[str, Any]) -> Optional[str]:
        try:
            response = await self.client.images.generate(model=model, prompt=prompt, n=1, **config)
        except Exception as exc:
            LOGGER.error("OpenAI image generation error: %s", exc)
            raise
        return extract_image_b64(response)

    async def find_structured(self, model: str, prompt: str, schema: Dict[str, Any], name: str) -> Any:
        try:
            response = await self.client.responses.create(
                model=model,
                input=prompt,
                text={"format": {"type": "json_schema", "name": name, "schema": schema, "strict": True}},
            )
        except Exception as exc:
            LOGGER.error("OpenAI structured output error: %s", exc)
            raise

        raw = extract_text(response).strip()
        if not raw:
            return None
        return json.loads(raw)
