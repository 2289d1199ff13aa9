"""Dream-hole image generation."""

import logging
from typing import Optional

from services.provider import GenAIProvider

LOGGER = logging.getLogger(__name__)

IMAGE_CONFIG = {"size": "1536x1024", "output_format": "jpeg"}


class HoleDesignError(RuntimeError):
    """Raised when the image backend fails to produce a hole design."""


def build_hole_prompt(prompt: str) -> str:
    return (
        f"A photorealistic image of a beautiful golf hole. {prompt}. "
        "Professional golf course photography, golden hour lighting, vibrant colors."
    )


class HoleDesigner:
    """Turn a short description into a generated golf-hole image."""

    def __init__(self, provider: GenAIProvider, model: str) -> None:
        if provider is None:
            raise ValueError("A generative-AI provider is required.")
        self.provider = provider
        self.model = model

    async def generate(self, prompt: str) -> Optional[str]:
        """Return a JPEG data URL, or None when the model produced nothing.

        Raises:
            ValueError: If the prompt is blank.
            HoleDesignError: If the image request fails.
        """
        description = (prompt or "").strip()
        if not description:
            raise ValueError("Please enter a description for your dream hole.")

        try:
            image_b64 = await self.provider.generate_image(self.model, build_hole_prompt(description), dict(IMAGE_CONFIG))
        except Exception as exc:
            LOGGER.error("Error generating hole image: %s", exc)
            raise HoleDesignError("Failed to generate the image. Please check the prompt and try again.") from exc

        if not image_b64:
            return None
        return f"data:image/jpeg;base64,{image_b64}"
