"""Environment-driven settings for the caddy service."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime configuration read once at startup.

    - OPENAI_API_KEY is required. `from_env` raises RuntimeError when missing.
    - Model ids default to the models the service was built against and can be
      overridden per deployment.
    """

    openai_api_key: str
    chat_model: str = "gpt-5-mini"
    analysis_model: str = "gpt-5"
    image_model: str = "gpt-image-1"
    log_level: str = "INFO"
    seed_sample_shots: bool = True

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from the process environment (and `.env` if present)."""
        if load_env_file:
            load_dotenv()

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key or not api_key.strip():
            raise RuntimeError("OPENAI_API_KEY environment variable is not set")

        return cls(
            openai_api_key=api_key.strip(),
            chat_model=os.getenv("CHAT_MODEL", cls.chat_model),
            analysis_model=os.getenv("ANALYSIS_MODEL", cls.analysis_model),
            image_model=os.getenv("IMAGE_MODEL", cls.image_model),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            seed_sample_shots=os.getenv("SEED_SAMPLE_SHOTS", "true").strip().lower() in _TRUTHY,
        )
