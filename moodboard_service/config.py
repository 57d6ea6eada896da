"""
Runtime configuration for the Moodboard service.

Credentials for the external services are optional: a missing key selects
that component's fallback output instead of failing at startup.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_MODEL = "gpt-4o"


def _first_env(*names: str) -> str | None:
    """Return the first non-empty value among the named environment variables."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


class Settings(BaseModel):
    """Configuration values for the service and its external collaborators."""

    text_service_key: str | None = Field(
        None, description="OpenAI key used for quote generation"
    )
    vision_service_key: str | None = Field(
        None, description="OpenAI key used for image mood classification"
    )
    image_service_key: str | None = Field(
        None, description="Unsplash access key used for image search"
    )
    openai_model: str = DEFAULT_MODEL
    http_timeout: float = Field(30.0, gt=0)
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables, after loading a ``.env`` file.

        Returns:
            Settings populated from the process environment
        """
        load_dotenv()

        text_key = _first_env("OPENAI_API_KEY", "OPENAI_API_KEY_ENV_VAR")
        values: dict[str, object] = {
            "text_service_key": text_key,
            "vision_service_key": _first_env("OPENAI_VISION_API_KEY") or text_key,
            "image_service_key": _first_env("UNSPLASH_ACCESS_KEY", "UNSPLASH_API_KEY"),
        }

        optional = {
            "openai_model": "MOODBOARD_MODEL",
            "http_timeout": "MOODBOARD_HTTP_TIMEOUT",
            "host": "MOODBOARD_HOST",
            "port": "MOODBOARD_PORT",
            "log_level": "LOG_LEVEL",
        }
        for field_name, env_name in optional.items():
            value = os.getenv(env_name)
            if value:
                values[field_name] = value

        return cls.model_validate(values)
