"""
Shared data models for the Moodboard service.

This module defines the domain record and the API payloads used across
multiple layers of the application (store, HTTP API, CLI). Attributes are
snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

MoodLabel = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)
]


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Moodboard(CamelModel):
    """A generated moodboard. Never modified once stored."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Sequential identifier assigned by the store")
    mood: str = Field(..., description="The mood label the board was built for")
    quote: str = Field(..., description="Generated or fallback quote")
    images: tuple[str, ...] = Field(..., description="Image URLs, in display order")
    colors: tuple[str, ...] = Field(..., description="Hex color palette")
    playlist_id: str | None = Field(None, description="External playlist reference")
    share_id: str = Field(..., description="Public lookup token")
    created_at: datetime = Field(..., description="Creation time (UTC)")


class GenerateMoodboardRequest(CamelModel):
    """Payload for moodboard generation requests."""

    mood: MoodLabel = Field(..., description="Free-text mood, 1-100 characters")


class ImageStats(CamelModel):
    """Pixel statistics computed by the client before upload."""

    avg_brightness: float
    contrast: float
    edge_intensity: float
    face_detected: bool


class AnalyzeMoodRequest(CamelModel):
    """Payload for image mood analysis requests."""

    image: str = Field(..., min_length=1, description="Base64 encoded image")
    cv_analysis: ImageStats | None = Field(
        None, description="Optional pixel statistics from the client"
    )


class AnalyzeMoodResponse(BaseModel):
    """Response model for image mood analysis."""

    mood: str = Field(..., description="Single lower-case mood word")
