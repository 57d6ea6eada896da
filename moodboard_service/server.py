"""
FastAPI server for the Moodboard service.

This module implements the HTTP API for generating moodboards, looking them up
by share id, and guessing a mood from an uploaded image. Handlers orchestrate
the external-service adapters, the mood mappers and the moodboard store.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from .config import Settings
from .hints import mood_from_image_stats
from .logging_config import configure_logging
from .mappings import colors_for_mood, playlist_for_mood
from .models import (
    AnalyzeMoodRequest,
    AnalyzeMoodResponse,
    GenerateMoodboardRequest,
    Moodboard,
)
from .services import Services
from .store import InMemoryMoodboardStore, MoodboardStore, generate_share_id

logger = logging.getLogger(__name__)


def create_app(
    store: MoodboardStore | None = None, services: Services | None = None
) -> FastAPI:
    """
    Create a FastAPI application with the given store and service adapters.

    Args:
        store: Moodboard backend (defaults to a fresh in-memory store)
        services: External-service adapters (defaults to ones built from
            the environment, whose HTTP client is closed on shutdown)

    Returns:
        Configured FastAPI application
    """
    moodboard_store = store if store is not None else InMemoryMoodboardStore()
    owns_services = services is None
    adapters = services if services is not None else Services.from_settings(
        Settings.from_env()
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Lifespan context manager for FastAPI application."""
        yield
        # Callers that pass in services keep ownership of their HTTP client
        if owns_services:
            await adapters.aclose()

    app = FastAPI(
        title="Moodboard Service",
        description="Turns a mood into a shareable moodboard",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "moodboard-service"}

    @app.post("/api/moodboards", response_model_exclude_none=True)
    async def generate_moodboard(request: GenerateMoodboardRequest) -> Moodboard:
        """
        Generate and store a moodboard for a mood.

        Images and quote are produced concurrently; colors and playlist come
        from the local mood tables.

        Returns:
            The stored moodboard
        """
        mood = request.mood
        try:
            images, quote = await adapters.gather_content(mood)
            moodboard = await moodboard_store.create(
                mood=mood,
                quote=quote,
                images=images,
                colors=colors_for_mood(mood),
                playlist_id=playlist_for_mood(mood),
                share_id=generate_share_id(),
            )
        except Exception:
            logger.exception("Error generating moodboard for mood %r", mood)
            raise HTTPException(status_code=500, detail="Failed to generate moodboard")

        logger.info(
            "Created moodboard %d (%s) for mood %r",
            moodboard.id,
            moodboard.share_id,
            mood,
        )
        return moodboard

    @app.post("/api/analyze-mood")
    async def analyze_mood(request: AnalyzeMoodRequest) -> AnalyzeMoodResponse:
        """
        Detect the dominant mood of a base64 encoded image.

        When the client sends pixel statistics, the heuristic guess is logged
        next to the detected mood as a diagnostic; it does not change the
        response.

        Returns:
            A single lower-case mood word
        """
        try:
            mood = await adapters.classifier.classify(request.image)
        except Exception:
            logger.exception("Error analyzing mood from image")
            raise HTTPException(
                status_code=500, detail="Failed to analyze mood from image"
            )

        if request.cv_analysis is not None:
            logger.info(
                "Image mood %r (pixel statistics suggest %r)",
                mood,
                mood_from_image_stats(request.cv_analysis),
            )
        return AnalyzeMoodResponse(mood=mood)

    @app.get("/api/moodboards/{share_id}", response_model_exclude_none=True)
    async def get_moodboard(share_id: str) -> Moodboard:
        """Look up a moodboard by its share id."""
        moodboard = await moodboard_store.get_by_share_id(share_id)
        if moodboard is None:
            raise HTTPException(status_code=404, detail="Moodboard not found")
        return moodboard

    return app


settings = Settings.from_env()

# Default app instance used by ``uvicorn moodboard_service.server:app``
app = create_app(InMemoryMoodboardStore())


def main() -> None:
    """Main entry point for the server."""
    import uvicorn

    configure_logging(settings.log_level)
    uvicorn.run(
        "moodboard_service.server:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
