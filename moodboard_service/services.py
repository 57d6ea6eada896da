"""
Adapters for the external services a moodboard is composed from.

Every adapter absorbs its own failures: a missing credential, a network error,
a non-success status or a malformed response is logged and replaced by a fixed
fallback value, so callers never see an exception from these methods.
"""

import asyncio
import logging
import re
from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from .config import DEFAULT_MODEL, Settings

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MOOD = "peaceful"

UNSPLASH_SEARCH_URL = "https://api.unsplash.com/search/photos"
IMAGES_PER_BOARD = 4
FALLBACK_IMAGES = [
    "https://images.unsplash.com/photo-1506905925346-21bda4d32df4?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&h=600",
    "https://images.unsplash.com/photo-1441974231531-c6227db76b6e?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&h=600",
    "https://images.unsplash.com/photo-1481627834876-b7833e8f5570?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&h=600",
    "https://images.unsplash.com/photo-1495474472287-4d71bcdd2085?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&h=600",
]

QUOTE_SYSTEM_PROMPT = (
    "You are a wise and inspirational quote generator. Create meaningful, "
    "uplifting quotes that resonate with the given mood. Keep quotes between "
    "10-25 words and make them emotionally resonant."
)
QUOTE_USER_PROMPT = (
    "Generate an inspiring quote about feeling {mood}. The quote should be "
    "meaningful and emotionally resonant."
)

VISION_SYSTEM_PROMPT = (
    "You are an expert at analyzing emotions and moods from images. Look at "
    "facial expressions, body language, colors, lighting, and overall "
    "atmosphere. Respond with a single word that best describes the person's "
    "mood or the emotional tone of the image. Use words like: happy, sad, "
    "excited, peaceful, anxious, motivated, dreamy, nostalgic, creative, "
    "angry, etc."
)
VISION_USER_PROMPT = (
    "Analyze this image and tell me what mood or emotion it conveys. Respond "
    "with just one descriptive word that captures the primary mood."
)

_NON_ALPHA = re.compile(r"[^a-z]")


def fallback_quote(mood: str) -> str:
    """Return the templated quote used when generation is unavailable."""
    return f"Every {mood} moment is a step toward growth and self-discovery."


def _openai_client(
    api_key: str | None, http_client: httpx.AsyncClient, timeout: float
) -> AsyncOpenAI | None:
    """Build an OpenAI client over the shared HTTP client, or None without a key."""
    if not api_key:
        return None
    # No retry policy: a failed call falls back immediately
    return AsyncOpenAI(
        api_key=api_key, http_client=http_client, max_retries=0, timeout=timeout
    )


class QuoteGenerator:
    """Generates a short inspirational quote for a mood."""

    def __init__(
        self,
        api_key: str | None,
        http_client: httpx.AsyncClient,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
    ) -> None:
        self._client = _openai_client(api_key, http_client, timeout)
        self._model = model

    async def generate(self, mood: str) -> str:
        """
        Ask the text-generation service for a quote about ``mood``.

        Returns:
            The generated quote, or the fallback template on any failure
        """
        if self._client is None:
            logger.warning("Quote generation disabled: no API key configured")
            return fallback_quote(mood)

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": QUOTE_SYSTEM_PROMPT},
                    {"role": "user", "content": QUOTE_USER_PROMPT.format(mood=mood)},
                ],
                max_tokens=100,
                temperature=0.8,
            )
            content = (response.choices[0].message.content or "").strip()
        except Exception:
            logger.exception("Error generating quote for mood %r", mood)
            return fallback_quote(mood)

        return content or fallback_quote(mood)


class MoodClassifier:
    """Names the dominant mood of an image in one word."""

    def __init__(
        self,
        api_key: str | None,
        http_client: httpx.AsyncClient,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
    ) -> None:
        self._client = _openai_client(api_key, http_client, timeout)
        self._model = model

    @staticmethod
    def _image_url(image: str) -> str:
        """Wrap bare base64 data in a JPEG data URL."""
        if image.startswith("data:"):
            return image
        return f"data:image/jpeg;base64,{image}"

    @staticmethod
    def clean_label(text: str) -> str:
        """Reduce a model reply to its first word, lower-case letters only."""
        words = text.strip().lower().split()
        if not words:
            return ""
        return _NON_ALPHA.sub("", words[0])

    async def classify(self, image: str) -> str:
        """
        Ask the vision service for the mood of a base64 encoded image.

        The label is not checked against the known mood vocabulary; the
        mappers handle unknown words.

        Returns:
            A lower-case alphabetic word, ``"peaceful"`` on any failure
        """
        if self._client is None:
            logger.warning("Image mood analysis disabled: no API key configured")
            return DEFAULT_IMAGE_MOOD

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": VISION_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": VISION_USER_PROMPT},
                            {
                                "type": "image_url",
                                "image_url": {"url": self._image_url(image)},
                            },
                        ],
                    },
                ],
                max_tokens=10,
                temperature=0.3,
            )
            label = self.clean_label(response.choices[0].message.content or "")
        except Exception:
            logger.exception("Error analyzing mood from image")
            return DEFAULT_IMAGE_MOOD

        return label or DEFAULT_IMAGE_MOOD


class ImageFetcher:
    """Searches the image service for landscape photos matching a mood."""

    def __init__(self, access_key: str | None, http_client: httpx.AsyncClient) -> None:
        self._access_key = access_key
        self._http = http_client

    async def fetch(self, mood: str) -> list[str]:
        """
        Return exactly four image URLs for ``mood``.

        Short result lists are topped up from the placeholder set.
        """
        if not self._access_key:
            logger.warning("Image search disabled: no access key configured")
            return list(FALLBACK_IMAGES)

        try:
            response = await self._http.get(
                UNSPLASH_SEARCH_URL,
                params={
                    "query": mood,
                    "per_page": IMAGES_PER_BOARD,
                    "orientation": "landscape",
                },
                headers={"Authorization": f"Client-ID {self._access_key}"},
            )
            response.raise_for_status()
            urls = [photo["urls"]["regular"] for photo in response.json()["results"]]
        except Exception:
            logger.exception("Error fetching images for mood %r", mood)
            return list(FALLBACK_IMAGES)

        urls = urls[:IMAGES_PER_BOARD]
        if not urls:
            return list(FALLBACK_IMAGES)
        return urls + FALLBACK_IMAGES[len(urls) :]


@dataclass
class Services:
    """The external-service adapters, sharing one HTTP client."""

    quotes: QuoteGenerator
    images: ImageFetcher
    classifier: MoodClassifier
    http_client: httpx.AsyncClient

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient | None = None
    ) -> "Services":
        """
        Build all adapters from configuration.

        Args:
            settings: Credentials, model and timeout
            http_client: Optional client to route all outbound calls through

        Returns:
            Configured Services
        """
        client = http_client or httpx.AsyncClient(timeout=settings.http_timeout)
        return cls(
            quotes=QuoteGenerator(
                settings.text_service_key,
                client,
                model=settings.openai_model,
                timeout=settings.http_timeout,
            ),
            images=ImageFetcher(settings.image_service_key, client),
            classifier=MoodClassifier(
                settings.vision_service_key,
                client,
                model=settings.openai_model,
                timeout=settings.http_timeout,
            ),
            http_client=client,
        )

    async def gather_content(self, mood: str) -> tuple[list[str], str]:
        """Fetch images and generate the quote concurrently."""
        images, quote = await asyncio.gather(
            self.images.fetch(mood), self.quotes.generate(mood)
        )
        return images, quote

    async def aclose(self) -> None:
        """Close the shared HTTP client."""
        await self.http_client.aclose()
