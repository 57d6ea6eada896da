"""
Command-line interface tools for the Moodboard service.
"""

import asyncio
import base64
import json
from collections.abc import Coroutine
from pathlib import Path
from typing import Any
from urllib.parse import quote

import httpx
import typer

from .models import Moodboard

DEFAULT_BASE_URL = "http://localhost:8000"
SPOTIFY_PLAYLIST_URL = "https://open.spotify.com/playlist/{playlist_id}"

app = typer.Typer(help="Moodboard Service CLI tools")


# MARK: - CLI Entry Points


def cli_generate() -> None:
    """Entry point for moodboard-generate CLI command."""
    typer.run(generate)


def cli_get() -> None:
    """Entry point for moodboard-get CLI command."""
    typer.run(get)


def cli_analyze() -> None:
    """Entry point for moodboard-analyze CLI command."""
    typer.run(analyze)


# MARK: - Commands


@app.command()
def generate(
    mood: str = typer.Argument(..., help="The mood to build a moodboard for"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Moodboard service"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Generate a new moodboard and print it."""

    async def _generate() -> None:
        async with httpx.AsyncClient(timeout=60.0) as client:
            response = await client.post(
                f"{base_url}/api/moodboards", json={"mood": mood}
            )
            response.raise_for_status()
            _print_moodboard(response.json(), json_output)

    _run_with_error_handling(_generate(), base_url)


@app.command()
def get(
    share_id: str = typer.Argument(..., help="Share id of the moodboard"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Moodboard service"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Fetch a shared moodboard."""

    async def _get() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.get(base_url + moodboard_path(share_id))
            if response.status_code == 404:
                print(f"No moodboard with share id {share_id}")
                raise typer.Exit(1)
            response.raise_for_status()
            _print_moodboard(response.json(), json_output)

    _run_with_error_handling(_get(), base_url)


@app.command()
def analyze(
    image_path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Image file to analyze"
    ),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Moodboard service"
    ),
) -> None:
    """Detect the mood of an image file."""
    image = base64.b64encode(image_path.read_bytes()).decode("ascii")

    async def _analyze() -> None:
        async with httpx.AsyncClient(timeout=60.0) as client:
            response = await client.post(
                f"{base_url}/api/analyze-mood", json={"image": image}
            )
            response.raise_for_status()
            print(response.json()["mood"])

    _run_with_error_handling(_analyze(), base_url)


# MARK: - Private Helpers


def moodboard_path(share_id: str) -> str:
    """Return the API path for a share id, escaped as a single path segment."""
    return f"/api/moodboards/{quote(share_id, safe='')}"


def format_moodboard(moodboard: Moodboard) -> str:
    """Render a moodboard as plain text."""
    lines = [
        f"{moodboard.mood} ({moodboard.share_id})",
        f"  {moodboard.quote}",
        f"  colors: {' '.join(moodboard.colors)}",
    ]
    if moodboard.playlist_id:
        playlist = SPOTIFY_PLAYLIST_URL.format(playlist_id=moodboard.playlist_id)
        lines.append(f"  playlist: {playlist}")
    lines.extend(f"  image: {url}" for url in moodboard.images)
    return "\n".join(lines)


def _print_moodboard(data: dict[str, Any], json_output: bool) -> None:
    """Print a moodboard payload as JSON or as formatted text."""
    if json_output:
        print(json.dumps(data, indent=2))
        return
    print(format_moodboard(Moodboard.model_validate(data)))


def _run_with_error_handling(coro: Coroutine[Any, Any, Any], base_url: str) -> None:
    """Run an async coroutine with standardized error handling."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except typer.Exit:
        raise
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        print(f"Error: HTTP {e.response.status_code}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
