"""
Mood to palette and mood to playlist lookups.

Both lookups try an exact match on the lower-cased mood, then the first table
key that is contained in the mood (or contains it), then a fixed default.
"""

from typing import TypeVar

T = TypeVar("T")

MOOD_COLORS: dict[str, list[str]] = {
    "happy": ["#FFA726", "#66BB6A", "#42A5F5", "#FFEB3B"],
    "peaceful": ["#81C784", "#64B5F6", "#A5D6A7", "#E1F5FE"],
    "excited": ["#FF7043", "#FFA726", "#FFCA28", "#EC407A"],
    "sad": ["#90A4AE", "#78909C", "#B0BEC5", "#CFD8DC"],
    "angry": ["#E53935", "#FF5722", "#F44336", "#D32F2F"],
    "anxious": ["#9E9E9E", "#78909C", "#546E7A", "#607D8B"],
    "motivated": ["#4CAF50", "#2196F3", "#FF9800", "#9C27B0"],
    "creative": ["#9C27B0", "#E91E63", "#FF5722", "#607D8B"],
    "nostalgic": ["#8D6E63", "#A1887F", "#BCAAA4", "#D7CCC8"],
    "dreamy": ["#CE93D8", "#F8BBD9", "#C5CAE9", "#DCEDC8"],
}

DEFAULT_COLORS = ["#42A5F5", "#66BB6A", "#FFA726", "#AB47BC"]

# Spotify playlist ids
MOOD_PLAYLISTS: dict[str, str] = {
    "happy": "37i9dQZF1DX0XUsuxWHRQd",
    "peaceful": "37i9dQZF1DWZqd5JICZI0u",
    "excited": "37i9dQZF1DX32NsLKyzScr",
    "sad": "37i9dQZF1DX3YSRoSdA634",
    "motivated": "37i9dQZF1DXdxcBWuJkbcy",
    "creative": "37i9dQZF1DX0SM0LYsmbMT",
    "nostalgic": "37i9dQZF1DX1s9knjP51Oa",
    "dreamy": "37i9dQZF1DX3Sp0P28SIer",
}

DEFAULT_PLAYLIST = "37i9dQZF1DX0XUsuxWHRQd"


def _lookup(table: dict[str, T], mood: str) -> T | None:
    """Find the table entry for a mood by exact key, then by substring."""
    lower_mood = mood.lower()
    if lower_mood in table:
        return table[lower_mood]

    # Dict order is insertion order, so the first listed key wins
    for key, value in table.items():
        if key in lower_mood or lower_mood in key:
            return value

    return None


def colors_for_mood(mood: str) -> list[str]:
    """Return the hex palette for a mood, never empty."""
    colors = _lookup(MOOD_COLORS, mood)
    return list(colors if colors is not None else DEFAULT_COLORS)


def playlist_for_mood(mood: str) -> str:
    """Return the playlist id for a mood, falling back to the default playlist."""
    playlist_id = _lookup(MOOD_PLAYLISTS, mood)
    return playlist_id if playlist_id is not None else DEFAULT_PLAYLIST
