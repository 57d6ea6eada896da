"""
Coarse mood guess from client-side pixel statistics.

The thresholds mirror the browser pre-processing step: bright, contrasty
images read as happy, dark flat ones as peaceful, busy ones as excited.
"""

from .models import ImageStats

DEFAULT_HINT = "peaceful"


def mood_from_image_stats(stats: ImageStats | None) -> str:
    """Map brightness, contrast and edge density to a mood label."""
    if stats is None:
        return DEFAULT_HINT

    if stats.avg_brightness > 150 and stats.contrast > 0.6:
        return "happy"

    if stats.avg_brightness < 80 and stats.contrast < 0.4:
        return "peaceful"

    if stats.edge_intensity > 0.4:
        return "excited"

    if 100 <= stats.avg_brightness <= 150:
        return "motivated"

    return DEFAULT_HINT
