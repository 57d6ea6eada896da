"""
Moodboard Service - turns a mood into a shareable moodboard.

This package provides a small web service that combines curated images, an
AI-generated quote, a color palette and a playlist reference for a mood, and
stores the result under a short share id.
"""

__version__ = "0.1.0"
