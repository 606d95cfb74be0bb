"""Semantic sentiment fusion."""

from moodwave.fusion.sentiment import SentimentFusion, SentimentScorer

__all__ = [
    "SentimentFusion",
    "SentimentScorer",
]
