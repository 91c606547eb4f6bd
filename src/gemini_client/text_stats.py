"""Word statistics for free text."""

from __future__ import annotations

from typing import Any

from gemini_client.models.text_stats import TextStats


def analyze_text_stats(text: Any) -> TextStats:
    """
    Count whitespace-separated words, characters, and distinct words ignoring case.
    Anything other than a string is analyzed as empty text.
    """
    source = text if isinstance(text, str) else ""
    words = source.split()
    return TextStats(
        word_count=len(words),
        character_count=len(source),
        unique_word_count=len({word.lower() for word in words}),
    )
