from __future__ import annotations

import random
import re

from .config import PREVIEW_LENGTH, UWU_ENDINGS, UWU_REPLACEMENTS

_SENTENCE_END = re.compile(r"[.!?]")


def uwuify(text: str, rng: random.Random | None = None) -> str:
    """Turn ``text`` into uwu speak, adding a random ending to every sentence."""
    rng = rng or random.Random()

    for old, new in UWU_REPLACEMENTS:
        text = text.replace(old, new)

    sentences = [sentence for sentence in _SENTENCE_END.split(text) if sentence]
    return ". ".join(
        sentence.strip() + rng.choice(UWU_ENDINGS) if sentence.strip() else sentence for sentence in sentences
    )


def preview(content: str | None, limit: int = PREVIEW_LENGTH) -> str:
    content = content or ""
    if len(content) <= limit:
        return content
    return content[:limit] + "..."
