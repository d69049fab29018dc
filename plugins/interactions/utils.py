from __future__ import annotations

from collections.abc import Iterable

from .config import AUTOCOMPLETE_OPTIONS, MAX_AUTOCOMPLETE_CHOICES


def suggest_options(current: object, options: Iterable[str] = AUTOCOMPLETE_OPTIONS) -> list[str]:
    """Options starting with what the user has typed so far (case-insensitive)."""
    typed = str(current or "").strip().lower()
    matches = [option for option in options if option.lower().startswith(typed)]
    return matches[:MAX_AUTOCOMPLETE_CHOICES]
