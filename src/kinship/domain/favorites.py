"""Text codec for a contact's favorites ("category: value" per line)."""

from collections.abc import Mapping


def parse_favorites(text: str | None) -> dict[str, str]:
    """Parse form text into a favorites mapping.

    Each line is split on its first colon and both sides are trimmed. Lines
    without a colon, or with an empty key or value, are dropped.
    """
    entries: dict[str, str] = {}
    for line in (text or "").split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if key and value:
            entries[key] = value
    return entries


def format_favorites(favorites: Mapping[str, str] | None) -> str:
    """Render favorites back to form text, one "key: value" per line."""
    return "\n".join(f"{key}: {value}" for key, value in (favorites or {}).items())
