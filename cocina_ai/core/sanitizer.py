"""Input sanitization for text that gets embedded into prompts."""

import re
from typing import Any, List

_UNSAFE_CHARS = re.compile(r"[<>\"'&]")


def sanitize(text: Any, max_length: int) -> str:
    """
    Strip unsafe characters, trim whitespace and cap the length.

    Anything that is not a string (including None) sanitizes to "".
    """
    if not isinstance(text, str) or not text:
        return ""
    cleaned = _UNSAFE_CHARS.sub("", text).strip()
    return cleaned[:max(max_length, 0)]


def sanitize_list(items: Any, max_length: int, max_count: int) -> List[str]:
    """Sanitize the string entries of a list, dropping non-strings and capping the count."""
    if not isinstance(items, (list, tuple)):
        return []
    cleaned = [sanitize(item, max_length) for item in items if isinstance(item, str)]
    return cleaned[:max(max_count, 0)]
