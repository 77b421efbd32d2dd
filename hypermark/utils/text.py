#!/usr/bin/env python3
"""
text.py
-------
Presentation helpers shared by diagnostic messages and loaders.

Usage:
    from hypermark.utils.text import ordinal, tag_label

    ordinal(2)         # "2nd"
    tag_label("link")  # "'#link'"
"""
# --- Annotations ---
from __future__ import annotations


def ordinal(number: int) -> str:
    """
    Render a positive integer as an English ordinal.

    Examples:
        >>> ordinal(1), ordinal(2), ordinal(3), ordinal(11), ordinal(22)
        ('1st', '2nd', '3rd', '11th', '22nd')
    """
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def tag_label(tag: str) -> str:
    """Quote a tag name the way messages refer to it: '#tag'."""
    return f"'#{tag}'"


def normalize_tag(tag: str) -> str:
    """
    Strip surrounding whitespace and a leading '#' from a tag name.

    Schema and tree files may write tags either way.
    """
    tag = tag.strip()
    return tag[1:] if tag.startswith("#") else tag
