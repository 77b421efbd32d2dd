"""
Utilities package for Hypermark.

- text: Presentation helpers for diagnostic messages
"""
from .text import normalize_tag, ordinal, tag_label

__all__ = ["normalize_tag", "ordinal", "tag_label"]
