#!/usr/bin/env python3
"""
tree_loader.py
--------------
Load a parsed document tree from JSON or YAML.

Parsers of Hypermark source text can dump their output in this shape so
that trees can be validated from the command line:

    {
      "tag": "doc",
      "children": [
        {"tag": "title", "head": ["Hello ", {"tag": "em", "args": [["world"]]}]},
        {"tag": "section", "children": []}
      ]
    }

Node keys:
    tag       required; a leading '#' is stripped
    kind      optional 'block' or 'inline'; defaults to inline inside
              'head' and 'args', otherwise inline when 'args' is present
              and block when it is not
    children  block only: list of nodes
    head      block only: list of inline content
    args      inline only: list of argument slots, each a list of inline content

Inline content is an inline node or a string (a text run).

Usage:
    from hypermark.loaders.tree_loader import load_tree

    tree = load_tree(Path("build/article.json"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from pathlib import Path
from typing import Any, Optional, Tuple

# --- Third-party imports ---
import yaml

# --- Local imports ---
from hypermark.core.exceptions import TreeLoadError
from hypermark.core.logging_manager import HypermarkLogger, safe_logger
from hypermark.models.enums import Kind
from hypermark.models.tree import BlockElement, InlineContent, InlineElement, Node
from hypermark.utils.text import normalize_tag


def load_tree(path: Path, logger: Optional[HypermarkLogger] = None) -> Node:
    """
    Read a tree file. '.json' files are parsed as JSON, anything else as YAML.

    Raises:
        TreeLoadError: If the file cannot be read, parsed or converted
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TreeLoadError(f"Cannot read tree file {path}: {e}") from e

    try:
        data = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise TreeLoadError(f"Cannot parse tree file {path}: {e}") from e

    tree = tree_from_dict(data)
    safe_logger(logger).log_debug("Loaded tree", {"path": str(path), "root": tree.tag})
    return tree


def tree_from_dict(data: Any) -> Node:
    """
    Convert parsed data to a tree.

    Raises:
        TreeLoadError: If the data does not follow the node shape
    """
    return _parse_node(data, "$")


def _parse_node(data: Any, path: str, default_kind: Optional[Kind] = None) -> Node:
    if not isinstance(data, dict):
        raise TreeLoadError(f"Node at '{path}' must be a mapping, got {type(data).__name__}")

    tag = data.get("tag")
    if not isinstance(tag, str) or not normalize_tag(tag):
        raise TreeLoadError(f"Node at '{path}' is missing 'tag'")
    tag = normalize_tag(tag)

    kind = data.get("kind")
    if kind is None and default_kind is not None:
        kind = default_kind.value
    elif kind is None:
        kind = Kind.INLINE.value if "args" in data else Kind.BLOCK.value
    if kind not in Kind.choices():
        raise TreeLoadError(f"Node at '{path}' has unknown kind {kind!r}")

    if kind == Kind.INLINE.value:
        if "children" in data or "head" in data:
            raise TreeLoadError(f"Inline node at '{path}' cannot have 'children' or 'head'")
        slots = _as_list(data.get("args"), f"{path}.args")
        return InlineElement(
            tag,
            args=tuple(
                _parse_inline_sequence(slot, f"{path}.args[{index}]")
                for index, slot in enumerate(slots)
            ),
        )

    if "args" in data:
        raise TreeLoadError(f"Block node at '{path}' cannot have 'args'")
    children = _as_list(data.get("children"), f"{path}.children")
    head = data.get("head")
    return BlockElement(
        tag,
        children=tuple(
            _parse_node(child, f"{path}.children[{index}]")
            for index, child in enumerate(children)
        ),
        head=None if head is None else _parse_inline_sequence(head, f"{path}.head"),
    )


def _parse_inline_sequence(data: Any, path: str) -> Tuple[InlineContent, ...]:
    items = []
    for index, item in enumerate(_as_list(data, path)):
        if isinstance(item, str):
            items.append(item)
            continue
        # Mappings inside inline content default to inline
        node = _parse_node(item, f"{path}[{index}]", Kind.INLINE)
        if not isinstance(node, InlineElement):
            raise TreeLoadError(f"Block node '#{node.tag}' at '{path}[{index}]' is not inline content")
        items.append(node)
    return tuple(items)


def _as_list(data: Any, path: str) -> list:
    if data is None:
        return []
    if not isinstance(data, list):
        raise TreeLoadError(f"'{path}' must be a list")
    return data
