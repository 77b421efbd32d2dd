#!/usr/bin/env python3
"""
tree.py
-------
Document tree model consumed by the validator.

A parsed Hypermark document is a tree of two node variants:

    BlockElement  - tag, ordered children, optional head region
    InlineElement - tag, ordered argument slots of inline content

Inline content is an InlineElement or a plain string (a text run). Text
runs carry no tag and are never checked against the schema.

Nodes are frozen dataclasses: trees are built once by a parser or loader
and never modified during validation.

Usage:
    from hypermark.models.tree import BlockElement, InlineElement

    tree = BlockElement(
        "doc",
        children=(BlockElement("title", head=("Hello",)),),
    )
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

# --- Local imports ---
from hypermark.models.enums import Kind


@dataclass(frozen=True)
class InlineElement:
    """
    An inline markup element.

    Attributes:
        tag: Tag name, without the leading '#'
        args: Argument slots; each slot is a tuple of inline content
    """

    tag: str
    args: Tuple[Tuple["InlineContent", ...], ...] = ()

    @property
    def kind(self) -> Kind:
        return Kind.INLINE

    def iter_args(self) -> Iterator[Tuple[int, "InlineElement"]]:
        """Yield (slot index, element) for every element in every slot, skipping text."""
        for index, slot in enumerate(self.args):
            for item in slot:
                if isinstance(item, InlineElement):
                    yield index, item

    def __str__(self) -> str:
        return f"#{self.tag}"


@dataclass(frozen=True)
class BlockElement:
    """
    A block markup element.

    Attributes:
        tag: Tag name, without the leading '#'
        children: Ordered child nodes
        head: Optional inline content attached to the block, distinct from children
    """

    tag: str
    children: Tuple["Node", ...] = ()
    head: Optional[Tuple["InlineContent", ...]] = None

    @property
    def kind(self) -> Kind:
        return Kind.BLOCK

    def head_elements(self) -> Iterator[InlineElement]:
        """Yield the inline elements of the head region, skipping text."""
        for item in self.head or ():
            if isinstance(item, InlineElement):
                yield item

    def __str__(self) -> str:
        return f"#{self.tag}"


Node = Union[BlockElement, InlineElement]
InlineContent = Union[InlineElement, str]
