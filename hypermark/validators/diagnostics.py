#!/usr/bin/env python3
"""
diagnostics.py
--------------
Diagnostic model for schema validation.

Each validation failure is an immutable record with a stable numeric code
and the structured context needed to render it. Records are returned by the
validator, never raised.

Codes:
    100  UnknownTagError         tag is not declared in the schema
    110  InlineUsedAsBlockError  inline tag parsed as a block
    111  BlockUsedAsInlineError  block tag parsed as an inline
    120  DisallowedInBlockError  child tag not allowed in a block
    121  DisallowedInArgError    tag not allowed in an argument slot
    122  DisallowedInHeadError   tag not allowed in a block's head
    130  CardinalityError        child count violates its cardinality
    140  ArgumentCountError      wrong number of argument slots

Rendered form, for CLI and log display:

    Error HM130: Saw 2 occurrences of 'title' in doc, but the schema
    requires exactly one ('#one') in doc

Usage:
    from hypermark.validators.diagnostics import UnknownTagError

    error = UnknownTagError(node)
    error.code      # 100
    error.format()  # "Error HM100: Unknown tag '#foo'"
    error.to_dict() # structured fields for tooling
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Tuple, Type

# --- Local imports ---
from hypermark.models.enums import ConstrainedCardinality
from hypermark.models.tree import BlockElement, InlineElement, Node
from hypermark.utils.text import ordinal, tag_label


@dataclass(frozen=True)
class ValidationError(ABC):
    """
    Base class for validation diagnostics.

    Subclasses set the class-level `code` and implement `message` and
    `fields`. The data fields stay separate from the rendered message so
    tools can filter on them without parsing text.
    """

    code: ClassVar[int] = 0
    severity: ClassVar[str] = "error"

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable description, without the 'Error HM<code>' prefix."""

    def fields(self) -> Dict[str, Any]:
        """Structured context of the diagnostic, JSON-serializable."""
        return {}

    def format(self) -> str:
        """Render as 'Error HM<code>: <message>'."""
        return f"Error HM{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize diagnostic to dict for JSON output.

        Returns:
            Dict with code, name, severity, message and the variant's fields
        """
        data: Dict[str, Any] = {
            "code": self.code,
            "name": type(self).__name__,
            "severity": self.severity,
            "message": self.message,
        }
        data.update(self.fields())
        return data

    def __str__(self) -> str:
        return self.format()


# ---- 100 Unknown tag ----

@dataclass(frozen=True)
class UnknownTagError(ValidationError):
    """A node whose tag has no schema entry."""

    node: Node
    code: ClassVar[int] = 100

    @property
    def message(self) -> str:
        return f"Unknown tag {tag_label(self.node.tag)}"

    def fields(self) -> Dict[str, Any]:
        return {"tag": self.node.tag, "kind": self.node.kind.value}


# ---- 11x Misused tags ----

@dataclass(frozen=True)
class InlineUsedAsBlockError(ValidationError):
    """A block node whose tag the schema declares inline."""

    node: BlockElement
    code: ClassVar[int] = 110

    @property
    def message(self) -> str:
        return f"Expected '{self.node.tag}' to be used as an inline tag"

    def fields(self) -> Dict[str, Any]:
        return {"tag": self.node.tag}


@dataclass(frozen=True)
class BlockUsedAsInlineError(ValidationError):
    """An inline node where a block is expected (block tag, or block child list)."""

    node: InlineElement
    code: ClassVar[int] = 111

    @property
    def message(self) -> str:
        return f"Expected '{self.node.tag}' to be used as a block tag"

    def fields(self) -> Dict[str, Any]:
        return {"tag": self.node.tag}


# ---- 12x Disallowed tags ----

@dataclass(frozen=True)
class DisallowedInBlockError(ValidationError):
    """A child whose tag the parent block does not allow."""

    parent: BlockElement
    node: Node
    code: ClassVar[int] = 120

    @property
    def message(self) -> str:
        return f"Tag {tag_label(self.node.tag)} is not allowed in {tag_label(self.parent.tag)}"

    def fields(self) -> Dict[str, Any]:
        return {"parent": self.parent.tag, "tag": self.node.tag}


@dataclass(frozen=True)
class DisallowedInArgError(ValidationError):
    """An inline element placed in an argument slot that does not allow it."""

    parent: InlineElement
    arg_index: int
    node: InlineElement
    code: ClassVar[int] = 121

    @property
    def message(self) -> str:
        return (
            f"Tag {tag_label(self.node.tag)} is not allowed in the "
            f"{ordinal(self.arg_index + 1)} argument of {tag_label(self.parent.tag)}"
        )

    def fields(self) -> Dict[str, Any]:
        return {
            "parent": self.parent.tag,
            "arg_index": self.arg_index,
            "tag": self.node.tag,
        }


@dataclass(frozen=True)
class DisallowedInHeadError(ValidationError):
    """An inline element in a block's head that the block does not allow there."""

    parent: BlockElement
    node: InlineElement
    code: ClassVar[int] = 122

    @property
    def message(self) -> str:
        return (
            f"Tag {tag_label(self.node.tag)} is not allowed in the head of "
            f"{tag_label(self.parent.tag)}"
        )

    def fields(self) -> Dict[str, Any]:
        return {"parent": self.parent.tag, "tag": self.node.tag}


# ---- 13x Cardinality ----

def cardinality_to_string(cardinality: ConstrainedCardinality) -> str:
    """
    Describe a cardinality for messages, e.g. "exactly one ('#one')".

    Raises:
        CardinalityFault: If given anything but a ConstrainedCardinality
    """
    cardinality = ConstrainedCardinality.require(cardinality)
    return f"{cardinality.display_name} ('#{cardinality.value}')"


@dataclass(frozen=True)
class CardinalityError(ValidationError):
    """
    A child count that violates the parent's declared cardinality.

    Attributes:
        parent: The block whose children were counted
        children: All children of the parent, for message context
        tag: The counted child tag
        count: Observed number of occurrences
        cardinality: Declared constraint; never 'zeroOrMore'
    """

    parent: BlockElement
    children: Tuple[Node, ...]
    tag: str
    count: int
    cardinality: ConstrainedCardinality
    code: ClassVar[int] = 130

    def __post_init__(self) -> None:
        ConstrainedCardinality.require(self.cardinality)

    @property
    def message(self) -> str:
        return (
            f"Saw {self.count} occurrences of '{self.tag}' in {self.parent.tag}, "
            f"but the schema requires {cardinality_to_string(self.cardinality)} "
            f"in {self.parent.tag}"
        )

    def fields(self) -> Dict[str, Any]:
        return {
            "parent": self.parent.tag,
            "children": [child.tag for child in self.children],
            "tag": self.tag,
            "count": self.count,
            "cardinality": self.cardinality.value,
        }


# ---- 14x Arguments ----

@dataclass(frozen=True)
class ArgumentCountError(ValidationError):
    """An inline element with the wrong number of argument slots."""

    node: InlineElement
    expected: int
    code: ClassVar[int] = 140

    @property
    def actual(self) -> int:
        return len(self.node.args)

    @property
    def message(self) -> str:
        return (
            f"Expected {tag_label(self.node.tag)} to have {self.expected} arguments, "
            f"but got {self.actual} instead"
        )

    def fields(self) -> Dict[str, Any]:
        return {"tag": self.node.tag, "expected": self.expected, "actual": self.actual}


DIAGNOSTIC_TYPES: Dict[int, Type[ValidationError]] = {
    cls.code: cls
    for cls in (
        UnknownTagError,
        InlineUsedAsBlockError,
        BlockUsedAsInlineError,
        DisallowedInBlockError,
        DisallowedInArgError,
        DisallowedInHeadError,
        CardinalityError,
        ArgumentCountError,
    )
}
