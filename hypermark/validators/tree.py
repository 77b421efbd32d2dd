#!/usr/bin/env python3
"""
tree.py
-------
Schema validator for parsed Hypermark document trees.

Walks a BlockElement/InlineElement tree depth-first against a Schema and
collects every structural problem in one pass:

    - unknown tags (descent stops at the unknown node)
    - block/inline misuse
    - children not allowed in a block
    - inline elements not allowed in an argument slot or block head
    - child counts violating their declared cardinality
    - inline elements with the wrong number of argument slots

Violations are returned as diagnostics, never raised. Only internal faults
(see hypermark.core.exceptions.InternalFault) propagate as exceptions.

Diagnostics are ordered by discovery. For a block that means: its own
kind, its head, its children's placement and cardinality, then each
child's subtree in order.

Usage:
    from hypermark.validators.tree import TreeValidator

    validator = TreeValidator(schema, logger)
    diagnostics = validator.validate(tree)
    for error in diagnostics:
        print(error.format())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# --- Local imports ---
from hypermark.core.exceptions import InternalFault
from hypermark.core.logging_manager import HypermarkLogger, safe_logger
from hypermark.models.enums import Kind
from hypermark.models.schema import Schema
from hypermark.models.tree import BlockElement, InlineElement, Node
from hypermark.validators.cardinality import check_cardinality
from hypermark.validators.diagnostics import (
    ArgumentCountError,
    BlockUsedAsInlineError,
    DisallowedInArgError,
    DisallowedInBlockError,
    DisallowedInHeadError,
    InlineUsedAsBlockError,
    UnknownTagError,
    ValidationError,
)


# ==================== Report ====================

@dataclass
class ValidationReport:
    """Diagnostics of one validated tree."""

    source: Optional[str] = None
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if validation passed (no diagnostics)."""
        return len(self.errors) == 0

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def by_code(self) -> Dict[int, List[ValidationError]]:
        """Group diagnostics by code, keeping discovery order within each group."""
        grouped: Dict[int, List[ValidationError]] = {}
        for error in self.errors:
            grouped.setdefault(error.code, []).append(error)
        return grouped

    def format(self) -> str:
        """Format report for display."""
        lines = []
        if self.source:
            lines.append(f"=== {self.source} ===")

        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for error in self.errors:
                lines.append(f"  {error.format()}")
        else:
            lines.append("  OK - No issues found")

        return "\n".join(lines)

    def summary(self) -> Dict[str, Any]:
        """Counts only: source, validity, number of diagnostics and count per code."""
        return {
            "source": self.source,
            "valid": self.is_valid,
            "diagnostics": self.error_count,
            "codes": {code: len(errors) for code, errors in self.by_code().items()},
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "valid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
        }


# ==================== TreeValidator ====================

class TreeValidator:
    """
    Validates document trees against a schema.

    The validator keeps no state between runs: each call to validate()
    creates its own diagnostics list and hands it down the walk, so one
    instance can be reused for any number of trees.

    Attributes:
        schema: Read-only schema the trees are checked against
        logger: Optional HypermarkLogger for operation logging
    """

    def __init__(self, schema: Schema, logger: Optional[HypermarkLogger] = None) -> None:
        self.schema = schema
        self.logger = logger

    def validate(self, tree: Node) -> List[ValidationError]:
        """
        Validate a tree.

        Args:
            tree: Root node (usually a BlockElement)

        Returns:
            All diagnostics in discovery order; empty if the tree is valid

        Raises:
            InternalFault: If the walk meets something that is not a node
        """
        diagnostics: List[ValidationError] = []
        self._visit(tree, diagnostics)

        safe_logger(self.logger).log_operation(
            "validate_tree",
            {"root": tree.tag, "diagnostics": len(diagnostics)},
        )
        if diagnostics:
            safe_logger(self.logger).log_debug(
                "Diagnostic codes",
                {"codes": sorted({error.code for error in diagnostics})},
            )
        return diagnostics

    def validate_report(self, tree: Node, source: Optional[str] = None) -> ValidationReport:
        """Validate a tree, wrap the diagnostics in a report and log its summary."""
        report = ValidationReport(source=source, errors=self.validate(tree))
        safe_logger(self.logger).log_report(report)
        return report

    # ---- Walk ----

    def _visit(self, node: Node, diagnostics: List[ValidationError]) -> None:
        """Dispatch on the node variant."""
        if isinstance(node, BlockElement):
            self._visit_block(node, diagnostics)
        elif isinstance(node, InlineElement):
            self._visit_inline(node, None, 0, diagnostics)
        else:
            raise InternalFault(f"Cannot validate {type(node).__name__}: not a tree node")

    def _visit_block(self, block: BlockElement, diagnostics: List[ValidationError]) -> None:
        """
        Validate a block node and its subtree.

        A block whose tag the schema declares inline is reported once; its
        head and children are still walked, but not checked for placement,
        since an inline rule declares no head or child constraints.

        Inline nodes in the child list are reported once each with
        BlockUsedAsInlineError and then walked as inline nodes.
        """
        rule = self.schema.rule(block.tag)
        if rule is None:
            diagnostics.append(UnknownTagError(block))
            return

        as_declared = rule.kind is Kind.BLOCK
        if not as_declared:
            diagnostics.append(InlineUsedAsBlockError(block))

        for item in block.head_elements():
            if (
                as_declared
                and item.tag in self.schema
                and not self.schema.head_rule(block.tag, item.tag)
            ):
                diagnostics.append(DisallowedInHeadError(block, item))
            self._visit_inline(item, None, 0, diagnostics)

        if as_declared:
            self._check_children(block, diagnostics)

        for child in block.children:
            if isinstance(child, InlineElement) and self.schema.kind_of(child.tag) is Kind.INLINE:
                # Block-declared tags get theirs from the inline walk
                diagnostics.append(BlockUsedAsInlineError(child))
            self._visit(child, diagnostics)

    def _check_children(self, block: BlockElement, diagnostics: List[ValidationError]) -> None:
        """
        Check placement of every child, then the cardinality of every
        declared child tag.

        Children with unknown tags are left to their own visit. Tags the
        block does not declare are reported once per occurrence; declared
        tags are counted and evaluated once per tag, seen tags first in
        first-seen order, then unseen ones in declaration order.
        """
        counts: Dict[str, int] = {}
        for child in block.children:
            if child.tag not in self.schema:
                continue
            if self.schema.child_rule(block.tag, child.tag) is None:
                diagnostics.append(DisallowedInBlockError(block, child))
                continue
            counts[child.tag] = counts.get(child.tag, 0) + 1

        declared = self.schema.declared_children(block.tag)
        ordered = list(counts) + [tag for tag in declared if tag not in counts]
        for tag in ordered:
            constraint = declared[tag].constrained
            if constraint is None:
                continue
            error = check_cardinality(
                block, block.children, tag, counts.get(tag, 0), constraint
            )
            if error is not None:
                diagnostics.append(error)

    def _visit_inline(
        self,
        node: InlineElement,
        parent: Optional[InlineElement],
        arg_index: int,
        diagnostics: List[ValidationError],
    ) -> None:
        """
        Validate an inline node and its argument slots.

        Args:
            node: The inline element
            parent: Inline element whose slot holds node, or None outside slots
            arg_index: Slot index in parent (ignored when parent is None)
            diagnostics: Accumulator for this run
        """
        rule = self.schema.rule(node.tag)
        if rule is None:
            diagnostics.append(UnknownTagError(node))
            return

        as_declared = rule.kind is Kind.INLINE
        if not as_declared:
            diagnostics.append(BlockUsedAsInlineError(node))

        if parent is not None and not self.schema.arg_rule(parent.tag, arg_index, node.tag):
            diagnostics.append(DisallowedInArgError(parent, arg_index, node))

        if len(node.args) != rule.arg_count:
            diagnostics.append(ArgumentCountError(node, rule.arg_count))

        # A block rule declares no slots, so misused nodes pass no slot parent
        slot_parent = node if as_declared else None
        for index, item in node.iter_args():
            self._visit_inline(item, slot_parent, index, diagnostics)


def validate_tree(
    tree: Node, schema: Schema, logger: Optional[HypermarkLogger] = None
) -> List[ValidationError]:
    """
    Validate a tree against a schema.

    Convenience wrapper around TreeValidator(schema, logger).validate(tree).
    """
    return TreeValidator(schema, logger).validate(tree)
