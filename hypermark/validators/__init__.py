#!/usr/bin/env python3
"""
validators
----------
Schema validation of parsed Hypermark document trees.

Modules:
    - diagnostics: Diagnostic variants with stable HM1xx codes
    - cardinality: Child-count evaluator
    - tree: TreeValidator, the tree-walking engine
    - cli: `hmvalidate` command line interface

Usage:
    # Through CLI
    hmvalidate check schema.yaml article.json
    hmvalidate codes

    # Direct import for programmatic use
    from hypermark.validators import TreeValidator

    diagnostics = TreeValidator(schema).validate(tree)
"""
from .diagnostics import (
    DIAGNOSTIC_TYPES,
    ArgumentCountError,
    BlockUsedAsInlineError,
    CardinalityError,
    DisallowedInArgError,
    DisallowedInBlockError,
    DisallowedInHeadError,
    InlineUsedAsBlockError,
    UnknownTagError,
    ValidationError,
)
from .tree import TreeValidator, ValidationReport, validate_tree

__all__ = [
    "DIAGNOSTIC_TYPES",
    "ArgumentCountError",
    "BlockUsedAsInlineError",
    "CardinalityError",
    "DisallowedInArgError",
    "DisallowedInBlockError",
    "DisallowedInHeadError",
    "InlineUsedAsBlockError",
    "TreeValidator",
    "UnknownTagError",
    "ValidationError",
    "ValidationReport",
    "validate_tree",
]
