#!/usr/bin/env python3
"""
cardinality.py
--------------
Cardinality evaluator: decides whether an observed child count satisfies a
declared constraint.

Only ConstrainedCardinality values are accepted. 'zeroOrMore' can never be
violated, so the validator filters it out through Cardinality.constrained
before calling in here; passing it anyway raises CardinalityFault.

Usage:
    from hypermark.validators.cardinality import check_cardinality

    error = check_cardinality(parent, parent.children, "title", 2, ConstrainedCardinality.ONE)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Callable, Dict, Optional, Sequence

# --- Local imports ---
from hypermark.models.enums import ConstrainedCardinality
from hypermark.models.tree import BlockElement, Node
from hypermark.validators.diagnostics import CardinalityError


_POLICIES: Dict[ConstrainedCardinality, Callable[[int], bool]] = {
    ConstrainedCardinality.ONE: lambda count: count == 1,
    ConstrainedCardinality.ONE_OR_MORE: lambda count: count >= 1,
    ConstrainedCardinality.OPTIONAL: lambda count: count in (0, 1),
}


def is_satisfied(count: int, cardinality: ConstrainedCardinality) -> bool:
    """
    Return whether count occurrences satisfy cardinality.

    Raises:
        CardinalityFault: If cardinality is not a ConstrainedCardinality
    """
    return _POLICIES[ConstrainedCardinality.require(cardinality)](count)


def check_cardinality(
    parent: BlockElement,
    children: Sequence[Node],
    tag: str,
    count: int,
    cardinality: ConstrainedCardinality,
) -> Optional[CardinalityError]:
    """
    Evaluate one child tag of one parent.

    Args:
        parent: The block whose children were counted
        children: All children of the parent, carried into the error
        tag: The counted child tag
        count: Observed occurrences (zero included)
        cardinality: Declared constraint for tag under parent

    Returns:
        CardinalityError if violated, None if satisfied
    """
    if is_satisfied(count, cardinality):
        return None
    return CardinalityError(
        parent=parent,
        children=tuple(children),
        tag=tag,
        count=count,
        cardinality=cardinality,
    )
