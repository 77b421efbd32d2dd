"""
Enumeration Types
------------------

Enum classes for the Hypermark tree and schema models.

Enums:
    - Kind: Structural kind of a tag (block or inline)
    - Cardinality: Occurrence constraint of a child tag under a parent
    - ConstrainedCardinality: The cardinalities that can be violated

Cardinality values are the names used in schema files ('one',
'oneOrMore', 'optional', 'zeroOrMore').
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List, Optional

# --- Local imports ---
from hypermark.core.exceptions import CardinalityFault


class Kind(str, Enum):
    """
    Structural kind of a tag.
    - BLOCK: Structural content with ordered children and an optional head
    - INLINE: Content nested through positional arguments
    """

    BLOCK = "block"
    INLINE = "inline"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available kind choices."""
        return [kind.value for kind in cls]


class ConstrainedCardinality(str, Enum):
    """
    Cardinalities that a child count can violate.

    'zeroOrMore' is deliberately absent: anything typed with this enum can
    be handed to the cardinality evaluator.
    """

    ONE = "one"
    ONE_OR_MORE = "oneOrMore"
    OPTIONAL = "optional"

    @classmethod
    def require(cls, cardinality: object) -> "ConstrainedCardinality":
        """
        Return cardinality unchanged if it is a ConstrainedCardinality.

        Raises:
            CardinalityFault: For anything else, 'zeroOrMore' included
        """
        if not isinstance(cardinality, cls):
            value = getattr(cardinality, "value", cardinality)
            raise CardinalityFault(
                f"{value} should never be the cause of a cardinality error"
            )
        return cardinality

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        display_map = {
            ConstrainedCardinality.ONE: "exactly one",
            ConstrainedCardinality.ONE_OR_MORE: "one or more",
            ConstrainedCardinality.OPTIONAL: "zero or one",
        }
        return display_map[self]


class Cardinality(str, Enum):
    """
    Occurrence constraint of a child tag under a parent.
    - ONE: Exactly one occurrence
    - ONE_OR_MORE: At least one occurrence
    - OPTIONAL: Zero or one occurrence
    - ZERO_OR_MORE: Any number of occurrences
    """

    ONE = "one"
    ONE_OR_MORE = "oneOrMore"
    OPTIONAL = "optional"
    ZERO_OR_MORE = "zeroOrMore"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available cardinality choices."""
        return [cardinality.value for cardinality in cls]

    @property
    def constrained(self) -> Optional[ConstrainedCardinality]:
        """
        The equivalent ConstrainedCardinality, or None for ZERO_OR_MORE.

        This is the only way from a schema cardinality to the evaluator.
        """
        if self is Cardinality.ZERO_OR_MORE:
            return None
        return ConstrainedCardinality(self.value)
