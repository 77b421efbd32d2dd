"""
Tree and schema models for Hypermark.

    from hypermark.models import BlockElement, InlineElement, Schema, TagRule
"""
from .enums import Cardinality, ConstrainedCardinality, Kind
from .schema import Schema, TagRule
from .tree import BlockElement, InlineContent, InlineElement, Node

__all__ = [
    "BlockElement",
    "Cardinality",
    "ConstrainedCardinality",
    "InlineContent",
    "InlineElement",
    "Kind",
    "Node",
    "Schema",
    "TagRule",
]
