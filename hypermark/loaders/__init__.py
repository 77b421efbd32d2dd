"""
Loaders turning schema and tree files into Hypermark models.

    from hypermark.loaders import load_schema, load_tree
"""
from .schema_loader import load_schema, schema_from_dict, schema_to_dict
from .tree_loader import load_tree, tree_from_dict

__all__ = [
    "load_schema",
    "load_tree",
    "schema_from_dict",
    "schema_to_dict",
    "tree_from_dict",
]
