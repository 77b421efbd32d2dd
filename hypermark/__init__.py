"""
Hypermark
---------
Schema validation for parsed Hypermark document trees.

    from hypermark import TreeValidator, load_schema, load_tree

    schema = load_schema(Path("article.schema.yaml"))
    for error in TreeValidator(schema).validate(load_tree(Path("article.json"))):
        print(error.format())
"""
from hypermark.loaders import load_schema, load_tree
from hypermark.models import BlockElement, InlineElement, Schema, TagRule
from hypermark.validators import TreeValidator, validate_tree

__version__ = "0.1.0"

__all__ = [
    "BlockElement",
    "InlineElement",
    "Schema",
    "TagRule",
    "TreeValidator",
    "load_schema",
    "load_tree",
    "validate_tree",
]
