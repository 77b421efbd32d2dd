#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Hypermark project.

Schema violations found in a document are never raised: the validator
collects them as diagnostics (see hypermark.validators.diagnostics). The
exceptions below cover malformed input files and internal invariant
violations only.

Exception Hierarchy:
    Exception (built-in)
    └── HypermarkError - Base for all Hypermark errors
        ├── SchemaLoadError - Malformed schema file or mapping
        ├── TreeLoadError - Malformed document tree file or mapping
        └── InternalFault - Internal invariant violated (programmer error)
            └── CardinalityFault - Evaluator reached with 'zeroOrMore'

Usage:
    from hypermark.core.exceptions import SchemaLoadError, TreeLoadError

    try:
        schema = load_schema(path)
    except SchemaLoadError as e:
        click.echo(logger.log_cli_error(e, {"schema": str(path)}), err=True)
"""


class HypermarkError(Exception):
    """
    Base exception for Hypermark errors.

    Catch this to handle any loader failure or internal fault raised by
    the package. Validation findings are not exceptions and never reach
    this hierarchy.
    """

    pass


class SchemaLoadError(HypermarkError):
    """
    Exception for schema loading failures.

    Raised when a schema file or mapping cannot be turned into a Schema:
    - YAML syntax errors
    - Missing or invalid 'kind'
    - Unknown cardinality names
    - Non-list argument slot declarations

    Examples:
        >>> raise SchemaLoadError("Tag '#doc': unknown kind 'section'")
        >>> raise SchemaLoadError("Tag '#doc': unknown cardinality 'many' for child '#title'")
    """

    pass


class TreeLoadError(HypermarkError):
    """
    Exception for document tree loading failures.

    Raised when a serialized tree does not match the node shape:
    - Node is neither a mapping nor a text run
    - Missing 'tag'
    - Block node carrying 'args' or inline node carrying 'children'

    Examples:
        >>> raise TreeLoadError("Node at 'children[2]' is missing 'tag'")
    """

    pass


class InternalFault(HypermarkError):
    """
    Exception for internal invariant violations.

    Signals a bug in the validator or a malformed schema object handed in
    by a caller, never a problem with the document being validated. It is
    fatal to the run and must not be swallowed.
    """

    pass


class CardinalityFault(InternalFault):
    """
    Exception raised when the cardinality evaluator receives a cardinality
    that cannot be violated.

    Examples:
        >>> raise CardinalityFault("zeroOrMore should never be the cause of a cardinality error")
    """

    pass
