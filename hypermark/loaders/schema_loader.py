#!/usr/bin/env python3
"""
schema_loader.py
----------------
Load a Schema from a YAML file or an already-parsed mapping.

File format:

    tags:
      doc:
        kind: block
        head: [text]
        children:
          title: one
          section: zeroOrMore
      link:
        kind: inline
        args:
          - [text]
          - [url]

Keys:
    kind      required, 'block' or 'inline'
    children  child tag -> cardinality name ('one', 'oneOrMore',
              'optional', 'zeroOrMore'); a null value means zeroOrMore
    args      list of argument slots, each a list of allowed inline tags
    arg_count optional override of len(args)
    head      list of inline tags allowed in the block head

Tag names may be written with or without a leading '#'. The loader checks
the file format only; it does not check that referenced tags are declared.

Usage:
    from hypermark.loaders.schema_loader import load_schema

    schema = load_schema(Path("schemas/article.yaml"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

# --- Third-party imports ---
import yaml

# --- Local imports ---
from hypermark.core.exceptions import SchemaLoadError
from hypermark.core.logging_manager import HypermarkLogger, safe_logger
from hypermark.models.enums import Cardinality, Kind
from hypermark.models.schema import Schema, TagRule
from hypermark.utils.text import normalize_tag


def load_schema(path: Path, logger: Optional[HypermarkLogger] = None) -> Schema:
    """
    Read and parse a YAML schema file.

    Args:
        path: Schema file path
        logger: Optional logger for the load operation

    Returns:
        Parsed Schema

    Raises:
        SchemaLoadError: If the file cannot be read or is malformed
    """
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise SchemaLoadError(f"Cannot read schema file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in schema file {path}: {e}") from e

    schema = schema_from_dict(data)
    safe_logger(logger).log_operation(
        "load_schema", {"path": str(path), "tags": len(schema)}
    )
    return schema


def schema_from_dict(data: Any) -> Schema:
    """
    Build a Schema from a parsed mapping.

    Accepts either {'tags': {...}} or the tag mapping itself.

    Raises:
        SchemaLoadError: If the mapping does not follow the schema format
    """
    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Schema must be a mapping, got {type(data).__name__}"
        )
    tags = data.get("tags", data)
    if not isinstance(tags, dict):
        raise SchemaLoadError("'tags' must be a mapping of tag name to rule")

    return Schema(_parse_rule(str(name), body) for name, body in tags.items())


def _parse_rule(name: str, body: Any) -> TagRule:
    """Parse the rule of a single tag."""
    tag = normalize_tag(name)
    if not isinstance(body, dict):
        raise SchemaLoadError(f"Tag '#{tag}': rule must be a mapping")

    kind = body.get("kind")
    if kind not in Kind.choices():
        raise SchemaLoadError(
            f"Tag '#{tag}': unknown kind {kind!r} (expected one of {', '.join(Kind.choices())})"
        )

    arg_count = body.get("arg_count")
    if arg_count is not None and (
        isinstance(arg_count, bool) or not isinstance(arg_count, int) or arg_count < 0
    ):
        raise SchemaLoadError(f"Tag '#{tag}': 'arg_count' must be a non-negative integer")

    return TagRule(
        tag=tag,
        kind=Kind(kind),
        allowed_children=_parse_children(tag, body.get("children")),
        allowed_in_args=_parse_args(tag, body.get("args")),
        arg_count=arg_count,
        allowed_in_head=_parse_tag_set(tag, "head", body.get("head")),
    )


def _parse_children(tag: str, children: Any) -> Dict[str, Cardinality]:
    if children is None:
        return {}
    if not isinstance(children, dict):
        raise SchemaLoadError(f"Tag '#{tag}': 'children' must be a mapping")

    parsed: Dict[str, Cardinality] = {}
    for child, value in children.items():
        child_tag = normalize_tag(str(child))
        if value is None:
            parsed[child_tag] = Cardinality.ZERO_OR_MORE
        elif value in Cardinality.choices():
            parsed[child_tag] = Cardinality(value)
        else:
            raise SchemaLoadError(
                f"Tag '#{tag}': unknown cardinality {value!r} for child '#{child_tag}'"
            )
    return parsed


def _parse_args(tag: str, args: Any) -> Tuple[FrozenSet[str], ...]:
    if args is None:
        return ()
    if not isinstance(args, list):
        raise SchemaLoadError(f"Tag '#{tag}': 'args' must be a list of argument slots")
    return tuple(
        _parse_tag_set(tag, f"args[{index}]", slot) for index, slot in enumerate(args)
    )


def _parse_tag_set(tag: str, key: str, values: Any) -> FrozenSet[str]:
    if values is None:
        return frozenset()
    if not isinstance(values, list):
        raise SchemaLoadError(f"Tag '#{tag}': '{key}' must be a list of tags")
    names: List[str] = [normalize_tag(str(value)) for value in values]
    return frozenset(names)


def schema_to_dict(schema: Schema) -> Mapping[str, Any]:
    """
    Summarize a Schema as plain data, in the file format.

    Used by the CLI to show what a schema file declares.
    """
    tags: Dict[str, Any] = {}
    for rule in schema:
        entry: Dict[str, Any] = {"kind": rule.kind.value}
        if rule.allowed_children:
            entry["children"] = {
                child: cardinality.value
                for child, cardinality in rule.allowed_children.items()
            }
        if rule.kind is Kind.INLINE:
            entry["args"] = [sorted(slot) for slot in rule.allowed_in_args]
            if rule.arg_count != len(rule.allowed_in_args):
                entry["arg_count"] = rule.arg_count
        if rule.allowed_in_head:
            entry["head"] = sorted(rule.allowed_in_head)
        tags[rule.tag] = entry
    return {"tags": tags}
