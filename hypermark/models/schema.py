#!/usr/bin/env python3
"""
schema.py
---------
Declarative schema model: which tags exist, what kind they are, and what
may nest inside them.

A Schema is a read-only lookup table from tag name to TagRule. It is built
once (usually by hypermark.loaders.schema_loader) and shared by every
validation run; nothing in the validator mutates it.

Lookups never raise for unknown tags. They answer "disallowed" instead
(None / False / 0), so callers only need kind_of() to detect unknown tags.

Usage:
    from hypermark.models.schema import Schema, TagRule
    from hypermark.models.enums import Cardinality, Kind

    schema = Schema([
        TagRule("doc", Kind.BLOCK, allowed_children={"title": Cardinality.ONE}),
        TagRule("title", Kind.BLOCK),
    ])
    schema.child_rule("doc", "title")  # Cardinality.ONE
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple

# --- Local imports ---
from hypermark.models.enums import Cardinality, Kind


@dataclass(frozen=True)
class TagRule:
    """
    Schema rule for a single tag.

    Attributes:
        tag: Tag name, without the leading '#'
        kind: Whether the tag is a block or an inline tag
        allowed_children: Child tag -> cardinality, in declaration order (blocks)
        allowed_in_args: Allowed inline tags per argument slot (inlines)
        arg_count: Expected number of argument slots; defaults to len(allowed_in_args)
        allowed_in_head: Inline tags permitted in the head region (blocks)
    """

    tag: str
    kind: Kind
    allowed_children: Mapping[str, Cardinality] = field(default_factory=dict)
    allowed_in_args: Tuple[FrozenSet[str], ...] = ()
    arg_count: Optional[int] = None
    allowed_in_head: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        # Freeze the mutable mapping and resolve the default arity
        object.__setattr__(
            self, "allowed_children", MappingProxyType(dict(self.allowed_children))
        )
        object.__setattr__(
            self, "allowed_in_args", tuple(frozenset(s) for s in self.allowed_in_args)
        )
        object.__setattr__(self, "allowed_in_head", frozenset(self.allowed_in_head))
        if self.arg_count is None:
            object.__setattr__(self, "arg_count", len(self.allowed_in_args))


class Schema:
    """
    Read-only mapping from tag name to TagRule.

    Attributes:
        _rules: Tag name -> TagRule, in declaration order
    """

    def __init__(self, rules: Iterable[TagRule]) -> None:
        self._rules: Dict[str, TagRule] = {}
        for rule in rules:
            self._rules[rule.tag] = rule

    def __contains__(self, tag: object) -> bool:
        return tag in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[TagRule]:
        return iter(self._rules.values())

    @property
    def tags(self) -> Tuple[str, ...]:
        """All declared tag names, in declaration order."""
        return tuple(self._rules)

    def rule(self, tag: str) -> Optional[TagRule]:
        """Return the rule for a tag, or None if the tag is unknown."""
        return self._rules.get(tag)

    def kind_of(self, tag: str) -> Optional[Kind]:
        """Return the declared kind of a tag, or None if the tag is unknown."""
        rule = self._rules.get(tag)
        return rule.kind if rule is not None else None

    def declared_children(self, parent_tag: str) -> Mapping[str, Cardinality]:
        """Return the child constraints of a parent, in declaration order."""
        rule = self._rules.get(parent_tag)
        return rule.allowed_children if rule is not None else MappingProxyType({})

    def child_rule(self, parent_tag: str, child_tag: str) -> Optional[Cardinality]:
        """
        Return the cardinality of child_tag under parent_tag.

        Returns:
            The declared Cardinality, or None if the child is not allowed
        """
        return self.declared_children(parent_tag).get(child_tag)

    def arg_rule(self, parent_tag: str, arg_index: int, child_tag: str) -> bool:
        """Return whether child_tag may appear in argument slot arg_index of parent_tag."""
        rule = self._rules.get(parent_tag)
        if rule is None or not 0 <= arg_index < len(rule.allowed_in_args):
            return False
        return child_tag in rule.allowed_in_args[arg_index]

    def arg_count(self, tag: str) -> int:
        """Return the expected number of argument slots (0 for unknown tags)."""
        rule = self._rules.get(tag)
        return rule.arg_count if rule is not None else 0

    def head_rule(self, parent_tag: str, child_tag: str) -> bool:
        """Return whether child_tag may appear in the head of parent_tag."""
        rule = self._rules.get(parent_tag)
        return rule is not None and child_tag in rule.allowed_in_head
