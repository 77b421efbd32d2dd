#!/usr/bin/env python3
"""
test_tree_validator.py
----------------------
Tests for TreeValidator against the article schema (see conftest.py).

Covers soundness, unknown tags, kind misuse, block/head/argument
placement, cardinality, argument counts and diagnostic ordering.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from unittest.mock import MagicMock

# --- Third-party imports ---
import pytest

# --- Local imports ---
from hypermark.core.exceptions import InternalFault
from hypermark.core.logging_manager import HypermarkLogger
from hypermark.models.enums import Cardinality, ConstrainedCardinality, Kind
from hypermark.models.schema import Schema, TagRule
from hypermark.models.tree import BlockElement, InlineElement
from hypermark.validators.diagnostics import (
    ArgumentCountError,
    BlockUsedAsInlineError,
    CardinalityError,
    DisallowedInArgError,
    DisallowedInBlockError,
    DisallowedInHeadError,
    InlineUsedAsBlockError,
    UnknownTagError,
)
from hypermark.validators.tree import TreeValidator, ValidationReport, validate_tree


# ==================== Builders ====================

def text():
    return InlineElement("text")


def em(*content):
    return InlineElement("em", args=(tuple(content) or (text(),),))


def link(*args):
    return InlineElement("link", args=tuple(args))


def url():
    return InlineElement("url")


def para(*head):
    return BlockElement("para", head=tuple(head) or ("Some text.",))


def section(*children):
    return BlockElement("section", head=(text(),), children=tuple(children) or (para(),))


def title(*head):
    return BlockElement("title", head=tuple(head) or ("A title",))


def doc(*children):
    return BlockElement("doc", children=tuple(children))


def codes(diagnostics):
    return [error.code for error in diagnostics]


@pytest.fixture
def validator(article_schema):
    """TreeValidator over the article schema."""
    return TreeValidator(article_schema)


# ==================== Soundness ====================

class TestValidTrees:
    """Trees matching the schema produce no diagnostics."""

    def test_valid_tree(self, validator):
        tree = doc(
            title(),
            section(
                para("Plain ", em()),
                para(link((text(),), (url(),))),
            ),
            section(),
        )
        assert validator.validate(tree) == []

    def test_minimal_tree(self, validator):
        """Only the required title."""
        assert validator.validate(doc(title())) == []

    def test_optional_child_present_once(self, validator):
        tree = doc(title(), BlockElement("abstract", head=(text(),)))
        assert validator.validate(tree) == []

    def test_text_runs_are_ignored(self, validator):
        """Plain strings in heads and argument slots are never checked."""
        tree = doc(title("Hello ", em("world")), section(para(link(("label",), (url(),)))))
        assert validator.validate(tree) == []


# ==================== Unknown tags ====================

class TestUnknownTags:
    """Unknown tags are reported once and their subtrees are skipped."""

    def test_unknown_root(self, validator):
        diagnostics = validator.validate(BlockElement("mystery", children=(title(),)))
        assert diagnostics == [UnknownTagError(BlockElement("mystery", children=(title(),)))]

    def test_unknown_child_stops_descent(self, validator):
        """Descendants of an unknown block are not reported."""
        mystery = BlockElement(
            "mystery",
            children=(BlockElement("bogus"), doc()),
            head=(InlineElement("widget"),),
        )
        diagnostics = validator.validate(doc(title(), mystery))
        assert diagnostics == [UnknownTagError(mystery)]

    def test_unknown_child_is_not_also_disallowed(self, validator):
        diagnostics = validator.validate(doc(title(), BlockElement("mystery")))
        assert codes(diagnostics) == [100]

    def test_each_unknown_node_reported(self, validator):
        diagnostics = validator.validate(
            doc(title(), BlockElement("mystery"), BlockElement("mystery"))
        )
        assert codes(diagnostics) == [100, 100]

    def test_unknown_inline_in_argument(self, validator):
        """An unknown tag in a slot is neither placement- nor count-checked."""
        widget = InlineElement("widget", args=((InlineElement("nothing"),),))
        tree = doc(title(em(widget)))
        diagnostics = validator.validate(tree)
        assert diagnostics == [UnknownTagError(widget)]

    def test_unknown_inline_in_head(self, validator):
        widget = InlineElement("widget")
        diagnostics = validator.validate(doc(title(widget)))
        assert diagnostics == [UnknownTagError(widget)]


# ==================== Kind misuse ====================

class TestKindMismatch:
    """Block/inline misuse is reported once and the walk continues."""

    def test_inline_used_as_block(self, validator):
        em_block = BlockElement("em", children=(BlockElement("bogus"),))
        diagnostics = validator.validate(doc(title(), em_block))

        assert codes(diagnostics).count(110) == 1
        assert InlineUsedAsBlockError(em_block) in diagnostics
        # The children of the misused block are still walked
        assert UnknownTagError(BlockElement("bogus")) in diagnostics

    def test_inline_used_as_block_skips_child_placement(self, validator):
        """An inline rule declares no children, so none are disallowed."""
        em_block = BlockElement("em", children=(para(),), head=(url(),))
        diagnostics = validator.validate(doc(title(), em_block))
        assert DisallowedInBlockError(doc(title(), em_block), em_block) in diagnostics
        assert codes(diagnostics) == [120, 110]

    def test_block_used_as_inline(self, validator):
        title_inline = InlineElement("title")
        diagnostics = validator.validate(doc(title(em(title_inline))))

        assert codes(diagnostics).count(111) == 1
        assert diagnostics[0] == BlockUsedAsInlineError(title_inline)
        # Its placement in the slot is still checked
        assert diagnostics[1] == DisallowedInArgError(em(title_inline), 0, title_inline)

    def test_block_used_as_inline_continues_into_args(self, validator):
        title_inline = InlineElement("title", args=((InlineElement("bogus"), text()),))
        tree = doc(title(), section(para(title_inline)))
        diagnostics = validator.validate(tree)

        assert codes(diagnostics) == [122, 111, 140, 100]
        assert isinstance(diagnostics[0], DisallowedInHeadError)
        assert diagnostics[3] == UnknownTagError(InlineElement("bogus"))

    def test_block_used_as_inline_argument_count(self, validator):
        """A block rule declares no slots, so any argument is counted against it."""
        title_inline = InlineElement("title", args=(("a",), ("b",)))
        diagnostics = validator.validate(doc(title(), section(para(title_inline))))

        assert codes(diagnostics) == [122, 111, 140]
        assert diagnostics[2] == ArgumentCountError(title_inline, 0)
        assert diagnostics[2].expected == 0
        assert diagnostics[2].actual == 2

    def test_inline_in_child_list_is_block_used_as_inline(self, validator):
        stray = text()
        diagnostics = validator.validate(doc(title(), section(para(), stray)))

        assert codes(diagnostics) == [120, 111]
        assert diagnostics[1] == BlockUsedAsInlineError(stray)

    def test_block_tag_in_child_list_reported_once(self, validator):
        """An inline node with a block-declared tag gets a single 111."""
        title_inline = InlineElement("title")
        diagnostics = validator.validate(doc(title_inline))
        assert diagnostics == [BlockUsedAsInlineError(title_inline)]


# ==================== Block placement ====================

class TestDisallowedInBlock:
    """Children not declared by their parent."""

    def test_one_error_per_occurrence(self, validator):
        tree = doc(title(), para(), para())
        diagnostics = validator.validate(tree)

        assert codes(diagnostics) == [120, 120]
        assert all(error.parent == tree for error in diagnostics)
        assert diagnostics[0].message == "Tag '#para' is not allowed in '#doc'"

    def test_disallowed_children_are_still_walked(self, validator):
        bad_para = para(url(), InlineElement("mystery"))
        diagnostics = validator.validate(doc(title(), bad_para))
        assert codes(diagnostics) == [120, 122, 100]

    def test_inline_node_in_child_list(self, validator):
        """Inline nodes among block children are placement-checked, reported and walked."""
        stray = em(InlineElement("bogus"))
        tree = doc(title(), section(para(), stray))
        diagnostics = validator.validate(tree)
        assert codes(diagnostics) == [120, 111, 100]
        assert diagnostics[0].node == stray


# ==================== Head placement ====================

class TestDisallowedInHead:
    """Inline elements in a block head."""

    def test_disallowed_in_head(self, validator):
        diagnostics = validator.validate(doc(title(url())))
        assert diagnostics == [DisallowedInHeadError(title(url()), url())]
        assert diagnostics[0].message == "Tag '#url' is not allowed in the head of '#title'"

    def test_head_nodes_are_validated_as_inline(self, validator):
        diagnostics = validator.validate(doc(title(link((text(),)))))
        assert codes(diagnostics) == [140]

    def test_head_allows_only_declared_tags(self, validator):
        """#abstract allows #text in its head, not #em."""
        tree = doc(title(), BlockElement("abstract", head=(em(),)))
        assert codes(validator.validate(tree)) == [122]


# ==================== Cardinality ====================

class TestCardinality:
    """Per-parent child counts against declared cardinality."""

    def test_two_titles(self, validator):
        """Two #title and one #section: one error for title, none for section."""
        tree = doc(title(), title(), section())
        diagnostics = validator.validate(tree)

        assert len(diagnostics) == 1
        error = diagnostics[0]
        assert isinstance(error, CardinalityError)
        assert error.tag == "title"
        assert error.count == 2
        assert error.cardinality is ConstrainedCardinality.ONE
        assert error.parent == tree
        assert error.children == tree.children

    def test_missing_title(self, validator):
        """Absence is checked too, symmetric with two occurrences."""
        diagnostics = validator.validate(doc(section()))
        assert len(diagnostics) == 1
        assert diagnostics[0].tag == "title"
        assert diagnostics[0].count == 0

    def test_one_or_more(self, validator):
        empty_section = BlockElement("section", head=(text(),))
        diagnostics = validator.validate(doc(title(), empty_section))
        assert len(diagnostics) == 1
        assert diagnostics[0].parent == empty_section
        assert diagnostics[0].tag == "para"
        assert diagnostics[0].cardinality is ConstrainedCardinality.ONE_OR_MORE

    def test_optional(self, validator):
        abstract = BlockElement("abstract", head=("Summary",))
        diagnostics = validator.validate(doc(title(), abstract, abstract))
        assert len(diagnostics) == 1
        assert diagnostics[0].tag == "abstract"
        assert diagnostics[0].count == 2
        assert diagnostics[0].cardinality is ConstrainedCardinality.OPTIONAL

    def test_zero_or_more_never_reported(self, validator):
        for count in (0, 1, 5):
            tree = doc(title(), *[section() for _ in range(count)])
            assert validator.validate(tree) == []

    def test_zero_or_more_never_in_errors(self, validator):
        tree = doc(title(), title(), section(BlockElement("section")), section())
        diagnostics = validator.validate(tree)
        cardinalities = [e.cardinality for e in diagnostics if isinstance(e, CardinalityError)]
        assert cardinalities
        assert all(c is not Cardinality.ZERO_OR_MORE for c in cardinalities)
        assert "zeroOrMore" not in [c.value for c in cardinalities]

    def test_disallowed_tags_get_no_cardinality_error(self, validator):
        diagnostics = validator.validate(doc(title(), para()))
        assert codes(diagnostics) == [120]

    def test_seen_tags_first_then_declaration_order(self, validator):
        abstract = BlockElement("abstract", head=("Summary",))
        diagnostics = validator.validate(doc(abstract, abstract))
        assert [error.tag for error in diagnostics] == ["abstract", "title"]

    def test_custom_schema_unseen_order(self):
        """Unseen declared tags follow the schema's declaration order."""
        schema = Schema([
            TagRule(
                "root",
                Kind.BLOCK,
                allowed_children={
                    "b": Cardinality.ONE_OR_MORE,
                    "a": Cardinality.ONE,
                    "c": Cardinality.ZERO_OR_MORE,
                },
            ),
            TagRule("a", Kind.BLOCK),
            TagRule("b", Kind.BLOCK),
            TagRule("c", Kind.BLOCK),
        ])
        diagnostics = TreeValidator(schema).validate(BlockElement("root"))
        assert [error.tag for error in diagnostics] == ["b", "a"]


# ==================== Arguments ====================

class TestArguments:
    """Argument slot placement and argument counts."""

    def test_one_argument_instead_of_two(self, validator):
        bad_link = link((text(),))
        diagnostics = validator.validate(doc(title(bad_link)))

        assert diagnostics == [ArgumentCountError(bad_link, 2)]
        assert diagnostics[0].expected == 2
        assert diagnostics[0].actual == 1
        assert diagnostics[0].message == (
            "Expected '#link' to have 2 arguments, but got 1 instead"
        )

    def test_three_arguments_instead_of_two(self, validator):
        bad_link = link((text(),), (url(),), ())
        diagnostics = validator.validate(doc(title(bad_link)))
        assert len(diagnostics) == 1
        assert diagnostics[0].expected == 2
        assert diagnostics[0].actual == 3

    def test_argument_count_does_not_block_recursion(self, validator):
        bad_link = link((InlineElement("bogus"),))
        diagnostics = validator.validate(doc(title(bad_link)))
        assert codes(diagnostics) == [140, 100]

    def test_zero_argument_tag_with_arguments(self, validator):
        diagnostics = validator.validate(doc(title(InlineElement("text", args=(("x",),)))))
        assert diagnostics[0].expected == 0
        assert diagnostics[0].actual == 1

    def test_disallowed_in_arg(self, validator):
        misplaced = em()
        bad_link = link((text(),), (misplaced,))
        diagnostics = validator.validate(doc(title(bad_link)))

        assert diagnostics == [DisallowedInArgError(bad_link, 1, misplaced)]
        assert diagnostics[0].message == (
            "Tag '#em' is not allowed in the 2nd argument of '#link'"
        )

    def test_slot_index_is_per_slot(self, validator):
        """#url is allowed in the second slot but not in the first."""
        bad_link = link((url(),), (url(),))
        diagnostics = validator.validate(doc(title(bad_link)))
        assert len(diagnostics) == 1
        assert diagnostics[0].arg_index == 0

    def test_nested_arguments(self, validator):
        """Slots are checked at every depth."""
        nested = link((em(url()),), (url(),))
        diagnostics = validator.validate(doc(title(nested)))
        assert diagnostics == [DisallowedInArgError(em(url()), 0, url())]

    def test_extra_slot_content_is_disallowed(self, validator):
        bad_link = link((text(),), (url(),), (text(),))
        diagnostics = validator.validate(doc(title(bad_link)))
        assert codes(diagnostics) == [140, 121]
        assert diagnostics[1].arg_index == 2


# ==================== Runs ====================

class TestValidationRuns:
    """Ordering, reuse, reports and logging."""

    def test_discovery_order(self, validator):
        tree = doc(
            title(url()),
            title(),
            para(link((text(),))),
            BlockElement("mystery"),
        )
        diagnostics = validator.validate(tree)
        # doc placement and cardinality, then each child subtree in order
        assert codes(diagnostics) == [120, 130, 122, 140, 100]

    def test_runs_are_deterministic_and_independent(self, validator):
        tree = doc(title(), title(), para())
        first = validator.validate(tree)
        second = validator.validate(tree)
        assert first == second
        assert len(second) == 2

    def test_validate_tree_function(self, article_schema):
        assert codes(validate_tree(doc(section()), article_schema)) == [130]

    def test_non_node_is_internal_fault(self, validator):
        with pytest.raises(InternalFault):
            validator.validate("not a node")

    def test_inline_root(self, validator):
        assert validator.validate(link((text(),), (url(),))) == []
        assert codes(validator.validate(link())) == [140]

    def test_logs_operation(self, article_schema):
        logger = MagicMock(spec=HypermarkLogger)
        TreeValidator(article_schema, logger).validate(doc(section()))

        logger.log_operation.assert_called_once_with(
            "validate_tree", {"root": "doc", "diagnostics": 1}
        )
        logger.log_debug.assert_called_once_with("Diagnostic codes", {"codes": [130]})


class TestValidationReport:
    """Tests for ValidationReport."""

    def test_valid_report(self, validator):
        report = validator.validate_report(doc(title()), source="ok.json")
        assert report.is_valid
        assert report.error_count == 0
        assert "OK - No issues found" in report.format()
        assert report.format().startswith("=== ok.json ===")

    def test_invalid_report(self, validator):
        report = validator.validate_report(doc(title(), title(), para(), para()))
        assert not report.is_valid
        assert report.error_count == 3
        assert list(report.by_code()) == [120, 130]
        assert len(report.by_code()[120]) == 2
        assert "ERRORS (3):" in report.format()
        assert "  Error HM130: Saw 2 occurrences of 'title' in doc" in report.format()

    def test_to_dict(self, validator):
        report = validator.validate_report(doc(section()), source="a.json")
        data = report.to_dict()
        assert data["source"] == "a.json"
        assert data["valid"] is False
        assert data["errors"][0]["code"] == 130
        assert data["errors"][0]["tag"] == "title"

    def test_empty_report(self):
        assert ValidationReport().is_valid

    def test_summary(self, validator):
        report = validator.validate_report(doc(title(), title(), para(), para()), source="b.json")
        assert report.summary() == {
            "source": "b.json",
            "valid": False,
            "diagnostics": 3,
            "codes": {120: 2, 130: 1},
        }

    def test_report_is_logged(self, article_schema):
        logger = MagicMock(spec=HypermarkLogger)
        report = TreeValidator(article_schema, logger).validate_report(doc(section()), "c.json")
        logger.log_report.assert_called_once_with(report)
