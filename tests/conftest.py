"""
conftest.py
-----------
Shared pytest fixtures for Hypermark tests.

Provides fixtures for:
- Paths to fixture files (schemas and trees)
- The article schema used throughout the validator tests
"""
import pytest
from pathlib import Path

from hypermark.loaders.schema_loader import schema_from_dict


ARTICLE_SCHEMA = {
    "tags": {
        "doc": {
            "kind": "block",
            "children": {"title": "one", "abstract": "optional", "section": "zeroOrMore"},
        },
        "title": {"kind": "block", "head": ["text", "em", "link"]},
        "abstract": {"kind": "block", "head": ["text"]},
        "section": {
            "kind": "block",
            "head": ["text", "em"],
            "children": {"para": "oneOrMore"},
        },
        "para": {"kind": "block", "head": ["text", "em", "link"]},
        "text": {"kind": "inline"},
        "em": {"kind": "inline", "args": [["text"]]},
        "link": {"kind": "inline", "args": [["text", "em"], ["url"]]},
        "url": {"kind": "inline"},
    }
}


# ----- Path Fixtures -----

@pytest.fixture
def test_data_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def schema_path(test_data_dir):
    """Path to the article schema YAML file."""
    return test_data_dir / "article.schema.yaml"


@pytest.fixture
def valid_tree_path(test_data_dir):
    """Path to a tree that satisfies the article schema."""
    return test_data_dir / "article_valid.json"


@pytest.fixture
def invalid_tree_path(test_data_dir):
    """Path to a tree with three schema violations."""
    return test_data_dir / "article_invalid.yaml"


# ----- Schema Fixtures -----

@pytest.fixture
def article_schema():
    """The article schema as a Schema object."""
    return schema_from_dict(ARTICLE_SCHEMA)

