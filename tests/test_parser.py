"""Tests for the tree-sitter JavaScript/TypeScript parser wrapper."""

import logging
from pathlib import Path

import pytest

from actionscan.parser import (
    UnsupportedLanguageError,
    create_parser,
    get_language,
    language_name_for_path,
    parse_bytes,
)


def test_get_language_returns_language():
    """get_language() returns a tree-sitter Language object for each grammar."""
    for name in ("javascript", "typescript", "tsx"):
        assert get_language(name)


def test_get_language_unknown():
    with pytest.raises(UnsupportedLanguageError):
        get_language("cobol")


def test_create_parser_returns_parser():
    """create_parser() returns a configured Parser."""
    parser = create_parser()
    assert parser is not None
    assert parser.language is not None


@pytest.mark.parametrize(
    "name,expected",
    [
        ("actions.js", "javascript"),
        ("page.jsx", "javascript"),
        ("lib.mjs", "javascript"),
        ("lib.cjs", "javascript"),
        ("actions.ts", "typescript"),
        ("lib.mts", "typescript"),
        ("page.tsx", "tsx"),
        ("PAGE.TSX", "tsx"),
    ],
)
def test_language_name_for_path(name, expected):
    assert language_name_for_path(Path(name)) == expected


def test_language_for_unsupported_path():
    with pytest.raises(UnsupportedLanguageError):
        language_name_for_path(Path("main.py"))


def test_parse_bytes_success(caplog):
    """Parsing valid JavaScript succeeds and logs."""
    source = b"function main() { return 0; }"
    parser = create_parser()
    with caplog.at_level(logging.DEBUG):
        tree = parse_bytes(source, parser=parser)
    assert tree is not None
    assert not tree.root_node.has_error
    assert tree.root_node.type == "program"
    assert "Parse succeeded" in caplog.text


def test_parse_bytes_typescript():
    tree = parse_bytes(b"function f(x: number): string { return ''; }", parser=create_parser("typescript"))
    assert not tree.root_node.has_error


def test_parse_bytes_invalid_logs_failure(caplog):
    """Parsing broken source logs a warning and still returns a tree."""
    source = b"function main( { broken"
    with caplog.at_level(logging.WARNING):
        tree = parse_bytes(source)
    assert tree.root_node is not None
    assert tree.root_node.has_error
    assert "Parse completed with errors" in caplog.text



def test_parse_sample_js():
    """The small JavaScript sample parses without errors."""
    sample_path = Path(__file__).parent / "sample.js"
    assert sample_path.exists(), "tests/sample.js must exist"
    tree = parse_bytes(sample_path.read_bytes())
    assert not tree.root_node.has_error
    assert tree.root_node.type == "program"
