# Tree-sitter setup and AST parsing: parse JavaScript / TypeScript source into AST trees.

import logging
from pathlib import Path
from typing import Optional

import tree_sitter
from tree_sitter import Language
from tree_sitter_javascript import language as _js_language_capsule
from tree_sitter_typescript import language_tsx as _tsx_language_capsule
from tree_sitter_typescript import language_typescript as _ts_language_capsule

logger = logging.getLogger(__name__)

# Grammars: wrap the tree-sitter capsules for use with tree_sitter.Parser
_JS_LANGUAGE = Language(_js_language_capsule())
_TS_LANGUAGE = Language(_ts_language_capsule())
_TSX_LANGUAGE = Language(_tsx_language_capsule())

_LANGUAGES: dict[str, Language] = {
    "javascript": _JS_LANGUAGE,
    "typescript": _TS_LANGUAGE,
    "tsx": _TSX_LANGUAGE,
}

# The JavaScript grammar already understands JSX, so .jsx shares it.
SUFFIX_LANGUAGES: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}


class UnsupportedLanguageError(ValueError):
    """Raised when a file suffix does not map to a known grammar."""


def get_language(name: str = "javascript") -> Language:
    """Return the Tree-sitter Language object for the given grammar name."""
    try:
        return _LANGUAGES[name]
    except KeyError:
        raise UnsupportedLanguageError(f"Unknown language: {name}") from None


def language_name_for_path(path: Path) -> str:
    """Return the grammar name ("javascript", "typescript", "tsx") for a file path."""
    name = SUFFIX_LANGUAGES.get(path.suffix.lower())
    if name is None:
        raise UnsupportedLanguageError(f"Unsupported file type: {path}")
    return name


def create_parser(language: str = "javascript") -> tree_sitter.Parser:
    """Create and return a Tree-sitter Parser configured for the given grammar."""
    parser = tree_sitter.Parser(get_language(language))
    return parser


def parse_bytes(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> tree_sitter.Tree:
    """
    Parse source bytes into an AST.

    Args:
        source: UTF-8 encoded JavaScript / TypeScript source code.
        parser: Optional parser instance; if None, a JavaScript parser is created.

    Returns:
        The parse tree. Check tree.root_node for errors (e.g. ERROR nodes).
    """
    if parser is None:
        parser = create_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.warning(
            "Parse completed with errors: root=%s",
            tree.root_node.type,
        )
    else:
        logger.debug(
            "Parse succeeded: root=%s",
            tree.root_node.type,
        )
    return tree

