# Per-file analysis context: store file path, source code, AST, and helper methods.
# Handles reading/parsing JS/TS files, error handling for unreadable/malformed files,
# and logging of node/function counts so ASTs are ready for rules.

import logging
from pathlib import Path
from typing import Optional

from actionscan.nodes import is_function_node
from actionscan.parser import create_parser, language_name_for_path, parse_bytes
from tree_sitter import Parser, Tree
from tree_sitter import Node as TSNode

logger = logging.getLogger(__name__)


def _count_nodes(node: TSNode) -> int:
    """Count all descendants of node (including node itself)."""
    count = 1
    for child in node.children:
        count += _count_nodes(child)
    return count


def _count_functions(root: TSNode) -> int:
    """Count function-like nodes (declarations, expressions, arrows, methods) under root."""
    count = 0
    if is_function_node(root):
        count += 1
    for child in root.children:
        count += _count_functions(child)
    return count


def count_tree_stats(root: TSNode) -> tuple[int, int]:
    """
    Return (total node count, function count) for the tree.

    Useful for logging how much was parsed (nodes and functions).
    """
    return _count_nodes(root), _count_functions(root)


class FileContext:
    """
    Per-file state for static analysis: path, raw source bytes, and AST.

    Rules use context.path, context.source, and context.tree. Use
    get_source_span(context, node) for snippets.
    """

    def __init__(
        self,
        path: Path,
        source: bytes,
        tree: Tree,
        *,
        has_parse_errors: bool = False,
    ) -> None:
        self.path = path
        self.source = source
        self.tree = tree
        self.has_parse_errors = has_parse_errors

    @property
    def root_node(self) -> TSNode:
        """Convenience access to the AST root."""
        return self.tree.root_node


def get_source_span(context: FileContext, node: TSNode) -> str:
    """
    Return the substring of context.source for the given node's byte range.

    Decodes with errors="replace" so bad UTF-8 does not crash.
    """
    return context.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def create_context(
    path: Path,
    parser: Optional[Parser] = None,
) -> Optional[FileContext]:
    """
    Read a JS/TS file and parse it into a FileContext (path, source, AST).

    - Unreadable file (permission, missing): returns None and logs error.
    - Malformed source (syntax errors): still returns a FileContext with the tree
      and sets has_parse_errors=True; logs a warning and node/function counts.
    - Success: returns FileContext and logs node count and function count.

    If parser is None, one is created for the grammar matching the file suffix
    (raises UnsupportedLanguageError for unknown suffixes).

    Returns:
        FileContext if the file was read (and parsed), None if the file
        could not be read.
    """
    if parser is None:
        parser = create_parser(language_name_for_path(path))

    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None

    tree = parse_bytes(source, parser=parser)
    has_errors = tree.root_node.has_error
    if has_errors:
        logger.warning("File %s parsed with syntax errors; AST may be incomplete", path)

    node_count, func_count = count_tree_stats(tree.root_node)
    logger.info(
        "Parsed %s: %d nodes, %d function(s)%s",
        path,
        node_count,
        func_count,
        " (with parse errors)" if has_errors else "",
    )

    return FileContext(
        path=path,
        source=source,
        tree=tree,
        has_parse_errors=has_errors,
    )


def load_contexts(paths: list[Path]) -> list[FileContext]:
    """
    Read and parse multiple files into FileContexts (ASTs in memory).

    Unreadable or missing files are skipped (logged); malformed files still
    get a context with has_parse_errors=True. One parser is kept per grammar
    and shared across files of that language.

    Args:
        paths: List of source paths (e.g. from traversal.find_source_files).

    Returns:
        List of FileContext instances, one per file that could be read.
        Order matches input order; failed files are omitted.
    """
    parsers: dict[str, Parser] = {}

    contexts: list[FileContext] = []
    for path in paths:
        language = language_name_for_path(path)
        if language not in parsers:
            parsers[language] = create_parser(language)
        ctx = create_context(path, parser=parsers[language])
        if ctx is not None:
            contexts.append(ctx)
    return contexts
