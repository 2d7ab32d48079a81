"""
File system traversal: walk directories and collect JavaScript / TypeScript sources.

This module provides utilities for recursively traversing directories to find
.js/.jsx/.mjs/.cjs files and, optionally, .ts/.tsx/.mts/.cts files for static
analysis. Build output, dependency and VCS directories are skipped.

Typical usage:
    from pathlib import Path
    from actionscan.traversal import find_source_files

    # JavaScript and TypeScript
    sources = find_source_files(Path("./app"))

    # JavaScript only, custom ignore set
    sources = find_source_files(
        Path("./app"),
        include_typescript=False,
        ignore_dirs={"node_modules", ".next"},
    )
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Set

from actionscan.parser import SUFFIX_LANGUAGES

logger = logging.getLogger(__name__)

JAVASCRIPT_SUFFIXES = frozenset(s for s, lang in SUFFIX_LANGUAGES.items() if lang == "javascript")
TYPESCRIPT_SUFFIXES = frozenset(s for s, lang in SUFFIX_LANGUAGES.items() if lang != "javascript")

# Default directories to ignore during traversal
DEFAULT_IGNORE_DIRS: Set[str] = {
    # Build and distribution directories
    "build",
    "dist",
    "out",
    ".next",
    ".nuxt",
    ".output",
    ".vercel",
    ".turbo",
    "coverage",

    # Test directories (we want to scan production code, not test fixtures)
    "__tests__",
    "__mocks__",
    "__fixtures__",

    # Dependency directories
    "node_modules",
    "bower_components",
    "vendor",

    # Version control
    ".git",
    ".svn",
    ".hg",

    # IDE and editor directories
    ".vscode",
    ".idea",

    # Python virtual environments and caches
    "venv",
    ".venv",
    "__pycache__",
    ".cache",
    ".pytest_cache",
}


def is_javascript_file(path: Path) -> bool:
    """
    Check if a file is a JavaScript source file (.js, .jsx, .mjs, .cjs).

    Examples:
        >>> is_javascript_file(Path("actions.js"))
        True
        >>> is_javascript_file(Path("actions.ts"))
        False
    """
    return path.suffix.lower() in JAVASCRIPT_SUFFIXES


def is_typescript_file(path: Path) -> bool:
    """
    Check if a file is a TypeScript source file (.ts, .tsx, .mts, .cts).

    Examples:
        >>> is_typescript_file(Path("page.tsx"))
        True
        >>> is_typescript_file(Path("page.jsx"))
        False
    """
    return path.suffix.lower() in TYPESCRIPT_SUFFIXES


def is_source_file(path: Path, include_typescript: bool = True) -> bool:
    """
    Check if a file is a source file this scanner can parse.

    Args:
        path: Path to the file to check.
        include_typescript: If False, only JavaScript suffixes are accepted.
    """
    if is_javascript_file(path):
        return True
    if include_typescript and is_typescript_file(path):
        return True
    return False


def should_ignore_directory(dir_path: Path, ignore_dirs: Set[str]) -> bool:
    """
    Check if a directory should be ignored during traversal.

    Only the directory name is compared (case-sensitive), not the full path.

    Examples:
        >>> should_ignore_directory(Path("node_modules"), {"node_modules"})
        True
        >>> should_ignore_directory(Path("app"), {"node_modules"})
        False
    """
    return dir_path.name in ignore_dirs


def find_source_files(
    root: Path,
    include_typescript: bool = True,
    ignore_dirs: Optional[Set[str]] = None,
    follow_symlinks: bool = False,
    filter_fn: Optional[Callable[[Path], bool]] = None,
) -> list[Path]:
    """
    Recursively find all JavaScript (and TypeScript) source files in a directory tree.

    Args:
        root: Root directory to start traversal from.
        include_typescript: If True, also collect TypeScript files.
        ignore_dirs: Set of directory names to skip. If None, uses DEFAULT_IGNORE_DIRS.
        follow_symlinks: If True, follow symbolic links during traversal.
                         If False (default), symlinks are skipped.
        filter_fn: Optional additional filter. Only files for which
                   filter_fn(path) returns True are included.

    Returns:
        Sorted list of matching source files.

    Raises:
        FileNotFoundError: If the root directory does not exist.
        NotADirectoryError: If root is not a directory.

    Notes:
        - Permission errors on subdirectories are logged but do not stop traversal.
        - The root path is resolved to an absolute path before traversal.
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()

    if not root.exists():
        logger.error("Root directory does not exist: %s", root)
        raise FileNotFoundError(f"Root directory does not exist: {root}")

    if not root.is_dir():
        logger.error("Root path is not a directory: %s", root)
        raise NotADirectoryError(f"Root path is not a directory: {root}")

    logger.info("Starting traversal from: %s", root)
    logger.debug(
        "Traversal config: include_typescript=%s, follow_symlinks=%s, ignore_dirs=%s",
        include_typescript,
        follow_symlinks,
        ignore_dirs,
    )

    collected_files: list[Path] = []

    def _walk_directory(current_dir: Path) -> None:
        try:
            for entry in current_dir.iterdir():
                if entry.is_symlink() and not follow_symlinks:
                    logger.debug("Skipping symlink: %s", entry)
                    continue

                if entry.is_dir():
                    if should_ignore_directory(entry, ignore_dirs):
                        logger.debug("Ignoring directory: %s", entry)
                        continue
                    _walk_directory(entry)

                elif entry.is_file():
                    if not is_source_file(entry, include_typescript=include_typescript):
                        continue
                    if filter_fn is not None and not filter_fn(entry):
                        logger.debug("Filtered out by custom filter: %s", entry)
                        continue
                    logger.debug("Found source file: %s", entry)
                    collected_files.append(entry)

        except PermissionError as e:
            logger.warning("Permission denied accessing directory %s: %s", current_dir, e)
        except OSError as e:
            logger.warning("Error accessing directory %s: %s", current_dir, e)

    _walk_directory(root)

    collected_files.sort()

    logger.info(
        "Traversal complete: found %d source file(s) in %s",
        len(collected_files),
        root,
    )

    return collected_files
