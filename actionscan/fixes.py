# Apply opted-in suggestion edits to source text.

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from actionscan.findings.models import Finding, Fix

logger = logging.getLogger(__name__)


def apply_fix(source: bytes, fix: Fix) -> bytes:
    """Return source with fix.text inserted before byte fix.offset."""
    if fix.offset > len(source):
        raise ValueError(f"Fix offset {fix.offset} is past end of source ({len(source)} bytes)")
    return source[: fix.offset] + fix.text.encode("utf-8") + source[fix.offset :]


def apply_fixes(source: bytes, fixes: Iterable[Fix]) -> tuple[bytes, list[Fix]]:
    """
    Apply several insertions to source in one pass.

    Edits are applied from the highest offset down so earlier offsets stay
    valid. Two insertions at the same offset would stack, so only the first
    one seen is kept; the rest are skipped and logged.

    Returns:
        (new source, fixes actually applied in source order)
    """
    by_offset: dict[int, Fix] = {}
    for fix in fixes:
        if fix.offset in by_offset:
            logger.debug("Skipping overlapping fix at offset %d", fix.offset)
            continue
        by_offset[fix.offset] = fix

    result = source
    for offset in sorted(by_offset, reverse=True):
        result = apply_fix(result, by_offset[offset])
    return result, [by_offset[offset] for offset in sorted(by_offset)]


def apply_suggestions(source: bytes, findings: Sequence[Finding]) -> tuple[bytes, list[Fix]]:
    """Apply the first suggestion of every finding that offers one."""
    fixes = [f.suggestions[0].fix for f in findings if f.suggestions]
    return apply_fixes(source, fixes)
