"""Tests for applying suggestion edits to source text."""

import logging
from pathlib import Path

import pytest

from actionscan.findings.models import Finding, Fix, Location, Suggestion
from actionscan.fixes import apply_fix, apply_fixes, apply_suggestions


def _fix(offset: int, text: str = "async ") -> Fix:
    return Fix(offset=offset, text=text, line=1, column=offset + 1)


def _finding(*fixes: Fix) -> Finding:
    return Finding(
        rule_id="async-server-action",
        message="Server Actions must be async",
        location=Location(path=Path("a.js"), line=1, column=1),
        suggestions=tuple(
            Suggestion(message_id="suggest-async", description="Make this function async", fix=f)
            for f in fixes
        ),
    )


def test_apply_fix_inserts_text():
    assert apply_fix(b"function f() {}", _fix(0)) == b"async function f() {}"


def test_apply_fix_at_end():
    assert apply_fix(b"ab", _fix(2, "c")) == b"abc"


def test_apply_fix_past_end_raises():
    with pytest.raises(ValueError):
        apply_fix(b"ab", _fix(5))


def test_apply_fix_handles_multibyte_prefix():
    source = "const é = (d) => {}".encode("utf-8")
    offset = source.index(b"(d)")
    assert apply_fix(source, _fix(offset)).decode("utf-8") == "const é = async (d) => {}"


def test_apply_fixes_keeps_offsets_valid():
    source = b"function a() {}\nfunction b() {}"
    new_source, applied = apply_fixes(source, [_fix(0), _fix(16)])
    assert new_source == b"async function a() {}\nasync function b() {}"
    assert [f.offset for f in applied] == [0, 16]


def test_apply_fixes_skips_duplicate_offsets(caplog):
    with caplog.at_level(logging.DEBUG):
        new_source, applied = apply_fixes(b"function a() {}", [_fix(0), _fix(0)])
    assert new_source == b"async function a() {}"
    assert len(applied) == 1
    assert "Skipping overlapping fix" in caplog.text


def test_apply_suggestions_uses_first_suggestion_only():
    finding = _finding(_fix(0), _fix(0, "export "))
    new_source, applied = apply_suggestions(b"function a() {}", [finding])
    assert new_source == b"async function a() {}"
    assert len(applied) == 1


def test_apply_suggestions_ignores_findings_without_suggestions():
    new_source, applied = apply_suggestions(b"function a() {}", [_finding()])
    assert new_source == b"function a() {}"
    assert applied == []
