"""Tests for the typer CLI in actionscan.main."""

from typer.testing import CliRunner

from actionscan.main import app

runner = CliRunner()

SYNC_ACTION = "function addToCart(data) {\n  'use server';\n}\n"
ASYNC_ACTION = "async function addToCart(data) {\n  'use server';\n}\n"


def test_clean_file_exits_zero(tmp_path):
    path = tmp_path / "actions.js"
    path.write_text(ASYNC_ACTION)
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 0
    assert "No issues found." in result.output


def test_sync_action_exits_one(tmp_path):
    path = tmp_path / "actions.js"
    path.write_text(SYNC_ACTION)
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 1
    assert "1 finding" in result.output
    # reporting never touches the file
    assert path.read_text() == SYNC_ACTION


def test_apply_suggestions_rewrites_file(tmp_path):
    path = tmp_path / "actions.js"
    path.write_text(SYNC_ACTION)
    result = runner.invoke(app, [str(path), "--apply-suggestions"])
    assert result.exit_code == 0
    assert "Applied 1 suggestion(s)." in result.output
    assert path.read_text() == ASYNC_ACTION


def test_directory_skips_ignored_dirs(tmp_path):
    (tmp_path / "app").mkdir()
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "app" / "actions.ts").write_text("export function save(d: FormData) { 'use server'; }\n")
    (tmp_path / "app" / "page.jsx").write_text("export default function Page() { return <div />; }\n")
    (tmp_path / "node_modules" / "dep.js").write_text(SYNC_ACTION)
    result = runner.invoke(app, [str(tmp_path)])
    assert result.exit_code == 1
    assert "1 finding" in result.output
    assert "Files Summary" in result.output


def test_severity_option(tmp_path):
    path = tmp_path / "actions.js"
    path.write_text(SYNC_ACTION)
    result = runner.invoke(app, [str(path), "--severity", "error"])
    assert result.exit_code == 1
    assert "1 error" in result.output


def test_invalid_severity_is_usage_error(tmp_path):
    path = tmp_path / "actions.js"
    path.write_text(SYNC_ACTION)
    result = runner.invoke(app, [str(path), "--severity", "fatal"])
    assert result.exit_code == 2


def test_unknown_rule_is_usage_error(tmp_path):
    path = tmp_path / "actions.js"
    path.write_text(SYNC_ACTION)
    result = runner.invoke(app, [str(path), "--select", "no-such-rule"])
    assert result.exit_code == 2


def test_select_known_rule(tmp_path):
    path = tmp_path / "actions.js"
    path.write_text(SYNC_ACTION)
    result = runner.invoke(app, [str(path), "--select", "async-server-action"])
    assert result.exit_code == 1


def test_unsupported_file_type_is_usage_error(tmp_path):
    path = tmp_path / "script.py"
    path.write_text("print('use server')\n")
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 2


def test_missing_target_is_usage_error(tmp_path):
    result = runner.invoke(app, [str(tmp_path / "missing.js")])
    assert result.exit_code == 2
