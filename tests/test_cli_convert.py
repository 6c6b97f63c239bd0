"""Tests for the convert CLI command."""

from pathlib import Path

from oac_compat.__main__ import cli


def test_convert_to_claude_writes_file(write_file, full_agent_text: str, tmp_path: Path, cli_runner) -> None:
    source = write_file("agents/full-agent.md", full_agent_text)
    out = tmp_path / "out"
    result = cli_runner.invoke(cli, ["convert", str(source), "--to", "claude", "-o", str(out)])
    assert result.exit_code == 0
    target = out / ".claude" / "agents" / "full-agent.md"
    assert target.exists()
    text = target.read_text(encoding="utf-8")
    assert "model: sonnet" in text
    assert "warning" in result.output


def test_convert_directory_to_cursor(write_file, make_agent_text, tmp_path: Path, cli_runner) -> None:
    write_file("agents/one.md", make_agent_text("one"))
    write_file("agents/two.md", make_agent_text("two"))
    out = tmp_path / "out"
    result = cli_runner.invoke(
        cli, ["convert", str(tmp_path / "agents"), "--to", "cursor", "-o", str(out)]
    )
    assert result.exit_code == 0
    assert sorted(p.name for p in (out / ".cursor" / "rules").iterdir()) == ["one.mdc", "two.mdc"]


def test_convert_dry_run_writes_nothing(write_file, make_agent_text, tmp_path: Path, cli_runner) -> None:
    source = write_file("agents/one.md", make_agent_text("one"))
    out = tmp_path / "out"
    result = cli_runner.invoke(
        cli, ["convert", str(source), "--to", "windsurf", "-o", str(out), "--dry-run"]
    )
    assert result.exit_code == 0
    assert "No files were written" in result.output
    assert not out.exists()


def test_convert_reports_invalid_source(write_file, make_agent_text, tmp_path: Path, cli_runner) -> None:
    write_file("agents/good.md", make_agent_text("good"))
    write_file("agents/bad.md", "---\nname: bad\ndescription: d\nmode: boss\n---\n")
    out = tmp_path / "out"
    result = cli_runner.invoke(
        cli, ["convert", str(tmp_path / "agents"), "--to", "opencode", "-o", str(out)]
    )
    assert result.exit_code == 1
    assert (out / ".opencode" / "agent" / "good.md").exists()
    assert not (out / ".opencode" / "agent" / "bad.md").exists()


def test_convert_oversized_windsurf_rule_fails(write_file, make_agent_text, tmp_path: Path, cli_runner) -> None:
    source = write_file("agents/huge.md", make_agent_text("huge", body="x" * 13000))
    out = tmp_path / "out"
    result = cli_runner.invoke(cli, ["convert", str(source), "--to", "windsurf", "-o", str(out)])
    assert result.exit_code == 1
    assert not out.exists()


def test_convert_unknown_adapter(write_file, make_agent_text, cli_runner) -> None:
    source = write_file("agents/one.md", make_agent_text("one"))
    result = cli_runner.invoke(cli, ["convert", str(source), "--to", "zed"])
    assert result.exit_code == 1
    assert "Unknown adapter: zed" in result.output
