import sys
from pathlib import Path
from typing import Callable

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


FULL_AGENT_TEXT = """---
name: full-agent
description: Agent exercising every schema feature
version: 1.2.0
tags:
  - review
  - python
mode: subagent
model: anthropic/claude-sonnet-4-5
temperature: 0.2
tools:
  read: allow
  write: deny
  edit: ask
  bash:
    "git *": allow
    "rm *": deny
hooks:
  - event: PreToolUse
    matcher: Bash
    command: ./scripts/guard.sh
    timeout: 30
  - event: Stop
    command: echo done
skills:
  - code-review
  - name: testing
    path: skills/testing/SKILL.md
dependencies:
  - agents/helper.md
  - path: context/standards.md
    kind: context
context:
  - context/core/standards.md
  - path: docs/architecture.md
    description: System overview
---

# Full Agent

You review code.
"""


def agent_text(name: str, description: str = "Test agent", body: str = "Agent body.\n") -> str:
    return f"---\nname: {name}\ndescription: {description}\n---\n{body}"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def make_agent_text() -> Callable[..., str]:
    return agent_text


@pytest.fixture
def full_agent_text() -> str:
    return FULL_AGENT_TEXT


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def full_agent(tmp_path: Path):
    from oac_compat.agents.loader import load_agent

    path = tmp_path / "full-agent.md"
    path.write_text(FULL_AGENT_TEXT, encoding="utf-8")
    return load_agent(path)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
