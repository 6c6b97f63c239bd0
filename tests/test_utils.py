from pathlib import Path

from oac_compat.result import Err, Ok, Violation, failures, successes
from oac_compat.utils import compact_home_path, slugify, write_text


# --- slugify ---


def test_slugify_heading() -> None:
    assert slugify("Code Review: Python & Go") == "code-review-python-go"


def test_slugify_collapses_separators() -> None:
    assert slugify("  __Spaced__  out__ ") == "spaced-out"


def test_slugify_without_letters() -> None:
    assert slugify("!!!") == ""


# --- write_text ---


def test_write_text_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "agent.md"
    write_text(target, "content\n")
    assert target.read_text(encoding="utf-8") == "content\n"


# --- compact_home_path ---


def test_compact_home_path(tmp_path: Path) -> None:
    assert compact_home_path(tmp_path) == "~"
    assert compact_home_path(tmp_path / ".claude" / "agents") == "~/.claude/agents"
    assert compact_home_path("/srv/agents") == "/srv/agents"


# --- results ---


def test_violation_ordering_and_text() -> None:
    items = sorted([Violation("tools.bash", "bad"), Violation("name", "empty")])
    assert [str(item) for item in items] == ["name: empty", "tools.bash: bad"]


def test_successes_and_failures() -> None:
    results = [Ok(1), Err("boom"), Ok(2)]
    assert successes(results) == [1, 2]
    assert failures(results) == ["boom"]
    assert Ok(1).ok and not Err("x").ok
