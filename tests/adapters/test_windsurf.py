from oac_compat.adapters import WindsurfAdapter
from oac_compat.agents.parser import parse_frontmatter, split_frontmatter
from oac_compat.agents.schema import validate_agent
from oac_compat.constants import WINDSURF_MAX_RULE_CHARS


def _agent(body: str = "Body\n", **fields):
    return validate_agent({"name": "rule", "description": "A rule", **fields}, body=body).value


def test_from_oac_defaults_to_model_decision() -> None:
    result = WindsurfAdapter().from_oac(_agent())
    assert result.success
    header, body = split_frontmatter(result.data)
    assert parse_frontmatter(header) == {"trigger": "model_decision", "description": "A rule"}
    assert body == "Body\n"
    assert result.warnings == ()


def test_from_oac_primary_agent_is_always_on() -> None:
    result = WindsurfAdapter().from_oac(_agent(mode="primary"))
    header, _ = split_frontmatter(result.data)
    assert parse_frontmatter(header)["trigger"] == "always_on"
    assert result.warnings == ("mode: primary approximated as the always_on trigger",)


def test_from_oac_subagent_mode_warns() -> None:
    result = WindsurfAdapter().from_oac(_agent(mode="subagent"))
    assert result.warnings == ("mode: subagent approximated as the model_decision trigger",)


def test_from_oac_rejects_oversized_body() -> None:
    body = "x" * (WINDSURF_MAX_RULE_CHARS + 1)
    result = WindsurfAdapter().from_oac(_agent(body=body, temperature=0.5))
    assert not result.success
    assert result.data is None
    assert str(WINDSURF_MAX_RULE_CHARS) in result.errors[0]
    assert result.warnings[0].startswith("temperature:")


def test_from_oac_body_at_limit_is_accepted() -> None:
    result = WindsurfAdapter().from_oac(_agent(body="x" * WINDSURF_MAX_RULE_CHARS))
    assert result.success


def test_from_oac_full_agent(full_agent) -> None:
    adapter = WindsurfAdapter()
    result = adapter.from_oac(full_agent)
    assert result.success
    assert str(adapter.output_path(full_agent)) == ".windsurf/rules/full-agent.md"
    prefixes = [warning.split(":", 1)[0] for warning in result.warnings]
    assert prefixes.count("mode") == 1
    assert "tools.rules" in prefixes


def test_to_oac_model_decision_rule() -> None:
    source = "---\ntrigger: model_decision\ndescription: Testing guidance\n---\n# Testing\n"
    result = WindsurfAdapter().to_oac(source)
    assert result.success
    assert result.data.name == "testing"
    assert result.warnings == ()


def test_to_oac_other_triggers_warn() -> None:
    glob_rule = WindsurfAdapter().to_oac(
        "---\ntrigger: glob\nglobs: '*.py'\ndescription: d\n---\n# Py\n"
    )
    assert glob_rule.success
    assert [warning.split(":", 1)[0] for warning in glob_rule.warnings] == ["trigger", "globs"]

    unknown = WindsurfAdapter().to_oac("---\ntrigger: sometimes\ndescription: d\n---\n# X\n")
    assert unknown.warnings[0] == "trigger: unknown activation 'sometimes'; dropped"


def test_to_oac_without_name_fails() -> None:
    result = WindsurfAdapter().to_oac("---\ndescription: d\n---\nplain text\n")
    assert not result.success
    assert "carry no agent name" in result.errors[0]
