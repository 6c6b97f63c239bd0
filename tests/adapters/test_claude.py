from oac_compat.adapters import ClaudeAdapter
from oac_compat.agents.parser import parse_frontmatter, split_frontmatter
from oac_compat.agents.schema import validate_agent


def _agent(**fields):
    outcome = validate_agent({"name": "helper", "description": "Helps", **fields}, body="Body\n")
    return outcome.value


def _exported_frontmatter(result) -> dict:
    header, _ = split_frontmatter(result.data)
    return parse_frontmatter(header)


def test_from_oac_full_agent(full_agent) -> None:
    result = ClaudeAdapter().from_oac(full_agent)
    assert result.success
    fm = _exported_frontmatter(result)
    assert fm == {
        "name": "full-agent",
        "description": "Agent exercising every schema feature",
        "tools": "Read, Edit, Bash",
        "model": "sonnet",
    }
    assert result.data.endswith(full_agent.body)

    prefixes = [warning.split(":", 1)[0] for warning in result.warnings]
    for feature in ("context", "dependencies", "hooks", "mode", "skills", "tags", "temperature", "version"):
        assert feature in prefixes
    assert "tools.ask" in prefixes
    assert "tools.granular" in prefixes
    assert any("deny rules (write)" in warning for warning in result.warnings)


def test_from_oac_minimal_agent_has_no_warnings() -> None:
    result = ClaudeAdapter().from_oac(_agent())
    assert result.success
    assert result.warnings == ()
    assert _exported_frontmatter(result) == {"name": "helper", "description": "Helps"}


def test_from_oac_deny_only_rules() -> None:
    result = ClaudeAdapter().from_oac(_agent(tools={"bash": "deny"}))
    assert "tools" not in _exported_frontmatter(result)
    assert result.warnings[0].startswith("tools.rules: deny-only rules (bash)")


def test_from_oac_disabled_tools_warns_about_inheritance() -> None:
    result = ClaudeAdapter().from_oac(_agent(tools=False))
    assert "tools" not in _exported_frontmatter(result)
    assert result.warnings == (
        "tools.toggle: all-tools toggle (false) cannot be expressed; "
        "the subagent inherits all tools",
    )


def test_from_oac_enabled_tools_is_omitted() -> None:
    result = ClaudeAdapter().from_oac(_agent(tools=True))
    assert "tools" not in _exported_frontmatter(result)
    assert result.warnings == ("tools.toggle: all-tools toggle (true) expressed by omitting tools",)


def test_from_oac_model_mapping() -> None:
    approximated = ClaudeAdapter().from_oac(_agent(model="anthropic/claude-opus-4-0"))
    assert _exported_frontmatter(approximated)["model"] == "opus"
    assert "approximated" in approximated.warnings[0]

    foreign = ClaudeAdapter().from_oac(_agent(model="openai/gpt-4o"))
    assert "model" not in _exported_frontmatter(foreign)
    assert foreign.warnings[0].startswith("model: openai/gpt-4o is not a Claude model")


def test_to_oac_maps_tools_and_model() -> None:
    source = (
        "---\n"
        "name: helper\n"
        "description: Helps out\n"
        "tools: Read, Grep, LS, mcp__github\n"
        "model: opus\n"
        "color: red\n"
        "---\n"
        "You help.\n"
    )
    result = ClaudeAdapter().to_oac(source)
    assert result.success
    agent = result.data
    assert [(item.tool, item.kind.value) for item in agent.frontmatter.tools.permissions] == [
        ("read", "allow"),
        ("grep", "allow"),
        ("list", "allow"),
        ("mcp__github", "allow"),
    ]
    assert agent.frontmatter.model == "anthropic/claude-opus-4-1"
    assert agent.body == "You help.\n"
    assert result.warnings == ("color: Claude Code field has no canonical equivalent; dropped",)


def test_to_oac_tool_list_and_full_model_id() -> None:
    source = "---\nname: a\ndescription: d\ntools: [Bash, Edit]\nmodel: claude-3-5-haiku-20241022\n---\n"
    result = ClaudeAdapter().to_oac(source)
    assert result.success
    assert [item.tool for item in result.data.frontmatter.tools.permissions] == ["bash", "edit"]
    assert result.data.frontmatter.model == "anthropic/claude-3-5-haiku-20241022"


def test_to_oac_inherit_model_is_omitted() -> None:
    result = ClaudeAdapter().to_oac("---\nname: a\ndescription: d\nmodel: inherit\n---\n")
    assert result.success
    assert result.data.frontmatter.model is None
    assert result.warnings == ()


def test_to_oac_unrecognized_model_warns() -> None:
    result = ClaudeAdapter().to_oac("---\nname: a\ndescription: d\nmodel: Big Model!\n---\n")
    assert result.success
    assert result.data.frontmatter.model is None
    assert result.warnings[0].startswith("model: unrecognized Claude model")


def test_to_oac_uses_name_hint() -> None:
    result = ClaudeAdapter().to_oac("---\ndescription: d\n---\n", name_hint="from-file")
    assert result.data.name == "from-file"


def test_to_oac_missing_description_fails() -> None:
    result = ClaudeAdapter().to_oac("---\nname: a\n---\n")
    assert not result.success
    assert result.errors == ("description: is a required field",)


def test_roundtrip_keeps_supported_fields() -> None:
    adapter = ClaudeAdapter()
    agent = _agent(model="anthropic/claude-haiku-4-5", tools={"read": "allow", "bash": "allow"})
    result = adapter.to_oac(adapter.from_oac(agent).data)
    assert result.success
    assert result.data == agent
