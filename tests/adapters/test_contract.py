import pytest

from oac_compat.adapters import BUILTIN_ADAPTERS, ClaudeAdapter, CursorAdapter, WindsurfAdapter
from oac_compat.adapters.base import BaseAdapter, first_heading
from oac_compat.adapters.models import ConversionResult
from oac_compat.agents.models import AgentFeature, agent_features


@pytest.mark.parametrize("adapter_class", [ClaudeAdapter, CursorAdapter, WindsurfAdapter])
def test_every_unsupported_feature_is_warned(adapter_class, full_agent) -> None:
    adapter = adapter_class()
    result = adapter.from_oac(full_agent)
    assert result.success

    missing = agent_features(full_agent) - adapter.capabilities.features
    assert missing
    for feature in missing:
        assert any(
            warning.startswith(f"{feature.value}:") for warning in result.warnings
        ), feature


@pytest.mark.parametrize("adapter_class", BUILTIN_ADAPTERS)
def test_adapters_are_stateless(adapter_class, full_agent) -> None:
    adapter = adapter_class()
    assert adapter.from_oac(full_agent) == adapter.from_oac(full_agent)


@pytest.mark.parametrize("adapter_class", BUILTIN_ADAPTERS)
def test_adapter_identity(adapter_class) -> None:
    adapter = adapter_class()
    assert isinstance(adapter, BaseAdapter)
    assert adapter.name == adapter.name.lower()
    assert adapter.display_name
    assert AgentFeature.DESCRIPTION in adapter.capabilities.features
    assert "{name}" in adapter.capabilities.output_pattern


def test_base_adapter_is_abstract() -> None:
    with pytest.raises(TypeError):
        BaseAdapter()


def test_conversion_result_success_invariants() -> None:
    result = ConversionResult.ok("data", ["w"])
    assert result.success
    assert result.warnings == ("w",)
    assert result.errors == ()

    with pytest.raises(ValueError):
        ConversionResult(success=True, data="x", errors=("boom",))
    with pytest.raises(ValueError):
        ConversionResult(success=True)


def test_conversion_result_failure_invariants() -> None:
    result = ConversionResult.fail(["boom"], ["w"])
    assert not result.success
    assert result.data is None
    assert result.errors == ("boom",)

    with pytest.raises(ValueError):
        ConversionResult.fail([])
    with pytest.raises(ValueError):
        ConversionResult(success=False, data="x", errors=("boom",))


def test_capabilities_as_dict() -> None:
    payload = CursorAdapter().capabilities.as_dict()
    assert payload["features"] == ["description"]
    assert payload["config_format"] == "mdc"
    assert payload["output_pattern"] == ".cursor/rules/{name}.mdc"


def test_first_heading() -> None:
    assert first_heading("intro\n\n# Main Title ##\n\n## Sub\n") == "Main Title"
    assert first_heading("## Only sub\n") is None
