"""Windsurf workspace rules (``.windsurf/rules/<name>.md``)."""

from __future__ import annotations

from typing import Any, Optional

from oac_compat.adapters.base import BaseAdapter
from oac_compat.adapters.models import ConfigFormat, ConversionResult, ToolCapabilities
from oac_compat.agents.models import AgentFeature, AgentMode, OpenAgent
from oac_compat.agents.parser import parse_frontmatter, render_document, split_frontmatter
from oac_compat.constants import FRONTMATTER_DELIMITER, WINDSURF_MAX_RULE_CHARS
from oac_compat.errors import FrontmatterParseError

TRIGGER_ALWAYS_ON = "always_on"
TRIGGER_MODEL_DECISION = "model_decision"
TRIGGERS = (TRIGGER_ALWAYS_ON, "manual", TRIGGER_MODEL_DECISION, "glob")

_KNOWN_KEYS = ("trigger", "description", "globs")


class WindsurfAdapter(BaseAdapter):
    NAME = "windsurf"
    DISPLAY_NAME = "Windsurf"
    CAPABILITIES = ToolCapabilities(
        features=frozenset({AgentFeature.DESCRIPTION}),
        config_format=ConfigFormat.MARKDOWN,
        output_pattern=".windsurf/rules/{name}.md",
        notes=(
            f"Rule files are limited to {WINDSURF_MAX_RULE_CHARS} characters.",
            "Primary agents become always-on rules.",
        ),
    )

    def from_oac(self, agent: OpenAgent) -> ConversionResult:
        warnings = self.dropped_feature_warnings(agent, handled={AgentFeature.MODE})
        if len(agent.body) > WINDSURF_MAX_RULE_CHARS:
            return ConversionResult.fail(
                [
                    f"body is {len(agent.body)} characters; Windsurf rules are limited "
                    f"to {WINDSURF_MAX_RULE_CHARS}"
                ],
                warnings,
            )

        trigger = (
            TRIGGER_ALWAYS_ON
            if agent.frontmatter.mode == AgentMode.PRIMARY
            else TRIGGER_MODEL_DECISION
        )
        if agent.frontmatter.mode is not None:
            warnings.append(
                f"mode: {agent.frontmatter.mode.value} approximated as the {trigger} trigger"
            )
        fm: dict[str, Any] = {
            "trigger": trigger,
            "description": agent.metadata.description,
        }
        return ConversionResult.ok(render_document(fm, agent.body), warnings)

    def to_oac(self, source: str, *, name_hint: Optional[str] = None) -> ConversionResult:
        raw: Any = {}
        body = source
        if source.lstrip("\ufeff").startswith(FRONTMATTER_DELIMITER):
            try:
                header, body = split_frontmatter(source)
                raw = parse_frontmatter(header)
            except FrontmatterParseError as exc:
                return ConversionResult.fail([str(exc)])
        if not isinstance(raw, dict):
            return ConversionResult.fail(["frontmatter must be a mapping"])

        name = self.derive_name(body, name_hint)
        if not name:
            return ConversionResult.fail(
                ["Windsurf rules carry no agent name; pass a name hint or add a '# Title' heading"]
            )

        warnings = self.unknown_key_warnings(raw, _KNOWN_KEYS)
        trigger = raw.get("trigger", TRIGGER_MODEL_DECISION)
        if trigger not in TRIGGERS:
            warnings.append(f"trigger: unknown activation {trigger!r}; dropped")
        elif trigger != TRIGGER_MODEL_DECISION:
            warnings.append(f"trigger: {trigger} activation has no canonical equivalent; dropped")
        if raw.get("globs"):
            warnings.append(
                f"globs: file-pattern attachment ({raw['globs']}) has no canonical equivalent; dropped"
            )

        candidate: dict[str, Any] = {"name": name}
        if raw.get("description") is not None:
            candidate["description"] = raw["description"]
        return self.build_agent(candidate, body, warnings)
