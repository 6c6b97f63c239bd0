"""OpenCode / OpenAgents Control native agent format."""

from __future__ import annotations

from typing import Any, Optional

from oac_compat.adapters.base import BaseAdapter
from oac_compat.adapters.models import ConfigFormat, ConversionResult, ToolCapabilities
from oac_compat.agents.models import AgentFeature, OpenAgent
from oac_compat.agents.parser import parse_frontmatter, serialize_agent, split_frontmatter
from oac_compat.agents.schema import AGENT_SCHEMA
from oac_compat.errors import FrontmatterParseError

_CANONICAL_KEYS = tuple(AGENT_SCHEMA["$defs"]["frontmatter"]["properties"])


class OpenCodeAdapter(BaseAdapter):
    """Near-identity: the OpenCode agent format IS the canonical format.

    Plain OpenCode files name the agent by filename and keep tool rules under
    ``permission``; both are folded into the canonical shape on import.
    """

    NAME = "opencode"
    DISPLAY_NAME = "OpenCode"
    CAPABILITIES = ToolCapabilities(
        features=frozenset(AgentFeature),
        config_format=ConfigFormat.MARKDOWN,
        output_pattern=".opencode/agent/{name}.md",
        notes=("Canonical format; every feature round-trips.",),
    )

    def to_oac(self, source: str, *, name_hint: Optional[str] = None) -> ConversionResult:
        try:
            header, body = split_frontmatter(source)
            raw = parse_frontmatter(header)
        except FrontmatterParseError as exc:
            return ConversionResult.fail([str(exc)])
        if not isinstance(raw, dict):
            return ConversionResult.fail(["frontmatter must be a mapping"])

        warnings: list[str] = []
        candidate: dict[str, Any] = dict(raw)
        if "name" not in candidate and name_hint:
            candidate = {"name": name_hint, **candidate}

        if "permission" in candidate:
            permission = candidate.pop("permission")
            tools = candidate.get("tools")
            if isinstance(permission, dict) and (tools is None or isinstance(tools, dict)):
                merged = dict(tools or {})
                merged.update(permission)
                candidate["tools"] = merged
            else:
                warnings.append(
                    "permission: cannot be merged with a boolean tools toggle; dropped"
                )

        warnings.extend(self.unknown_key_warnings(candidate, _CANONICAL_KEYS))
        candidate = {k: v for k, v in candidate.items() if k in _CANONICAL_KEYS}
        return self.build_agent(candidate, body, warnings)

    def from_oac(self, agent: OpenAgent) -> ConversionResult:
        return ConversionResult.ok(serialize_agent(agent))
