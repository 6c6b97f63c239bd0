"""Cursor project rules (``.cursor/rules/<name>.mdc``).

A Cursor rule has no name, model or tool permissions: the agent becomes an
"agent requested" rule whose description tells Cursor when to pull it in.
"""

from __future__ import annotations

from typing import Any, Optional

from oac_compat.adapters.base import BaseAdapter
from oac_compat.adapters.models import ConfigFormat, ConversionResult, ToolCapabilities
from oac_compat.agents.models import AgentFeature, OpenAgent
from oac_compat.agents.parser import parse_frontmatter, render_document, split_frontmatter
from oac_compat.constants import FRONTMATTER_DELIMITER
from oac_compat.errors import FrontmatterParseError

_KNOWN_KEYS = ("description", "globs", "alwaysApply")


class CursorAdapter(BaseAdapter):
    NAME = "cursor"
    DISPLAY_NAME = "Cursor"
    CAPABILITIES = ToolCapabilities(
        features=frozenset({AgentFeature.DESCRIPTION}),
        config_format=ConfigFormat.MDC,
        output_pattern=".cursor/rules/{name}.mdc",
        notes=("The agent name lives in the rule filename.",),
    )

    def from_oac(self, agent: OpenAgent) -> ConversionResult:
        fm: dict[str, Any] = {
            "description": agent.metadata.description,
            "alwaysApply": False,
        }
        warnings = self.dropped_feature_warnings(agent)
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
                ["Cursor rules carry no agent name; pass a name hint or add a '# Title' heading"]
            )

        warnings = self.unknown_key_warnings(raw, _KNOWN_KEYS)
        globs = raw.get("globs")
        if globs:
            warnings.append(f"globs: file-pattern attachment ({globs}) has no canonical equivalent; dropped")
        if raw.get("alwaysApply") is True:
            warnings.append("alwaysApply: always-on activation has no canonical equivalent; dropped")

        candidate: dict[str, Any] = {"name": name}
        if raw.get("description") is not None:
            candidate["description"] = raw["description"]
        return self.build_agent(candidate, body, warnings)
