"""Claude Code subagent format (``.claude/agents/<name>.md``)."""

from __future__ import annotations

import re
from typing import Any, Optional

from oac_compat.adapters.base import BaseAdapter
from oac_compat.adapters.models import ConfigFormat, ConversionResult, ToolCapabilities
from oac_compat.agents.models import AgentFeature, OpenAgent, PermissionKind
from oac_compat.agents.parser import parse_frontmatter, render_document, split_frontmatter
from oac_compat.agents.schema import MODEL_PATTERN
from oac_compat.constants import CLAUDE_INHERIT_MODEL, CLAUDE_MODEL_ALIASES
from oac_compat.errors import FrontmatterParseError


CLAUDE_TOOL_NAMES: dict[str, str] = {
    "read": "Read",
    "write": "Write",
    "edit": "Edit",
    "multiedit": "MultiEdit",
    "bash": "Bash",
    "grep": "Grep",
    "glob": "Glob",
    "list": "LS",
    "webfetch": "WebFetch",
    "websearch": "WebSearch",
    "task": "Task",
    "todowrite": "TodoWrite",
    "notebookedit": "NotebookEdit",
}
_CANONICAL_TOOL_NAMES = {value: key for key, value in CLAUDE_TOOL_NAMES.items()}
_MODEL_RE = re.compile(MODEL_PATTERN)
_KNOWN_KEYS = ("name", "description", "tools", "model")


def _claude_model(model: str) -> tuple[Optional[str], Optional[str]]:
    """Return ``(alias, warning)`` for a canonical model identifier."""
    for alias, canonical in CLAUDE_MODEL_ALIASES.items():
        if model == canonical:
            return alias, None
    provider, _, model_id = model.partition("/")
    if provider == "anthropic":
        for alias in CLAUDE_MODEL_ALIASES:
            if alias in model_id:
                return alias, f"model: {model} approximated as {alias!r}"
    return None, f"model: {model} is not a Claude model; the subagent inherits the session model"


class ClaudeAdapter(BaseAdapter):
    NAME = "claude"
    DISPLAY_NAME = "Claude Code"
    CAPABILITIES = ToolCapabilities(
        features=frozenset(
            {AgentFeature.DESCRIPTION, AgentFeature.MODEL, AgentFeature.TOOL_RULES}
        ),
        config_format=ConfigFormat.MARKDOWN,
        output_pattern=".claude/agents/{name}.md",
        notes=(
            "Tools are an allow-list; deny rules are expressed by omission.",
            "Models map to the sonnet/opus/haiku aliases.",
        ),
    )

    def from_oac(self, agent: OpenAgent) -> ConversionResult:
        warnings = self.dropped_feature_warnings(
            agent,
            handled={
                AgentFeature.TOOL_TOGGLE,
                AgentFeature.TOOL_ASK,
                AgentFeature.TOOL_GRANULAR,
            },
        )
        all_tools = agent.frontmatter.tools.all_tools
        if all_tools is False:
            warnings.append(
                "tools.toggle: all-tools toggle (false) cannot be expressed; "
                "the subagent inherits all tools"
            )
        elif all_tools is True:
            warnings.append(
                "tools.toggle: all-tools toggle (true) expressed by omitting tools"
            )
        fm: dict[str, Any] = {
            "name": agent.metadata.name,
            "description": agent.metadata.description,
        }

        allowed: list[str] = []
        denied: list[str] = []
        for permission in agent.frontmatter.tools.permissions:
            tool = CLAUDE_TOOL_NAMES.get(permission.tool, permission.tool)
            kinds = permission.kinds()
            if permission.is_granular:
                warnings.append(
                    f"tools.granular: pattern rules for {permission.tool} collapsed "
                    "to tool-level access"
                )
                if kinds & {PermissionKind.ALLOW, PermissionKind.ASK}:
                    allowed.append(tool)
                else:
                    denied.append(permission.tool)
            elif permission.kind == PermissionKind.ASK:
                warnings.append(f"tools.ask: ask rule for {permission.tool} approximated as allow")
                allowed.append(tool)
            elif permission.kind == PermissionKind.ALLOW:
                allowed.append(tool)
            else:
                denied.append(permission.tool)

        if allowed:
            fm["tools"] = ", ".join(allowed)
            if denied:
                warnings.append(
                    f"tools.rules: deny rules ({', '.join(denied)}) expressed by "
                    "omission from the allow-list"
                )
        elif denied:
            warnings.append(
                f"tools.rules: deny-only rules ({', '.join(denied)}) cannot be expressed; "
                "the subagent inherits all tools"
            )

        model = agent.frontmatter.model
        if model is not None:
            alias, warning = _claude_model(model)
            if alias is not None:
                fm["model"] = alias
            if warning is not None:
                warnings.append(warning)

        return ConversionResult.ok(render_document(fm, agent.body), warnings)

    def to_oac(self, source: str, *, name_hint: Optional[str] = None) -> ConversionResult:
        try:
            header, body = split_frontmatter(source)
            raw = parse_frontmatter(header)
        except FrontmatterParseError as exc:
            return ConversionResult.fail([str(exc)])
        if not isinstance(raw, dict):
            return ConversionResult.fail(["frontmatter must be a mapping"])

        warnings = self.unknown_key_warnings(raw, _KNOWN_KEYS)
        candidate: dict[str, Any] = {}
        name = raw.get("name") or name_hint
        if name is not None:
            candidate["name"] = name
        if raw.get("description") is not None:
            candidate["description"] = raw["description"]

        tools = raw.get("tools")
        if isinstance(tools, str):
            names = [item.strip() for item in tools.split(",") if item.strip()]
        elif isinstance(tools, list):
            names = [str(item).strip() for item in tools if str(item).strip()]
        else:
            names = []
            if tools is not None:
                warnings.append(f"tools: unrecognized value {tools!r}; dropped")
        if names:
            candidate["tools"] = {
                _CANONICAL_TOOL_NAMES.get(item, item): PermissionKind.ALLOW.value
                for item in names
            }

        model = raw.get("model")
        if isinstance(model, str) and model != CLAUDE_INHERIT_MODEL:
            if model in CLAUDE_MODEL_ALIASES:
                candidate["model"] = CLAUDE_MODEL_ALIASES[model]
            elif _MODEL_RE.match(model):
                candidate["model"] = model
            elif _MODEL_RE.match(f"anthropic/{model}"):
                candidate["model"] = f"anthropic/{model}"
            else:
                warnings.append(f"model: unrecognized Claude model {model!r}; dropped")
        elif model is not None and model != CLAUDE_INHERIT_MODEL:
            warnings.append(f"model: unrecognized Claude model {model!r}; dropped")

        return self.build_agent(candidate, body, warnings)
