"""Split, parse and serialize agent documents with YAML frontmatter."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

import yaml

from oac_compat.agents.models import OpenAgent
from oac_compat.constants import FRONTMATTER_DELIMITER
from oac_compat.errors import FrontmatterParseError

_FRONTMATTER_RE = re.compile(
    rf"^{FRONTMATTER_DELIMITER}[ \t]*\r?\n"
    rf"(?:(.*?)\r?\n)?"
    rf"{FRONTMATTER_DELIMITER}[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


def split_frontmatter(text: str, path: Optional[Path] = None) -> tuple[str, str]:
    """Return ``(header, body)``; the body is everything after the closing delimiter."""
    if text.startswith("\ufeff"):
        text = text[1:]
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        first_line = text.splitlines()[0] if text else ""
        if text.startswith(FRONTMATTER_DELIMITER):
            detail = "frontmatter block is not closed"
        else:
            detail = "document does not start with a frontmatter block"
        raise FrontmatterParseError(path, detail, snippet=first_line or None)
    return match.group(1) or "", text[match.end() :]


def parse_frontmatter(header: str, path: Optional[Path] = None) -> Any:
    """Parse the header into a structural value; an empty header is ``{}``."""
    try:
        raw = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        lines = header.splitlines()
        snippet: Optional[str] = None
        detail = str(getattr(exc, "problem", None) or exc)
        if mark is not None:
            # +2: opening delimiter line, 1-based numbering
            detail = f"{detail} at line {mark.line + 2}"
            if 0 <= mark.line < len(lines):
                snippet = lines[mark.line]
        raise FrontmatterParseError(path, detail, snippet=snippet) from exc
    return {} if raw is None else raw


def to_frontmatter(agent: OpenAgent) -> dict[str, Any]:
    """Build the canonical frontmatter mapping for an agent."""
    metadata = agent.metadata
    fm_model = agent.frontmatter

    fm: dict[str, Any] = {
        "name": metadata.name,
        "description": metadata.description,
    }
    if metadata.version is not None:
        fm["version"] = metadata.version
    if metadata.tags:
        fm["tags"] = list(metadata.tags)
    if fm_model.mode is not None:
        fm["mode"] = fm_model.mode.value
    if fm_model.model is not None:
        fm["model"] = fm_model.model
    if fm_model.temperature is not None:
        fm["temperature"] = fm_model.temperature

    tools = fm_model.tools
    if tools.all_tools is not None:
        fm["tools"] = tools.all_tools
    elif tools.permissions:
        rules: dict[str, Any] = {}
        for permission in tools.permissions:
            if permission.is_granular:
                rules[permission.tool] = {
                    item.pattern: item.kind.value for item in permission.patterns
                }
            elif permission.kind is not None:
                rules[permission.tool] = permission.kind.value
        fm["tools"] = rules

    if fm_model.hooks:
        hooks: list[dict[str, Any]] = []
        for hook in fm_model.hooks:
            item: dict[str, Any] = {"event": hook.event}
            if hook.matcher is not None:
                item["matcher"] = hook.matcher
            item["command"] = hook.command
            if hook.timeout is not None:
                item["timeout"] = hook.timeout
            hooks.append(item)
        fm["hooks"] = hooks

    if fm_model.skills:
        fm["skills"] = [
            skill.name if skill.path is None else {"name": skill.name, "path": skill.path}
            for skill in fm_model.skills
        ]
    if fm_model.dependencies:
        fm["dependencies"] = [
            dep.path if dep.kind is None else {"path": dep.path, "kind": dep.kind}
            for dep in fm_model.dependencies
        ]
    if fm_model.context:
        fm["context"] = [
            ref.path
            if ref.description is None
            else {"path": ref.path, "description": ref.description}
            for ref in fm_model.context
        ]
    return fm


def render_document(fm: dict[str, Any], body: str) -> str:
    """Join a frontmatter mapping and a body; the body is written verbatim."""
    parts: list[str] = []
    if fm:
        parts.append(FRONTMATTER_DELIMITER)
        parts.append(
            yaml.safe_dump(
                fm, default_flow_style=False, sort_keys=False, allow_unicode=True
            ).rstrip()
        )
        parts.append(FRONTMATTER_DELIMITER)
    parts.append(body)
    return "\n".join(parts)


def serialize_agent(agent: OpenAgent) -> str:
    return render_document(to_frontmatter(agent), agent.body)
