"""Canonical agent data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class PermissionKind(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    ASK = "ask"


class AgentMode(str, Enum):
    PRIMARY = "primary"
    SUBAGENT = "subagent"
    ALL = "all"


class AgentFeature(str, Enum):
    DESCRIPTION = "description"
    VERSION = "version"
    TAGS = "tags"
    MODE = "mode"
    MODEL = "model"
    TEMPERATURE = "temperature"
    TOOL_TOGGLE = "tools.toggle"
    TOOL_RULES = "tools.rules"
    TOOL_ASK = "tools.ask"
    TOOL_GRANULAR = "tools.granular"
    HOOKS = "hooks"
    SKILLS = "skills"
    DEPENDENCIES = "dependencies"
    CONTEXT = "context"


@dataclass(frozen=True)
class GranularPermission:
    pattern: str
    kind: PermissionKind


@dataclass(frozen=True)
class ToolPermission:
    """Rule for a single tool: a plain kind or a list of pattern rules."""

    tool: str
    kind: Optional[PermissionKind] = None
    patterns: tuple[GranularPermission, ...] = ()

    @property
    def is_granular(self) -> bool:
        return bool(self.patterns)

    def kinds(self) -> set[PermissionKind]:
        if self.kind is not None:
            return {self.kind}
        return {item.kind for item in self.patterns}


@dataclass(frozen=True)
class ToolAccess:
    all_tools: Optional[bool] = None
    permissions: tuple[ToolPermission, ...] = ()

    @property
    def is_unset(self) -> bool:
        return self.all_tools is None and not self.permissions

    def get(self, tool: str) -> Optional[ToolPermission]:
        for item in self.permissions:
            if item.tool == tool:
                return item
        return None


@dataclass(frozen=True)
class HookDefinition:
    event: str
    command: str
    matcher: Optional[str] = None
    timeout: Optional[int] = None


@dataclass(frozen=True)
class SkillReference:
    name: str
    path: Optional[str] = None


@dataclass(frozen=True)
class DependencyReference:
    path: str
    kind: Optional[str] = None


@dataclass(frozen=True)
class ContextReference:
    path: str
    description: Optional[str] = None


@dataclass(frozen=True)
class AgentMetadata:
    name: str
    description: str
    version: Optional[str] = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class AgentFrontmatter:
    mode: Optional[AgentMode] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    tools: ToolAccess = field(default_factory=ToolAccess)
    hooks: tuple[HookDefinition, ...] = ()
    skills: tuple[SkillReference, ...] = ()
    dependencies: tuple[DependencyReference, ...] = ()
    context: tuple[ContextReference, ...] = ()


@dataclass(frozen=True)
class OpenAgent:
    metadata: AgentMetadata
    frontmatter: AgentFrontmatter = field(default_factory=AgentFrontmatter)
    body: str = ""
    source_path: Optional[Path] = field(default=None, compare=False)

    @property
    def name(self) -> str:
        return self.metadata.name


def agent_features(agent: OpenAgent) -> frozenset[AgentFeature]:
    """Return the canonical features an agent actually uses."""
    used: set[AgentFeature] = set()
    metadata = agent.metadata
    fm = agent.frontmatter

    if metadata.description:
        used.add(AgentFeature.DESCRIPTION)
    if metadata.version is not None:
        used.add(AgentFeature.VERSION)
    if metadata.tags:
        used.add(AgentFeature.TAGS)
    if fm.mode is not None:
        used.add(AgentFeature.MODE)
    if fm.model is not None:
        used.add(AgentFeature.MODEL)
    if fm.temperature is not None:
        used.add(AgentFeature.TEMPERATURE)
    if fm.tools.all_tools is not None:
        used.add(AgentFeature.TOOL_TOGGLE)
    if fm.tools.permissions:
        used.add(AgentFeature.TOOL_RULES)
    for permission in fm.tools.permissions:
        if PermissionKind.ASK in permission.kinds():
            used.add(AgentFeature.TOOL_ASK)
        if permission.is_granular:
            used.add(AgentFeature.TOOL_GRANULAR)
    if fm.hooks:
        used.add(AgentFeature.HOOKS)
    if fm.skills:
        used.add(AgentFeature.SKILLS)
    if fm.dependencies:
        used.add(AgentFeature.DEPENDENCIES)
    if fm.context:
        used.add(AgentFeature.CONTEXT)
    return frozenset(used)
