"""Adapter contract shared by every tool integration."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import Any, ClassVar, Iterable, Optional

from oac_compat.adapters.models import ConversionResult, ToolCapabilities
from oac_compat.agents.models import AgentFeature, OpenAgent, agent_features
from oac_compat.agents.schema import validate_agent
from oac_compat.result import Err
from oac_compat.utils import slugify

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)


def describe_feature(agent: OpenAgent, feature: AgentFeature) -> str:
    metadata = agent.metadata
    fm = agent.frontmatter
    tools = fm.tools
    if feature == AgentFeature.DESCRIPTION:
        return "description"
    if feature == AgentFeature.VERSION:
        return f"version {metadata.version}"
    if feature == AgentFeature.TAGS:
        return f"tags ({', '.join(metadata.tags)})"
    if feature == AgentFeature.MODE:
        return f"mode {fm.mode.value if fm.mode else ''}"
    if feature == AgentFeature.MODEL:
        return f"model {fm.model}"
    if feature == AgentFeature.TEMPERATURE:
        return f"temperature {fm.temperature}"
    if feature == AgentFeature.TOOL_TOGGLE:
        return f"all-tools toggle ({str(tools.all_tools).lower()})"
    if feature == AgentFeature.TOOL_RULES:
        return f"per-tool rules for {', '.join(p.tool for p in tools.permissions)}"
    if feature == AgentFeature.TOOL_ASK:
        return "ask permission rules"
    if feature == AgentFeature.TOOL_GRANULAR:
        granular = [p.tool for p in tools.permissions if p.is_granular]
        return f"pattern rules for {', '.join(granular)}"
    if feature == AgentFeature.HOOKS:
        events = ", ".join(hook.event for hook in fm.hooks)
        return f"{len(fm.hooks)} hook(s) ({events})"
    if feature == AgentFeature.SKILLS:
        return f"skill references ({', '.join(s.name for s in fm.skills)})"
    if feature == AgentFeature.DEPENDENCIES:
        return f"dependencies ({', '.join(d.path for d in fm.dependencies)})"
    return f"context references ({', '.join(c.path for c in fm.context)})"


def first_heading(body: str) -> Optional[str]:
    match = _HEADING_RE.search(body)
    return match.group(1) if match else None


class BaseAdapter(ABC):
    """Bidirectional converter between OpenAgent and one tool's documents.

    Subclasses set ``NAME``, ``DISPLAY_NAME`` and ``CAPABILITIES``. Adapters
    hold no per-call state, so one instance can serve concurrent conversions.
    """

    NAME: ClassVar[str]
    DISPLAY_NAME: ClassVar[str]
    CAPABILITIES: ClassVar[ToolCapabilities]

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def display_name(self) -> str:
        return self.DISPLAY_NAME

    @property
    def capabilities(self) -> ToolCapabilities:
        return self.CAPABILITIES

    @abstractmethod
    def to_oac(self, source: str, *, name_hint: Optional[str] = None) -> ConversionResult:
        """Parse a tool document into an OpenAgent."""

    @abstractmethod
    def from_oac(self, agent: OpenAgent) -> ConversionResult:
        """Render an OpenAgent as a tool document."""

    def output_path(self, agent: OpenAgent) -> PurePosixPath:
        return PurePosixPath(self.capabilities.output_pattern.format(name=agent.name))

    def dropped_feature_warnings(
        self, agent: OpenAgent, handled: Iterable[AgentFeature] = ()
    ) -> list[str]:
        """One warning per used feature this adapter cannot express.

        Features in ``handled`` are skipped; the adapter reports those itself.
        """
        skip = set(handled)
        unsupported = agent_features(agent) - self.capabilities.features - skip
        return [
            f"{feature.value}: {describe_feature(agent, feature)} "
            f"has no {self.display_name} equivalent; dropped"
            for feature in sorted(unsupported, key=lambda item: item.value)
        ]

    def unknown_key_warnings(self, raw: dict[str, Any], known: Iterable[str]) -> list[str]:
        known_keys = set(known)
        return [
            f"{key}: {self.display_name} field has no canonical equivalent; dropped"
            for key in raw
            if key not in known_keys
        ]

    def derive_name(self, body: str, name_hint: Optional[str]) -> Optional[str]:
        if name_hint:
            return name_hint
        heading = first_heading(body)
        return slugify(heading) if heading else None

    def build_agent(
        self, candidate: dict[str, Any], body: str, warnings: list[str]
    ) -> ConversionResult:
        """Validate a canonical frontmatter mapping and wrap the outcome."""
        outcome = validate_agent(candidate, body=body)
        if isinstance(outcome, Err):
            errors = [str(item) for item in outcome.error]
            logger.debug("%s to_oac rejected: %s", self.name, errors)
            return ConversionResult.fail(errors, warnings)
        logger.debug("%s to_oac produced %s", self.name, outcome.value.name)
        return ConversionResult.ok(outcome.value, warnings)
