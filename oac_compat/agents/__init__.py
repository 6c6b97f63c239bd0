from oac_compat.agents.loader import AgentLoader, load_agent, load_agents, parse_agent
from oac_compat.agents.models import (
    AgentFeature,
    AgentFrontmatter,
    AgentMetadata,
    AgentMode,
    ContextReference,
    DependencyReference,
    GranularPermission,
    HookDefinition,
    OpenAgent,
    PermissionKind,
    SkillReference,
    ToolAccess,
    ToolPermission,
    agent_features,
)
from oac_compat.agents.parser import serialize_agent

__all__ = [
    "AgentFeature",
    "AgentFrontmatter",
    "AgentLoader",
    "AgentMetadata",
    "AgentMode",
    "ContextReference",
    "DependencyReference",
    "GranularPermission",
    "HookDefinition",
    "OpenAgent",
    "PermissionKind",
    "SkillReference",
    "ToolAccess",
    "ToolPermission",
    "agent_features",
    "load_agent",
    "load_agents",
    "parse_agent",
    "serialize_agent",
]
