"""Convert OpenAgents Control agent definitions to and from other tools."""

from oac_compat.adapters import (
    BaseAdapter,
    ClaudeAdapter,
    ConversionResult,
    CursorAdapter,
    OpenCodeAdapter,
    ToolCapabilities,
    WindsurfAdapter,
)
from oac_compat.agents import AgentLoader, OpenAgent, load_agent, load_agents
from oac_compat.errors import (
    AdapterRegistryError,
    AgentLoadError,
    FrontmatterParseError,
    OACError,
    ValidationError,
)
from oac_compat.registry import AdapterInfo, AdapterRegistry, create_default_registry

VERSION = "0.1.0"

__all__ = [
    "AdapterInfo",
    "AdapterRegistry",
    "AdapterRegistryError",
    "AgentLoadError",
    "AgentLoader",
    "BaseAdapter",
    "ClaudeAdapter",
    "ConversionResult",
    "CursorAdapter",
    "FrontmatterParseError",
    "OACError",
    "OpenAgent",
    "OpenCodeAdapter",
    "ToolCapabilities",
    "VERSION",
    "ValidationError",
    "WindsurfAdapter",
    "create_default_registry",
    "load_agent",
    "load_agents",
]
