from oac_compat.adapters.base import BaseAdapter
from oac_compat.adapters.claude import ClaudeAdapter
from oac_compat.adapters.cursor import CursorAdapter
from oac_compat.adapters.models import ConfigFormat, ConversionResult, ToolCapabilities
from oac_compat.adapters.opencode import OpenCodeAdapter
from oac_compat.adapters.windsurf import WindsurfAdapter

BUILTIN_ADAPTERS: tuple[type[BaseAdapter], ...] = (
    OpenCodeAdapter,
    ClaudeAdapter,
    CursorAdapter,
    WindsurfAdapter,
)

__all__ = [
    "BUILTIN_ADAPTERS",
    "BaseAdapter",
    "ClaudeAdapter",
    "ConfigFormat",
    "ConversionResult",
    "CursorAdapter",
    "OpenCodeAdapter",
    "ToolCapabilities",
    "WindsurfAdapter",
]
