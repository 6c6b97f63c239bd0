"""Conversion result and capability models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from oac_compat.agents.models import AgentFeature


class ConfigFormat(str, Enum):
    MARKDOWN = "markdown"
    MDC = "mdc"


@dataclass(frozen=True)
class ConversionResult:
    success: bool
    data: Any = None
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "warnings", tuple(self.warnings))
        object.__setattr__(self, "errors", tuple(self.errors))
        if self.success:
            if self.errors:
                raise ValueError("successful conversion cannot carry errors")
            if self.data is None:
                raise ValueError("successful conversion must carry data")
        else:
            if not self.errors:
                raise ValueError("failed conversion must report at least one error")
            if self.data is not None:
                raise ValueError("failed conversion cannot carry data")

    @classmethod
    def ok(cls, data: Any, warnings: Iterable[str] = ()) -> "ConversionResult":
        return cls(success=True, data=data, warnings=tuple(warnings))

    @classmethod
    def fail(
        cls, errors: Iterable[str], warnings: Iterable[str] = ()
    ) -> "ConversionResult":
        return cls(success=False, errors=tuple(errors), warnings=tuple(warnings))


@dataclass(frozen=True)
class ToolCapabilities:
    features: frozenset[AgentFeature]
    config_format: ConfigFormat
    output_pattern: str
    notes: tuple[str, ...] = field(default_factory=tuple)

    def supports(self, feature: AgentFeature) -> bool:
        return feature in self.features

    def as_dict(self) -> dict[str, Any]:
        return {
            "features": sorted(item.value for item in self.features),
            "config_format": self.config_format.value,
            "output_pattern": self.output_pattern,
            "notes": list(self.notes),
        }
