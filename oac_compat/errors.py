from pathlib import Path
from typing import Optional

from oac_compat.result import Violation


class OACError(Exception):
    """Base user-facing error."""


class AgentLoadError(OACError):
    def __init__(self, path: Optional[Path], message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}" if path is not None else message)


class FrontmatterParseError(AgentLoadError):
    def __init__(
        self, path: Optional[Path], detail: str, snippet: Optional[str] = None
    ) -> None:
        self.detail = detail
        self.snippet = snippet
        super().__init__(path=path, message=f"Invalid frontmatter ({detail})")


class ValidationError(AgentLoadError):
    def __init__(self, path: Optional[Path], violations: tuple[Violation, ...]) -> None:
        self.violations = violations
        summary = "; ".join(str(item) for item in violations)
        super().__init__(path=path, message=f"Invalid agent definition ({summary})")

    @property
    def fields(self) -> list[str]:
        return [item.field for item in self.violations]


class AdapterRegistryError(OACError):
    pass
