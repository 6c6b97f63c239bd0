"""Load canonical agents from files and directories."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from oac_compat.agents.models import OpenAgent
from oac_compat.agents.parser import parse_frontmatter, split_frontmatter
from oac_compat.agents.schema import validate_agent
from oac_compat.constants import AGENT_FILE_EXTENSIONS
from oac_compat.errors import AgentLoadError, ValidationError
from oac_compat.result import Err, Ok, Result, Violation

logger = logging.getLogger(__name__)

AgentLoadResult = Result[OpenAgent, AgentLoadError]


def parse_agent(text: str, source_path: Optional[Path] = None) -> OpenAgent:
    """Build an agent from document text.

    Raises ``FrontmatterParseError`` for a missing or malformed header and
    ``ValidationError`` when the header does not satisfy the schema.
    """
    header, body = split_frontmatter(text, source_path)
    raw = parse_frontmatter(header, source_path)
    outcome = validate_agent(raw, body=body, source_path=source_path)
    if isinstance(outcome, Err):
        raise ValidationError(source_path, outcome.error)
    return outcome.value


class AgentLoader:
    def __init__(
        self,
        extensions: tuple[str, ...] = AGENT_FILE_EXTENSIONS,
        recursive: bool = True,
    ) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.recursive = recursive

    def load(self, path: Union[str, Path]) -> OpenAgent:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise AgentLoadError(path, "Agent file not found") from exc
        except IsADirectoryError as exc:
            raise AgentLoadError(path, "Expected a file, got a directory") from exc
        except PermissionError as exc:
            raise AgentLoadError(path, "Agent file is not readable") from exc
        except UnicodeDecodeError as exc:
            raise AgentLoadError(path, f"Agent file is not UTF-8 ({exc.reason})") from exc
        except OSError as exc:
            raise AgentLoadError(path, f"Cannot read agent file ({exc})") from exc
        return parse_agent(text, source_path=path)

    def discover(self, directory: Union[str, Path]) -> list[Path]:
        directory = Path(directory)
        if not directory.exists():
            raise AgentLoadError(directory, "Agent directory not found")
        if not directory.is_dir():
            raise AgentLoadError(directory, "Not a directory")
        return list(self._walk(directory))

    def _walk(self, directory: Path):
        try:
            children = sorted(directory.iterdir())
        except OSError as exc:
            raise AgentLoadError(directory, f"Cannot list directory ({exc})") from exc
        for child in children:
            if child.name.startswith("."):
                continue
            if child.is_dir():
                # symlinked directories can point back at an ancestor
                if self.recursive and not child.is_symlink():
                    yield from self._walk(child)
                continue
            if child.suffix.lower() in self.extensions:
                yield child

    def load_dir(self, directory: Union[str, Path]) -> list[AgentLoadResult]:
        """Load every agent under ``directory``, one outcome per file.

        A failing file never stops discovery of the others. A name that was
        already loaded earlier in the same call is reported as a validation
        failure for the later file.
        """
        results: list[AgentLoadResult] = []
        seen: dict[str, Path] = {}
        for path in self.discover(directory):
            try:
                agent = self.load(path)
            except AgentLoadError as exc:
                logger.debug("Failed to load %s: %s", path, exc)
                results.append(Err(exc))
                continue

            first = seen.get(agent.name)
            if first is not None:
                violation = Violation(
                    "name", f"duplicate agent name {agent.name!r} (first defined in {first})"
                )
                results.append(Err(ValidationError(path, (violation,))))
                continue

            seen[agent.name] = path
            logger.debug("Loaded agent %s from %s", agent.name, path)
            results.append(Ok(agent))
        return results


_DEFAULT_LOADER = AgentLoader()


def load_agent(path: Union[str, Path]) -> OpenAgent:
    return _DEFAULT_LOADER.load(path)


def load_agents(directory: Union[str, Path]) -> list[AgentLoadResult]:
    return _DEFAULT_LOADER.load_dir(directory)
