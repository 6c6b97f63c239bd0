"""Schema model for canonical agent definitions.

Structural checks run through a JSON Schema (draft 2020-12) with three extra
keywords: ``permissionRule`` for tool permission values, ``relativePath``
for reference paths and ``finiteNumber`` to reject NaN and infinities.
Every validator returns ``Ok(entity)`` or ``Err(violations)`` where
``violations`` lists every problem found, sorted, so the same input always
produces the same report.
"""

from __future__ import annotations

import functools
import math
import re
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, TypeVar

from jsonschema import Draft202012Validator, validators
from jsonschema.exceptions import ValidationError as SchemaError

from oac_compat.agents.models import (
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
)
from oac_compat.constants import (
    AGENT_MODES,
    DEPENDENCY_KINDS,
    HOOK_EVENTS,
    PERMISSION_KINDS,
)
from oac_compat.result import Err, Ok, Result, Violation

T = TypeVar("T")

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
SEMVER_PATTERN = (
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)
MODEL_PATTERN = r"^[a-z0-9][a-z0-9-]*/[A-Za-z0-9][A-Za-z0-9._:-]*$"

ROOT_FIELD = "(root)"

_DRIVE_RE = re.compile(r"^[A-Za-z]:")
_URL_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")

_KINDS_TEXT = ", ".join(PERMISSION_KINDS)

AGENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$defs": {
        "slug": {"type": "string", "pattern": SLUG_PATTERN},
        "frontmatter": {
            "type": "object",
            "required": ["name", "description"],
            "additionalProperties": False,
            "properties": {
                "name": {"$ref": "#/$defs/slug"},
                "description": {"type": "string", "minLength": 1},
                "version": {"type": "string", "pattern": SEMVER_PATTERN},
                "tags": {
                    "type": "array",
                    "items": {"type": "string", "minLength": 1},
                },
                "mode": {"enum": list(AGENT_MODES)},
                "model": {"type": "string", "pattern": MODEL_PATTERN},
                "temperature": {
                    "type": "number",
                    "finiteNumber": True,
                    "minimum": 0,
                    "maximum": 2,
                },
                "tools": {"$ref": "#/$defs/toolAccess"},
                "hooks": {"type": "array", "items": {"$ref": "#/$defs/hook"}},
                "skills": {
                    "type": "array",
                    "items": {"$ref": "#/$defs/skillReference"},
                },
                "dependencies": {
                    "type": "array",
                    "items": {"$ref": "#/$defs/dependencyReference"},
                },
                "context": {
                    "type": "array",
                    "items": {"$ref": "#/$defs/contextReference"},
                },
            },
        },
        "toolAccess": {
            "type": ["boolean", "object"],
            "propertyNames": {"type": "string", "minLength": 1},
            "additionalProperties": {"permissionRule": True},
        },
        "hook": {
            "type": "object",
            "required": ["event", "command"],
            "additionalProperties": False,
            "properties": {
                "event": {"enum": list(HOOK_EVENTS)},
                "command": {"type": "string", "minLength": 1},
                "matcher": {"type": "string", "minLength": 1},
                "timeout": {"type": "integer", "minimum": 1},
            },
        },
        "skillReference": {
            "type": ["string", "object"],
            "pattern": SLUG_PATTERN,
            "required": ["name"],
            "additionalProperties": False,
            "properties": {
                "name": {"$ref": "#/$defs/slug"},
                "path": {"type": "string", "relativePath": True},
            },
        },
        "dependencyReference": {
            "type": ["string", "object"],
            "relativePath": True,
            "required": ["path"],
            "additionalProperties": False,
            "properties": {
                "path": {"type": "string", "relativePath": True},
                "kind": {"enum": list(DEPENDENCY_KINDS)},
            },
        },
        "contextReference": {
            "type": ["string", "object"],
            "relativePath": True,
            "required": ["path"],
            "additionalProperties": False,
            "properties": {
                "path": {"type": "string", "relativePath": True},
                "description": {"type": "string"},
            },
        },
    },
}


def relative_path_problem(value: str) -> Optional[str]:
    """Describe why ``value`` is not a syntactically valid relative path."""
    if not value.strip():
        return "empty path"
    if "\x00" in value:
        return "contains a NUL byte"
    if _URL_RE.match(value):
        return "URLs are not paths"
    if value.startswith(("/", "\\")) or _DRIVE_RE.match(value):
        return "absolute paths are not allowed"
    if value.startswith("~"):
        return "home-relative paths are not allowed"
    return None


def _is_permission_kind(value: Any) -> bool:
    return isinstance(value, bool) or (
        isinstance(value, str) and value in PERMISSION_KINDS
    )


def _permission_rule(
    validator: Any, enabled: Any, instance: Any, schema: dict[str, Any]
) -> Iterator[SchemaError]:
    if not enabled or _is_permission_kind(instance):
        return
    if isinstance(instance, str):
        yield SchemaError(
            f"{instance!r} is not a recognized permission kind "
            f"(expected one of: {_KINDS_TEXT})"
        )
        return
    if not isinstance(instance, dict):
        yield SchemaError(
            f"{instance!r} is not a permission rule "
            f"(expected one of: {_KINDS_TEXT}, or a pattern mapping)"
        )
        return
    if not instance:
        yield SchemaError("pattern mapping must not be empty")
    for pattern, kind in instance.items():
        if not isinstance(pattern, str) or not pattern:
            yield SchemaError(f"{pattern!r} is not a valid pattern", path=[pattern])
        elif not _is_permission_kind(kind):
            yield SchemaError(
                f"{kind!r} is not a recognized permission kind "
                f"(expected one of: {_KINDS_TEXT})",
                path=[pattern],
            )


def _relative_path(
    validator: Any, enabled: Any, instance: Any, schema: dict[str, Any]
) -> Iterator[SchemaError]:
    if not enabled or not isinstance(instance, str):
        return
    problem = relative_path_problem(instance)
    if problem is not None:
        yield SchemaError(f"{instance!r} is not a valid relative path ({problem})")


def _finite_number(
    validator: Any, enabled: Any, instance: Any, schema: dict[str, Any]
) -> Iterator[SchemaError]:
    if not enabled or not isinstance(instance, float):
        return
    if not math.isfinite(instance):
        yield SchemaError(f"{instance!r} is not a finite number")


AgentSchemaValidator = validators.extend(
    Draft202012Validator,
    {
        "permissionRule": _permission_rule,
        "relativePath": _relative_path,
        "finiteNumber": _finite_number,
    },
)


@functools.lru_cache(maxsize=None)
def _validator_for(definition: str) -> Any:
    schema = {
        "$schema": AGENT_SCHEMA["$schema"],
        "$ref": f"#/$defs/{definition}",
        "$defs": AGENT_SCHEMA["$defs"],
    }
    return AgentSchemaValidator(schema)


def _field(parts: list[Any]) -> str:
    return ".".join(str(part) for part in parts) if parts else ROOT_FIELD


def _to_violations(error: SchemaError) -> Iterator[Violation]:
    location = list(error.absolute_path)
    if error.validator == "required" and isinstance(error.instance, dict):
        for key in error.validator_value:
            if key not in error.instance:
                yield Violation(_field(location + [key]), "is a required field")
        return
    if (
        error.validator == "additionalProperties"
        and error.validator_value is False
        and isinstance(error.instance, dict)
    ):
        known = set(error.schema.get("properties", {}))
        for key in error.instance:
            if key not in known:
                yield Violation(_field(location + [key]), "is not a recognized field")
        return
    yield Violation(_field(location), error.message)


def collect_violations(definition: str, candidate: Any) -> tuple[Violation, ...]:
    found: set[Violation] = set()
    for error in _validator_for(definition).iter_errors(candidate):
        found.update(_to_violations(error))
    return tuple(sorted(found))


def _validate(
    definition: str, candidate: Any, build: Callable[[Any], T]
) -> Result[T, tuple[Violation, ...]]:
    violations = collect_violations(definition, candidate)
    if violations:
        return Err(violations)
    return Ok(build(candidate))


def _kind(value: Any) -> PermissionKind:
    if value is True:
        return PermissionKind.ALLOW
    if value is False:
        return PermissionKind.DENY
    return PermissionKind(value)


def _build_tool_access(raw: Any) -> ToolAccess:
    if raw is None:
        return ToolAccess()
    if isinstance(raw, bool):
        return ToolAccess(all_tools=raw)
    permissions: list[ToolPermission] = []
    for tool, rule in raw.items():
        if isinstance(rule, dict):
            patterns = tuple(
                GranularPermission(pattern=pattern, kind=_kind(kind))
                for pattern, kind in rule.items()
            )
            permissions.append(ToolPermission(tool=tool, patterns=patterns))
        else:
            permissions.append(ToolPermission(tool=tool, kind=_kind(rule)))
    return ToolAccess(permissions=tuple(permissions))


def _build_hook(raw: dict[str, Any]) -> HookDefinition:
    return HookDefinition(
        event=raw["event"],
        command=raw["command"],
        matcher=raw.get("matcher"),
        timeout=raw.get("timeout"),
    )


def _build_skill(raw: Any) -> SkillReference:
    if isinstance(raw, str):
        return SkillReference(name=raw)
    return SkillReference(name=raw["name"], path=raw.get("path"))


def _build_dependency(raw: Any) -> DependencyReference:
    if isinstance(raw, str):
        return DependencyReference(path=raw)
    return DependencyReference(path=raw["path"], kind=raw.get("kind"))


def _build_context(raw: Any) -> ContextReference:
    if isinstance(raw, str):
        return ContextReference(path=raw)
    return ContextReference(path=raw["path"], description=raw.get("description"))


def _build_frontmatter(raw: dict[str, Any]) -> tuple[AgentMetadata, AgentFrontmatter]:
    metadata = AgentMetadata(
        name=raw["name"],
        description=raw["description"],
        version=raw.get("version"),
        tags=tuple(raw.get("tags", [])),
    )
    mode = raw.get("mode")
    temperature = raw.get("temperature")
    frontmatter = AgentFrontmatter(
        mode=AgentMode(mode) if mode is not None else None,
        model=raw.get("model"),
        temperature=float(temperature) if temperature is not None else None,
        tools=_build_tool_access(raw.get("tools")),
        hooks=tuple(_build_hook(item) for item in raw.get("hooks", [])),
        skills=tuple(_build_skill(item) for item in raw.get("skills", [])),
        dependencies=tuple(
            _build_dependency(item) for item in raw.get("dependencies", [])
        ),
        context=tuple(_build_context(item) for item in raw.get("context", [])),
    )
    return metadata, frontmatter


def validate_frontmatter(
    candidate: Any,
) -> Result[tuple[AgentMetadata, AgentFrontmatter], tuple[Violation, ...]]:
    return _validate("frontmatter", candidate, _build_frontmatter)


def validate_agent(
    candidate: Any, body: str = "", source_path: Optional[Path] = None
) -> Result[OpenAgent, tuple[Violation, ...]]:
    """Validate a parsed frontmatter mapping and wrap it with its body."""
    outcome = validate_frontmatter(candidate)
    if isinstance(outcome, Err):
        return outcome
    metadata, frontmatter = outcome.value
    return Ok(
        OpenAgent(
            metadata=metadata,
            frontmatter=frontmatter,
            body=body,
            source_path=source_path,
        )
    )


def validate_tool_access(candidate: Any) -> Result[ToolAccess, tuple[Violation, ...]]:
    return _validate("toolAccess", candidate, _build_tool_access)


def validate_hook(candidate: Any) -> Result[HookDefinition, tuple[Violation, ...]]:
    return _validate("hook", candidate, _build_hook)


def validate_skill_reference(
    candidate: Any,
) -> Result[SkillReference, tuple[Violation, ...]]:
    return _validate("skillReference", candidate, _build_skill)


def validate_dependency_reference(
    candidate: Any,
) -> Result[DependencyReference, tuple[Violation, ...]]:
    return _validate("dependencyReference", candidate, _build_dependency)


def validate_context_reference(
    candidate: Any,
) -> Result[ContextReference, tuple[Violation, ...]]:
    return _validate("contextReference", candidate, _build_context)
