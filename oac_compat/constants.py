from typing import Final


FRONTMATTER_DELIMITER: Final[str] = "---"
AGENT_FILE_EXTENSIONS: Final[tuple[str, ...]] = (".md",)

PERMISSION_KINDS: Final[tuple[str, ...]] = ("allow", "deny", "ask")
AGENT_MODES: Final[tuple[str, ...]] = ("primary", "subagent", "all")
DEPENDENCY_KINDS: Final[tuple[str, ...]] = ("agent", "context", "skill", "tool")

HOOK_EVENTS: Final[tuple[str, ...]] = (
    "PreToolUse",
    "PostToolUse",
    "UserPromptSubmit",
    "Notification",
    "Stop",
    "SubagentStop",
    "PreCompact",
    "SessionStart",
    "SessionEnd",
)

CLAUDE_MODEL_ALIASES: Final[dict[str, str]] = {
    "sonnet": "anthropic/claude-sonnet-4-5",
    "opus": "anthropic/claude-opus-4-1",
    "haiku": "anthropic/claude-haiku-4-5",
}
CLAUDE_INHERIT_MODEL: Final[str] = "inherit"

WINDSURF_MAX_RULE_CHARS: Final[int] = 12000
