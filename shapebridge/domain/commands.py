"""Slash command table and parsing.

Pure Python, no framework dependencies.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class CommandKind(Enum):
    LOCAL = "local"
    PASSTHROUGH = "passthrough"


class EmptyReplyPolicy(Enum):
    """What to tell the user when the shape answers a command with nothing."""

    NO_TEXT = "no_text"
    RESET_CONFIRMATION = "reset_confirmation"
    MAY_BE_SILENT = "may_be_silent"


@dataclass(frozen=True)
class CommandSpec:
    name: str
    kind: CommandKind
    provider_command: Optional[str] = None
    requires_args: bool = False
    on_empty: EmptyReplyPolicy = EmptyReplyPolicy.NO_TEXT

    def provider_string(self, args: List[str]) -> str:
        """Shape command string, with arguments appended when the command takes them."""
        if self.requires_args and args:
            return f"{self.provider_command} {' '.join(args)}"
        return self.provider_command or ""


@dataclass
class ParsedCommand:
    name: str
    args: List[str] = field(default_factory=list)
    spec: Optional[CommandSpec] = None

    @property
    def recognized(self) -> bool:
        return self.spec is not None


COMMANDS: Dict[str, CommandSpec] = {
    spec.name: spec
    for spec in (
        CommandSpec("activate", CommandKind.LOCAL),
        CommandSpec("deactivate", CommandKind.LOCAL),
        CommandSpec(
            "reset", CommandKind.PASSTHROUGH, "!reset",
            on_empty=EmptyReplyPolicy.RESET_CONFIRMATION,
        ),
        CommandSpec(
            "sleep", CommandKind.PASSTHROUGH, "!sleep",
            on_empty=EmptyReplyPolicy.MAY_BE_SILENT,
        ),
        CommandSpec("dashboard", CommandKind.PASSTHROUGH, "!dashboard"),
        CommandSpec("info", CommandKind.PASSTHROUGH, "!info"),
        CommandSpec("web", CommandKind.PASSTHROUGH, "!web", requires_args=True),
        CommandSpec("help", CommandKind.PASSTHROUGH, "!help"),
        CommandSpec("imagine", CommandKind.PASSTHROUGH, "!imagine", requires_args=True),
        CommandSpec(
            "wack", CommandKind.PASSTHROUGH, "!wack",
            on_empty=EmptyReplyPolicy.MAY_BE_SILENT,
        ),
    )
}


def parse_command(content: str, prefix: str = "/") -> Optional[ParsedCommand]:
    """Parse a prefixed command. Returns None when ``content`` is not a command.

    An unknown name still yields a ParsedCommand (with ``spec`` None) so the
    caller can swallow it instead of forwarding it as chat.
    """
    if not content or not content.startswith(prefix):
        return None
    tokens = content[len(prefix):].split()
    if not tokens:
        return ParsedCommand(name="")
    name = tokens[0].lower()
    return ParsedCommand(name=name, args=tokens[1:], spec=COMMANDS.get(name))
