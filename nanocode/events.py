"""Messages passed between an agent and its user interface, and the provider interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .messages import AiResponse, Message, TokenUsage, ToolDefinition
from .tools import ToolResult

SUPPRESSED_TOOLS: frozenset[str] = frozenset(
    {
        "file_read",
        "file_write",
        "file_edit",
        "file_list",
        "bash_exec",
        "list_files",
        "glob",
        "grep",
        "read",
        "write",
        "ls",
    }
)


def should_suppress_result(tool_name: str) -> bool:
    """Return True if a successful result of this tool should not be shown."""
    return tool_name in SUPPRESSED_TOOLS or tool_name.startswith("file_")


class CompletionProvider(ABC):
    """An AI backend able to answer a conversation, possibly with tool calls."""

    @abstractmethod
    async def complete_with_tools(
        self, history: Sequence[Message], tools: Sequence[ToolDefinition]
    ) -> AiResponse:
        """Return the model's reply to the history, offering it the given tools."""


class EventKind(str, Enum):
    """Kind of event an agent sends to its user interface."""

    RESPONSE = "response"
    TOKEN_USAGE = "token_usage"
    ERROR = "error"
    TOOL_CALL = "tool_call"
    TOOL_RESULT = "tool_result"
    THINKING = "thinking"


@dataclass(frozen=True)
class AgentEvent:
    """An update from an agent: text for most kinds, TokenUsage for TOKEN_USAGE."""

    kind: EventKind
    payload: str | TokenUsage


@dataclass(frozen=True)
class UserRequest:
    """A message from the user for the agent to process."""

    text: str


@dataclass(frozen=True)
class ChildResult:
    """The result of a child agent delivered through the request channel."""

    cid: int | None
    result: ToolResult


@dataclass(frozen=True)
class Shutdown:
    """Asks the agent to stop its run loop."""