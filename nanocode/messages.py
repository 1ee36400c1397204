"""Data types exchanged with AI providers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MessageRole(str, Enum):
    """Author of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass
class ToolCall:
    """A tool invocation requested by the model."""

    id: str
    name: str
    arguments: Any


@dataclass
class Message:
    """One entry of a conversation history."""

    role: MessageRole
    content: str
    tool_call_id: str | None = None
    tool_calls: list[ToolCall] | None = None

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(MessageRole.USER, content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(MessageRole.ASSISTANT, content)

    @classmethod
    def tool(cls, tool_call_id: str, content: str) -> "Message":
        return cls(MessageRole.TOOL, content, tool_call_id=tool_call_id)

    @classmethod
    def assistant_with_tool_calls(cls, content: str, tool_calls: list[ToolCall]) -> "Message":
        return cls(MessageRole.ASSISTANT, content, tool_calls=list(tool_calls))

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain mapping, leaving out unset optional fields."""
        data: dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        if self.tool_calls is not None:
            data["tool_calls"] = [
                {"id": call.id, "name": call.name, "arguments": call.arguments}
                for call in self.tool_calls
            ]
        return data


@dataclass
class ToolDefinition:
    """A tool as advertised to the model."""

    name: str
    description: str
    parameters: Any


@dataclass(frozen=True)
class TokenUsage:
    """Token counts reported by a provider."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_counts(cls, prompt_tokens: int, completion_tokens: int) -> "TokenUsage":
        return cls(prompt_tokens, completion_tokens, prompt_tokens + completion_tokens)

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        if not isinstance(other, TokenUsage):
            return NotImplemented
        return TokenUsage(
            self.prompt_tokens + other.prompt_tokens,
            self.completion_tokens + other.completion_tokens,
            self.total_tokens + other.total_tokens,
        )


@dataclass
class AiResponse:
    """A provider's reply: text, requested tool calls and usage."""

    content: str
    tool_calls: list[ToolCall] = field(default_factory=list)
    token_usage: TokenUsage | None = None