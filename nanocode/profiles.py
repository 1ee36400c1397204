"""Agent profile definitions."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _require_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


@dataclass
class AgentProfile:
    """A named agent type: its prompt, allowed tools and config overrides."""

    name: str
    description: str
    system_prompt: str
    tools: list[str]
    config_overrides: dict[str, Any] = field(default_factory=dict)
    tool_parameters: Any | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AgentProfile":
        """Build a profile from parsed JSON, raising ValueError on bad input."""
        if not isinstance(data, Mapping):
            raise ValueError("profile must be a JSON object")
        name = _require_str(data, "name")
        description = _require_str(data, "description")
        system_prompt = _require_str(data, "system_prompt")
        if "tools" not in data:
            raise ValueError("missing field `tools`")
        tools = data["tools"]
        if not isinstance(tools, list) or not all(isinstance(t, str) for t in tools):
            raise ValueError("field `tools` must be a list of strings")
        overrides = data.get("config_overrides") or {}
        if not isinstance(overrides, Mapping):
            raise ValueError("field `config_overrides` must be an object")
        return cls(
            name=name,
            description=description,
            system_prompt=system_prompt,
            tools=list(tools),
            config_overrides=dict(overrides),
            tool_parameters=data.get("tool_parameters"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain mapping suitable for JSON."""
        return {
            "name": self.name,
            "description": self.description,
            "system_prompt": self.system_prompt,
            "tools": list(self.tools),
            "config_overrides": dict(self.config_overrides),
            "tool_parameters": self.tool_parameters,
        }