"""Tool abstractions and tools defined by JSON files."""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, MutableMapping
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from .app_name import get_app_name

_log = logging.getLogger(__name__)


@dataclass
class ToolContext:
    """Environment a tool runs in."""

    working_directory: Path
    permissions: list[str] = field(default_factory=list)
    ui_queue: asyncio.Queue | None = None
    cid: int | None = None
    agent_name: str | None = None

    def __post_init__(self) -> None:
        self.working_directory = Path(self.working_directory)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a tool: output on success, an error message otherwise."""

    output: str = ""
    error_message: str | None = None

    @classmethod
    def success(cls, output: str) -> "ToolResult":
        return cls(output=output)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(error_message=message)

    def is_success(self) -> bool:
        return self.error_message is None


class Tool(ABC):
    """Something an agent can call: a name, a description and a parameter schema."""

    name: str
    description: str
    parameters: Any

    @abstractmethod
    async def execute(self, context: ToolContext, params: Any) -> ToolResult:
        """Run the tool with the given JSON parameters."""


@dataclass
class BashExecution:
    """Run a bash command rendered from a template."""

    command_template: str


@dataclass
class HttpExecution:
    """Make an HTTP request described by templates."""

    url: str
    method: str
    headers: dict[str, str] | None = None
    body_template: str | None = None


def _require_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _string_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"field `{key}` must be a list of strings")
    return list(value)


def _parse_execution(data: Any) -> BashExecution | HttpExecution:
    if not isinstance(data, Mapping):
        raise ValueError("field `execution` must be an object")
    kind = data.get("type")
    if kind == "bash":
        return BashExecution(_require_str(data, "command_template"))
    if kind == "http":
        headers = data.get("headers")
        if headers is not None and not (
            isinstance(headers, Mapping)
            and all(isinstance(k, str) and isinstance(v, str) for k, v in headers.items())
        ):
            raise ValueError("field `headers` must map strings to strings")
        body = data.get("body_template")
        if body is not None and not isinstance(body, str):
            raise ValueError("field `body_template` must be a string")
        return HttpExecution(
            url=_require_str(data, "url"),
            method=_require_str(data, "method"),
            headers=dict(headers) if headers is not None else None,
            body_template=body,
        )
    raise ValueError(f"unknown execution type `{kind}`")


@dataclass
class DynamicToolDef:
    """A tool described in a JSON file."""

    name: str
    description: str
    parameters: Any
    execution: BashExecution | HttpExecution
    secure_parameters: list[str] = field(default_factory=list)
    raw_parameters: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DynamicToolDef":
        """Build a definition from parsed JSON, raising ValueError on bad input."""
        if not isinstance(data, Mapping):
            raise ValueError("tool definition must be a JSON object")
        if "parameters" not in data:
            raise ValueError("missing field `parameters`")
        if "execution" not in data:
            raise ValueError("missing field `execution`")
        return cls(
            name=_require_str(data, "name"),
            description=_require_str(data, "description"),
            parameters=data["parameters"],
            execution=_parse_execution(data["execution"]),
            secure_parameters=_string_list(data, "secure_parameters"),
            raw_parameters=_string_list(data, "raw_parameters"),
        )


def secure_join(base: str | PathLike, relative: str) -> Path:
    """Join a relative path to base, refusing anything that leaves base."""
    base_path = Path(base)
    if not relative:
        return base_path
    relative_path = Path(relative)
    if relative_path.anchor:
        raise ValueError("Absolute paths are not allowed")
    parts: list[str] = []
    for part in relative_path.parts:
        if part == "..":
            if not parts:
                raise ValueError("Path traversal attempt detected")
            parts.pop()
        elif part != ".":
            parts.append(part)
    return base_path.joinpath(*parts)


def bash_escape_single_quoted(text: str) -> str:
    """Escape text for use inside a single-quoted bash string."""
    return text.replace("'", "'\\''")


def _placeholder_value(
    key: str, value: Any, context: ToolContext, secure: bool, raw: bool
) -> str:
    if isinstance(value, str):
        if raw:
            return value
        if secure:
            try:
                joined = secure_join(context.working_directory, value)
            except ValueError as exc:
                raise ValueError(f"Failed to securely join path '{value}': {exc}") from exc
            return bash_escape_single_quoted(str(joined))
        return bash_escape_single_quoted(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if value is None:
        return "null"
    raise ValueError(
        f"Unsupported parameter type for placeholder {key}: array or object"
    )


def render_command(
    template: str,
    params: Any,
    context: ToolContext,
    secure_parameters: Iterable[str] = (),
    raw_parameters: Iterable[str] = (),
) -> str:
    """Replace {{name}} placeholders in template with escaped parameter values."""
    if not isinstance(params, Mapping):
        raise ValueError("Parameters must be a JSON object")
    secure_set = set(secure_parameters)
    raw_set = set(raw_parameters)
    result = template
    for key in sorted(params):
        replacement = _placeholder_value(
            key, params[key], context, key in secure_set, key in raw_set
        )
        result = result.replace("{{" + key + "}}", replacement)
    return result


def _failure_message(stdout: str, stderr: str, exit_code: str) -> str:
    if not stdout and not stderr:
        return f"Command failed with exit code {exit_code}"
    lines = []
    if stdout:
        lines.append(f"stdout: {stdout.rstrip()}")
    if stderr:
        lines.append(f"stderr: {stderr.rstrip()}")
    lines.append(f"exit code: {exit_code}")
    return "\n".join(lines)


class DynamicTool(Tool):
    """A tool whose behaviour comes from a DynamicToolDef."""

    def __init__(self, definition: DynamicToolDef) -> None:
        self.definition = definition

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def description(self) -> str:
        return self.definition.description

    @property
    def parameters(self) -> Any:
        return self.definition.parameters

    async def execute(self, context: ToolContext, params: Any) -> ToolResult:
        execution = self.definition.execution
        if isinstance(execution, BashExecution):
            return await self._execute_bash(context, params, execution.command_template)
        return ToolResult.error("HTTP execution is not supported")

    async def _execute_bash(
        self, context: ToolContext, params: Any, command_template: str
    ) -> ToolResult:
        try:
            command = render_command(
                command_template,
                params,
                context,
                self.definition.secure_parameters,
                self.definition.raw_parameters,
            )
        except ValueError as exc:
            return ToolResult.error(f"Failed to render command template: {exc}")

        try:
            process = await asyncio.create_subprocess_exec(
                "bash",
                "-c",
                command,
                cwd=context.working_directory,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout_bytes, stderr_bytes = await process.communicate()
        except OSError as exc:
            return ToolResult.error(f"Failed to execute command: {exc}")

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        if process.returncode == 0:
            return ToolResult.success(stdout)
        stderr = stderr_bytes.decode("utf-8", errors="replace")
        code = process.returncode
        exit_code = str(code) if code is not None and code >= 0 else "unknown"
        return ToolResult.error(f"Command failed: {_failure_message(stdout, stderr, exit_code)}")


def load_tool_from_file(path: str | PathLike) -> DynamicToolDef:
    """Read one tool definition from a JSON file."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Failed to read tool file: {exc}") from exc
    try:
        data = json.loads(content)
        return DynamicToolDef.from_dict(data)
    except ValueError as exc:
        raise ValueError(f"Failed to parse tool JSON: {exc}") from exc


def load_tools_from_dir(
    directory: str | PathLike, tools: MutableMapping[str, DynamicToolDef]
) -> MutableMapping[str, DynamicToolDef]:
    """Add every *.json tool in directory to tools, keyed by name, and return tools.

    Files that fail to load are logged and skipped.
    """
    for path in sorted(Path(directory).iterdir()):
        if path.suffix != ".json":
            continue
        try:
            definition = load_tool_from_file(path)
        except ValueError as exc:
            _log.warning("Failed to load tool from %s: %s", path, exc)
            continue
        tools[definition.name] = definition
    return tools


def builtin_tools_dir(root: str | PathLike | None = None) -> Path:
    """Return <root>/apps/<app>/tools, root defaulting to the current directory."""
    base = Path(root) if root is not None else Path.cwd()
    return base / "apps" / get_app_name() / "tools"


def user_tools_dir(config_root: str | PathLike | None = None) -> Path:
    """Return <config>/nanocode/<app>/tools."""
    base = Path(config_root) if config_root is not None else Path(user_config_dir())
    return base / "nanocode" / get_app_name() / "tools"


def load_tools(
    builtin_dir: str | PathLike | None = None,
    user_dir: str | PathLike | None = None,
) -> list[DynamicToolDef]:
    """Load built-in tools, then user tools, which override built-ins of the same name."""
    builtin = Path(builtin_dir) if builtin_dir is not None else builtin_tools_dir()
    user = Path(user_dir) if user_dir is not None else user_tools_dir()
    tools: dict[str, DynamicToolDef] = {}
    if builtin.exists():
        load_tools_from_dir(builtin, tools)
    try:
        user.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass
    if user.exists():
        load_tools_from_dir(user, tools)
    return list(tools.values())