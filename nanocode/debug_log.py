"""Structured JSONL debug logging of agent and tool events.

Each event is appended as one JSON object per line to ``debug.log`` in the
given directory. Every entry carries ``ts`` (Unix milliseconds), ``agent``
and, when known, ``cid``.
"""

import json
import time
from collections.abc import Sequence
from os import PathLike
from pathlib import Path
from typing import Any

MAX_STR_LEN = 3000
LOG_FILE_NAME = "debug.log"

PathArg = str | PathLike


def truncate(text: str) -> str:
    """Shorten long text to MAX_STR_LEN characters followed by an ellipsis."""
    if len(text.encode("utf-8")) <= MAX_STR_LEN:
        return text
    return f"{text[:MAX_STR_LEN]}…"


def _write_event(
    directory: PathArg, agent: str, cid: int | None, event: str, **fields: Any
) -> None:
    """Append one event line; failures to serialise or write are ignored."""
    record: dict[str, Any] = {"event": event, **fields}
    record["ts"] = int(time.time() * 1000)
    record["agent"] = agent
    if cid is not None:
        record["cid"] = cid
    try:
        line = json.dumps(record, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return
    try:
        with (Path(directory) / LOG_FILE_NAME).open("a", encoding="utf-8") as handle:
            handle.write(f"{line}\n")
    except OSError:
        pass


def agent_start(
    directory: PathArg,
    agent: str,
    cid: int | None,
    tools: Sequence[str],
    message: str,
    model: str,
    temperature: float,
    max_iterations: int,
) -> None:
    """An agent has started on a user message."""
    _write_event(
        directory, agent, cid, "agent_start",
        profile=agent,
        model=model,
        temperature=temperature,
        max_iterations=max_iterations,
        tools=list(tools),
        message=truncate(message),
    )


def agent_end(
    directory: PathArg,
    agent: str,
    cid: int | None,
    response: str,
    iterations: int,
    prompt_tokens: int,
    completion_tokens: int,
) -> None:
    """An agent produced its final answer."""
    _write_event(
        directory, agent, cid, "agent_end",
        profile=agent,
        response=truncate(response),
        iterations=iterations,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
    )


def agent_error(
    directory: PathArg, agent: str, cid: int | None, error: str, iterations: int
) -> None:
    """An agent gave up, for example on hitting its iteration limit."""
    _write_event(
        directory, agent, cid, "agent_error",
        profile=agent, error=error, iterations=iterations,
    )


def tool_call(
    directory: PathArg, agent: str, cid: int | None, tool: str, iteration: int, params: Any
) -> None:
    """The model asked for a tool to be run."""
    _write_event(directory, agent, cid, "tool_call", tool=tool, iter=iteration, params=params)


def tool_result(
    directory: PathArg,
    agent: str,
    cid: int | None,
    tool: str,
    iteration: int,
    success: bool,
    output: str,
    duration_ms: int,
) -> None:
    """A tool run has finished."""
    _write_event(
        directory, agent, cid, "tool_result",
        tool=tool,
        iter=iteration,
        success=success,
        output=truncate(output),
        duration_ms=duration_ms,
    )


def agent_spawn(
    directory: PathArg, agent: str, cid: int | None, profile: str, description: str
) -> None:
    """A child agent was started."""
    _write_event(
        directory, agent, cid, "agent_spawn",
        profile=profile, description=truncate(description),
    )


def agent_complete(
    directory: PathArg,
    agent: str,
    cid: int | None,
    profile: str,
    success: bool,
    output: str,
    duration_ms: int,
    prompt_tokens: int,
    completion_tokens: int,
) -> None:
    """A child agent has finished."""
    _write_event(
        directory, agent, cid, "agent_complete",
        profile=profile,
        success=success,
        output=truncate(output),
        duration_ms=duration_ms,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
    )


def thinking(directory: PathArg, agent: str, cid: int | None, content: str) -> None:
    """An agent emitted reasoning text."""
    _write_event(directory, agent, cid, "thinking", content=truncate(content))