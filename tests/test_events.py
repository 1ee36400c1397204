import asyncio

import pytest

from nanocode.events import (
    AgentEvent,
    ChildResult,
    CompletionProvider,
    EventKind,
    Shutdown,
    UserRequest,
    should_suppress_result,
)
from nanocode.messages import AiResponse, Message, TokenUsage, ToolDefinition
from nanocode.tools import ToolResult


@pytest.mark.parametrize(
    "name", ["file_read", "file_write", "file_list", "bash_exec", "list_files", "grep", "ls"]
)
def test_noisy_tools_are_suppressed(name):
    assert should_suppress_result(name) is True


@pytest.mark.parametrize("name", ["task", "explorer", "git_status", "generalist"])
def test_agent_tools_are_not_suppressed(name):
    assert should_suppress_result(name) is False


def test_any_file_prefixed_tool_is_suppressed():
    assert should_suppress_result("file_anything_new") is True
    assert should_suppress_result("files") is False


def test_completion_provider_is_abstract():
    with pytest.raises(TypeError):
        CompletionProvider()


class _EchoProvider(CompletionProvider):
    async def complete_with_tools(self, history, tools):
        names = ",".join(tool.name for tool in tools)
        return AiResponse(content=f"{history[-1].content}|{names}")


def test_provider_subclass_receives_history_and_tools():
    provider = _EchoProvider()
    tools = [ToolDefinition("grep", "search", {"type": "object"})]
    response = asyncio.run(provider.complete_with_tools([Message.user("hi")], tools))
    assert response.content == "hi|grep"
    assert response.tool_calls == []


def test_event_kind_from_value():
    assert EventKind("tool_call") is EventKind.TOOL_CALL
    assert EventKind.TOKEN_USAGE.value == "token_usage"


def test_agent_event_carries_payload():
    usage = TokenUsage.from_counts(3, 4)
    event = AgentEvent(EventKind.TOKEN_USAGE, usage)
    assert event.payload.total_tokens == 7
    assert event == AgentEvent(EventKind.TOKEN_USAGE, TokenUsage(3, 4, 7))


def test_requests_compare_by_value():
    assert UserRequest("hello") == UserRequest("hello")
    assert UserRequest("hello") != UserRequest("bye")
    assert Shutdown() == Shutdown()


def test_child_result_holds_tool_result():
    child = ChildResult(cid=7, result=ToolResult.error("boom"))
    assert child.cid == 7
    assert child.result.is_success() is False
    assert child.result.error_message == "boom"