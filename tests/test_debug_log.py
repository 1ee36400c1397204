import json
import time

from nanocode import debug_log


def _entries(directory):
    lines = (directory / "debug.log").read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines]


def test_truncate_short_text_unchanged():
    assert debug_log.truncate("hello") == "hello"


def test_truncate_long_text():
    text = "a" * (debug_log.MAX_STR_LEN + 1)
    result = debug_log.truncate(text)
    assert result == "a" * debug_log.MAX_STR_LEN + "…"


def test_truncate_exact_limit_unchanged():
    text = "b" * debug_log.MAX_STR_LEN
    assert debug_log.truncate(text) == text


def test_agent_start_entry(tmp_path):
    debug_log.agent_start(
        tmp_path, "planner", 7, ["file_read", "worker"], "do it", "gpt-4", 0.5, 30
    )
    (entry,) = _entries(tmp_path)
    assert entry["event"] == "agent_start"
    assert entry["agent"] == "planner"
    assert entry["profile"] == "planner"
    assert entry["cid"] == 7
    assert entry["tools"] == ["file_read", "worker"]
    assert entry["message"] == "do it"
    assert entry["model"] == "gpt-4"
    assert entry["temperature"] == 0.5
    assert entry["max_iterations"] == 30
    assert abs(entry["ts"] - time.time() * 1000) < 60_000


def test_cid_omitted_when_none(tmp_path):
    debug_log.thinking(tmp_path, "worker", None, "pondering")
    (entry,) = _entries(tmp_path)
    assert "cid" not in entry
    assert entry["content"] == "pondering"
    assert entry["event"] == "thinking"


def test_entries_are_appended_in_order(tmp_path):
    debug_log.tool_call(tmp_path, "a", 1, "bash_exec", 3, {"command": "cargo build"})
    debug_log.tool_result(tmp_path, "a", 1, "bash_exec", 3, True, "ok", 12)
    debug_log.agent_end(tmp_path, "a", 1, "done", 5, 1200, 300)
    events = [e["event"] for e in _entries(tmp_path)]
    assert events == ["tool_call", "tool_result", "agent_end"]
    call, result, end = _entries(tmp_path)
    assert call["params"] == {"command": "cargo build"}
    assert call["iter"] == 3
    assert result["success"] is True
    assert result["duration_ms"] == 12
    assert end["prompt_tokens"] == 1200
    assert end["completion_tokens"] == 300


def test_spawn_and_complete(tmp_path):
    debug_log.agent_spawn(tmp_path, "planner", 2, "worker", "task text")
    debug_log.agent_complete(tmp_path, "planner", 2, "worker", False, "bad", 4201, 800, 150)
    spawn, complete = _entries(tmp_path)
    assert spawn["profile"] == "worker"
    assert spawn["agent"] == "planner"
    assert spawn["description"] == "task text"
    assert complete["success"] is False
    assert complete["output"] == "bad"
    assert complete["duration_ms"] == 4201


def test_agent_error_entry(tmp_path):
    debug_log.agent_error(tmp_path, "planner", None, "ToolIterationLimit(31)", 31)
    (entry,) = _entries(tmp_path)
    assert entry["error"] == "ToolIterationLimit(31)"
    assert entry["iterations"] == 31


def test_long_output_is_truncated_in_log(tmp_path):
    debug_log.tool_result(tmp_path, "a", None, "t", 1, True, "x" * 5000, 1)
    (entry,) = _entries(tmp_path)
    assert entry["output"].endswith("…")
    assert len(entry["output"]) == debug_log.MAX_STR_LEN + 1


def test_missing_directory_is_ignored(tmp_path):
    missing = tmp_path / "missing"
    debug_log.thinking(missing, "a", None, "text")
    assert not missing.exists()