# nanocode

nanocode holds the building blocks of a runtime for AI agents that call tools:
the data types exchanged with a model, the interface a model backend
implements, agent profiles, tools described in JSON files that run bash
command templates, and JSON-lines debug logging.

## Modules

- `nanocode.messages` – `Message` (with the constructors `user`, `assistant`,
  `tool` and `assistant_with_tool_calls`, and `to_dict`), `MessageRole`,
  `ToolCall`, `ToolDefinition`, `AiResponse` and `TokenUsage`.
  `TokenUsage.from_counts(prompt, completion)` fills in the total, and two
  usages can be added with `+`.
- `nanocode.events` – `CompletionProvider`, the abstract interface a model
  backend implements (`async complete_with_tools(history, tools)`), and the
  messages an agent and its user interface exchange: `AgentEvent` with an
  `EventKind`, `UserRequest`, `ChildResult` and `Shutdown`.
  `should_suppress_result(name)` tells whether a successful result of a tool
  is too noisy to show (file tools, `bash_exec`, `grep`, `ls` and the like).
- `nanocode.tools` – the `Tool` interface, `ToolContext`, `ToolResult`, and
  dynamic tools: `DynamicToolDef`, `DynamicTool`, `render_command`,
  `secure_join`, `bash_escape_single_quoted` and the loaders
  `load_tool_from_file`, `load_tools_from_dir` and `load_tools`.
- `nanocode.profiles` – `AgentProfile`: a name, description, system prompt,
  tool whitelist, config overrides and optional tool parameter schema, read
  with `from_dict` and written with `to_dict`.
- `nanocode.app_name` – the process-wide application name (default
  `coding`) that selects the `apps/<app>/tools` and
  `<config>/nanocode/<app>/tools` directories. Names that are not a single
  safe path component are refused and the default is used instead.
- `nanocode.debug_log` – appends one JSON object per event to `debug.log` in
  a given directory: `agent_start`, `agent_end`, `agent_error`, `tool_call`,
  `tool_result`, `agent_spawn`, `agent_complete` and `thinking`. Each entry
  carries `ts` (Unix milliseconds), `agent` and, when given, `cid`; long text
  is cut to 3000 characters followed by `…`.

## Dynamic tools

A dynamic tool is a JSON file:

```json
{
  "name": "echo_tool",
  "description": "Echoes input",
  "parameters": {
    "type": "object",
    "properties": {"text": {"type": "string"}},
    "required": ["text"]
  },
  "execution": {"type": "bash", "command_template": "echo '{{text}}'"}
}
```

`{{name}}` placeholders are filled from the call's arguments. String values
are escaped for single-quoted bash strings; names listed in
`secure_parameters` are joined to the working directory, refusing absolute
paths and `..` escapes; names in `raw_parameters` are inserted unchanged.
Numbers, booleans and `null` are written as text; arrays and objects are
refused. A placeholder with no matching argument is left as it is.

```python
import asyncio
from pathlib import Path

from nanocode.tools import DynamicTool, DynamicToolDef, ToolContext

definition = DynamicToolDef.from_dict(
    {
        "name": "echo_tool",
        "description": "Echoes input",
        "parameters": {"type": "object"},
        "execution": {"type": "bash", "command_template": "echo '{{text}}'"},
    }
)
result = asyncio.run(
    DynamicTool(definition).execute(ToolContext(Path.cwd()), {"text": "hello"})
)
print(result.is_success(), result.output)
```

A failed command gives a `ToolResult` whose `error_message` holds its stdout,
stderr and exit code. `load_tools(builtin_dir, user_dir)` reads every `*.json`
file from both directories, the user's definitions overriding built-in ones of
the same name; files that fail to parse are logged and skipped.

## What this package does not do

There is no agent loop here: nothing sends a conversation to a model, runs
the tool calls it asks for and feeds the results back. `CompletionProvider`
is an interface only, with no backend for any model service. Settings are not
loaded from files or the environment, agent profiles are not applied to
anything, and no child agents are started. Dynamic tools of the `http` kind
can be read, but running one returns an error result. There is no command to
run.

## Running the tests

The test suite uses pytest and pytest-asyncio, available through the `test`
extra:

```
pip install -e .[test]
pytest
```