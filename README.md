# mcpcore

Building blocks for Model Context Protocol (MCP) servers and clients:
JSON-RPC message types, content blocks, builders for tools, prompts and
resources, and constructors and parsers for results.

## Installation

```
pip install mcpcore
```

## Modules

- `mcpcore.protocol` – protocol constants (`LATEST_PROTOCOL_VERSION`,
  `JSONRPC_VERSION`, error codes such as `METHOD_NOT_FOUND`), the enums
  `MCPMethod`, `Role` and `LoggingLevel`, `RequestId`, `Meta`, JSON-RPC
  envelopes, capabilities and the initialize, progress and logging messages.
- `mcpcore.content` – text, image, audio, resource-link and embedded-resource
  content, text and blob resource contents, `Resource`, `ResourceTemplate`
  and `URITemplate`.
- `mcpcore.resources` – option-based builders for resources and resource
  templates.
- `mcpcore.tools` – `Tool`, its input schema and annotations, and the
  option helpers that build them.
- `mcpcore.prompts` – `Prompt`, `PromptArgument`, `PromptMessage` and
  option-based prompt builders.
- `mcpcore.results` – result types for list, read, prompt and tool-call
  responses, their constructors, and parsers for response bodies.

Every message type has a `to_dict()` giving its wire form.

## Defining a tool

```python
from mcpcore.tools import (
    new_tool, with_description, with_string, with_number,
    description, required, min_value,
)

tool = new_tool(
    "greet",
    with_description("Say hello to someone"),
    with_string("name", description("Who to greet"), required()),
    with_number("times", min_value(1)),
)
print(tool.to_json())
```

`required()` moves the property name into the schema's `required` list.
New tools carry default annotations (`readOnlyHint` false, `destructiveHint`
true, `idempotentHint` false, `openWorldHint` true), which the
`with_*_hint_annotation` options change.

A tool whose input schema is already written as JSON Schema is built with
`new_tool_with_raw_schema(name, description, schema)`, where the schema may
be a JSON string, bytes or a mapping. Serialising a tool that carries both a
structured and a raw schema raises `ToolSchemaConflictError`.
`Tool.from_json` and `Tool.from_dict` read a tool back, always into the
structured schema.

Array items can be described with `items(...)` or with
`with_string_items`, `with_string_enum_items`, `with_number_items` and
`with_boolean_items`.

## Prompts and resources

```python
from mcpcore.prompts import new_prompt, with_prompt_description, with_argument, required_argument
from mcpcore.resources import new_resource, with_mime_type, new_resource_template

prompt = new_prompt(
    "greeting",
    with_prompt_description("A greeting"),
    with_argument("name", required_argument()),
)
resource = new_resource("docs://readme", "Readme", with_mime_type("text/markdown"))
template = new_resource_template("users://{id}/profile", "User profile")
```

`new_resource_template` checks the URI template's syntax and raises
`ValueError` if it is malformed.

## Results

```python
from mcpcore.results import new_tool_result_text, new_tool_result_error, parse_call_tool_result

ok = new_tool_result_text("done")
failed = new_tool_result_error("division by zero")   # is_error is True
parsed = parse_call_tool_result('{"content": [{"type": "text", "text": "hi"}]}')
parsed.content[0].text                               # "hi"
```

`parse_get_prompt_result`, `parse_call_tool_result` and
`parse_read_resource_result` take a JSON response body and raise
`ValueError` when it is malformed or holds an unsupported content type.

## Protocol messages

```python
from mcpcore.protocol import RequestId, Meta, new_jsonrpc_error, METHOD_NOT_FOUND

str(RequestId.from_json("42"))    # "int64:42"
str(RequestId.from_json("1.5"))   # "float64:1.5"

meta = Meta.from_json('{"progressToken": "123", "a": 2}')
meta.progress_token               # "123"
meta.additional_fields            # {"a": 2}

new_jsonrpc_error(RequestId(1), METHOD_NOT_FOUND, "method not found").to_dict()
```

## What this package does not do

It defines messages and helpers only. It has no server, client or
transport, does not dispatch requests to handlers, and offers no helpers
for reading typed values out of tool-call arguments.

## Running the tests

```
pip install -e ".[test]"
pytest
```