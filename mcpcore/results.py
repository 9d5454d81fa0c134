"""Result types for server responses, their builders, and parsers for wire data."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from .content import (
    BlobResourceContents,
    Content,
    EmbeddedResource,
    ImageContent,
    AudioContent,
    Resource,
    ResourceContents,
    ResourceTemplate,
    TextContent,
    TextResourceContents,
    new_audio_content,
    new_embedded_resource,
    new_image_content,
    new_resource_link,
    new_text_content,
)
from .prompts import GetPromptResult, Prompt, PromptMessage, new_prompt_message
from .protocol import Role
from .tools import Tool

RawMessage = Union[str, bytes, bytearray]


def _base(meta: Optional[dict[str, Any]]) -> dict[str, Any]:
    return {"_meta": meta} if meta else {}


@dataclass
class CallToolResult:
    """The server's response to a tool call.

    Errors raised by the tool itself are reported here with ``is_error`` set.
    """

    content: list[Content] = field(default_factory=list)
    is_error: bool = False
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        result = _base(self.meta)
        result["content"] = [item.to_dict() for item in self.content]
        if self.is_error:
            result["isError"] = True
        return result


@dataclass
class ReadResourceResult:
    """The server's response to a resources/read request."""

    contents: list[ResourceContents] = field(default_factory=list)
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        result = _base(self.meta)
        result["contents"] = [item.to_dict() for item in self.contents]
        return result


def _paginated(meta: Optional[dict[str, Any]], next_cursor: str) -> dict[str, Any]:
    result = _base(meta)
    if next_cursor:
        result["nextCursor"] = next_cursor
    return result


@dataclass
class ListResourcesResult:
    """The server's response to a resources/list request."""

    resources: list[Resource] = field(default_factory=list)
    next_cursor: str = ""
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        result = _paginated(self.meta, self.next_cursor)
        result["resources"] = [item.to_dict() for item in self.resources]
        return result


@dataclass
class ListResourceTemplatesResult:
    """The server's response to a resources/templates/list request."""

    resource_templates: list[ResourceTemplate] = field(default_factory=list)
    next_cursor: str = ""
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        result = _paginated(self.meta, self.next_cursor)
        result["resourceTemplates"] = [item.to_dict() for item in self.resource_templates]
        return result


@dataclass
class ListPromptsResult:
    """The server's response to a prompts/list request."""

    prompts: list[Prompt] = field(default_factory=list)
    next_cursor: str = ""
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        result = _paginated(self.meta, self.next_cursor)
        result["prompts"] = [item.to_dict() for item in self.prompts]
        return result


@dataclass
class ListToolsResult:
    """The server's response to a tools/list request."""

    tools: list[Tool] = field(default_factory=list)
    next_cursor: str = ""
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        result = _paginated(self.meta, self.next_cursor)
        result["tools"] = [item.to_dict() for item in self.tools]
        return result


def new_tool_result_text(text: str) -> CallToolResult:
    """A tool result holding a single text block."""
    return CallToolResult(content=[TextContent(text=text)])


def new_tool_result_image(text: str, image_data: str, mime_type: str) -> CallToolResult:
    """A tool result holding text and an image."""
    return CallToolResult(
        content=[TextContent(text=text), ImageContent(data=image_data, mime_type=mime_type)]
    )


def new_tool_result_audio(text: str, audio_data: str, mime_type: str) -> CallToolResult:
    """A tool result holding text and audio."""
    return CallToolResult(
        content=[TextContent(text=text), AudioContent(data=audio_data, mime_type=mime_type)]
    )


def new_tool_result_resource(text: str, resource: ResourceContents) -> CallToolResult:
    """A tool result holding text and an embedded resource."""
    return CallToolResult(content=[TextContent(text=text), EmbeddedResource(resource=resource)])


def new_tool_result_error(text: str) -> CallToolResult:
    """A tool result reporting an error message."""
    return CallToolResult(content=[TextContent(text=text)], is_error=True)


def new_tool_result_error_from_err(text: str, err: Optional[BaseException]) -> CallToolResult:
    """A tool error result; the exception's message is appended when given."""
    if err is not None:
        text = f"{text}: {err}"
    return new_tool_result_error(text)


def new_tool_result_errorf(fmt: str, *args: Any) -> CallToolResult:
    """A tool error result whose message is printf-style formatted."""
    return new_tool_result_error(fmt % args if args else fmt)


def new_list_resources_result(resources: Sequence[Resource], next_cursor: str) -> ListResourcesResult:
    return ListResourcesResult(resources=list(resources), next_cursor=next_cursor)


def new_list_resource_templates_result(
    templates: Sequence[ResourceTemplate], next_cursor: str
) -> ListResourceTemplatesResult:
    return ListResourceTemplatesResult(resource_templates=list(templates), next_cursor=next_cursor)


def new_read_resource_result(text: str) -> ReadResourceResult:
    """A read result holding one text resource with no URI."""
    return ReadResourceResult(contents=[TextResourceContents(text=text)])


def new_list_prompts_result(prompts: Sequence[Prompt], next_cursor: str) -> ListPromptsResult:
    return ListPromptsResult(prompts=list(prompts), next_cursor=next_cursor)


def new_get_prompt_result(description: str, messages: Sequence[PromptMessage]) -> GetPromptResult:
    return GetPromptResult(messages=list(messages), description=description)


def new_list_tools_result(tools: Sequence[Tool], next_cursor: str) -> ListToolsResult:
    return ListToolsResult(tools=list(tools), next_cursor=next_cursor)


def format_number_result(value: float) -> CallToolResult:
    """A text tool result with the number formatted to two decimals."""
    return new_tool_result_text(f"{value:.2f}")


def extract_string(data: Mapping[str, Any], key: str) -> str:
    """The string under the key, or an empty string."""
    value = data.get(key)
    return value if isinstance(value, str) else ""


def extract_map(data: Mapping[str, Any], key: str) -> Optional[dict[str, Any]]:
    """The object under the key, or None."""
    value = data.get(key)
    return value if isinstance(value, dict) else None


def parse_content(content_map: Mapping[str, Any]) -> Content:
    """Build a content block from its wire form; raises ValueError if invalid."""
    content_type = extract_string(content_map, "type")
    if content_type == "text":
        return new_text_content(extract_string(content_map, "text"))
    if content_type in ("image", "audio"):
        data = extract_string(content_map, "data")
        mime_type = extract_string(content_map, "mimeType")
        if not data or not mime_type:
            raise ValueError(f"{content_type} data or mimeType is missing")
        if content_type == "image":
            return new_image_content(data, mime_type)
        return new_audio_content(data, mime_type)
    if content_type == "resource_link":
        uri = extract_string(content_map, "uri")
        name = extract_string(content_map, "name")
        if not uri or not name:
            raise ValueError("resource_link uri or name is missing")
        return new_resource_link(
            uri,
            name,
            extract_string(content_map, "description"),
            extract_string(content_map, "mimeType"),
        )
    if content_type == "resource":
        resource_map = extract_map(content_map, "resource")
        if resource_map is None:
            raise ValueError("resource is missing")
        return new_embedded_resource(parse_resource_contents(resource_map))
    raise ValueError(f"unsupported content type: {content_type}")


def parse_resource_contents(content_map: Mapping[str, Any]) -> ResourceContents:
    """Build text or blob resource contents; raises ValueError if invalid."""
    uri = extract_string(content_map, "uri")
    if not uri:
        raise ValueError("resource uri is missing")
    mime_type = extract_string(content_map, "mimeType")
    text = extract_string(content_map, "text")
    if text:
        return TextResourceContents(uri=uri, text=text, mime_type=mime_type)
    blob = extract_string(content_map, "blob")
    if blob:
        return BlobResourceContents(uri=uri, blob=blob, mime_type=mime_type)
    raise ValueError("unsupported resource type")


def _load(raw: Optional[RawMessage]) -> dict[str, Any]:
    if raw is None:
        raise ValueError("response is nil")
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ValueError(f"failed to unmarshal response: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("failed to unmarshal response: not a JSON object")
    return data


def _meta(data: Mapping[str, Any]) -> Optional[dict[str, Any]]:
    meta = data.get("_meta")
    return meta if isinstance(meta, dict) else None


def parse_get_prompt_result(raw: Optional[RawMessage]) -> GetPromptResult:
    """Parse a prompts/get response body; raises ValueError if invalid."""
    data = _load(raw)
    result = GetPromptResult(meta=_meta(data))
    description = data.get("description")
    if isinstance(description, str):
        result.description = description
    if "messages" in data:
        messages = data["messages"]
        if not isinstance(messages, list):
            raise ValueError("messages is not an array")
        for message in messages:
            if not isinstance(message, dict):
                raise ValueError("message is not an object")
            role = extract_string(message, "role")
            if role not in ("user", "assistant"):
                raise ValueError(f"unsupported role: {role}")
            content_map = message.get("content")
            if not isinstance(content_map, dict):
                raise ValueError("content is not an object")
            result.messages.append(new_prompt_message(Role(role), parse_content(content_map)))
    return result


def parse_call_tool_result(raw: Optional[RawMessage]) -> CallToolResult:
    """Parse a tools/call response body; raises ValueError if invalid."""
    data = _load(raw)
    result = CallToolResult(meta=_meta(data))
    is_error = data.get("isError")
    if isinstance(is_error, bool):
        result.is_error = is_error
    if "content" not in data:
        raise ValueError("content is missing")
    contents = data["content"]
    if not isinstance(contents, list):
        raise ValueError("content is not an array")
    for item in contents:
        if not isinstance(item, dict):
            raise ValueError("content is not an object")
        result.content.append(parse_content(item))
    return result


def parse_read_resource_result(raw: Optional[RawMessage]) -> ReadResourceResult:
    """Parse a resources/read response body; raises ValueError if invalid."""
    data = _load(raw)
    result = ReadResourceResult(meta=_meta(data))
    if "contents" not in data:
        raise ValueError("contents is missing")
    contents = data["contents"]
    if not isinstance(contents, list):
        raise ValueError("contents is not an array")
    for item in contents:
        if not isinstance(item, dict):
            raise ValueError("content is not an object")
        result.contents.append(parse_resource_contents(item))
    return result