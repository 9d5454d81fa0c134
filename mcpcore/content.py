"""Content blocks, resource descriptions and related value types."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from .protocol import Role

_CHAR = r"(?:[A-Za-z0-9_]|%[0-9A-Fa-f]{2})"
_VARNAME = rf"{_CHAR}(?:\.?{_CHAR})*"
_VARSPEC = rf"{_VARNAME}(?::[1-9][0-9]{{0,3}}|\*)?"
_EXPRESSION = re.compile(rf"[+#./;?&]?{_VARSPEC}(?:,{_VARSPEC})*")
_BRACED = re.compile(r"\{([^{}]*)\}")


def _validate_template(template: str) -> None:
    position = 0
    for match in _BRACED.finditer(template):
        literal = template[position:match.start()]
        if "{" in literal or "}" in literal:
            raise ValueError(f"invalid URI template: unbalanced braces in {template!r}")
        if not _EXPRESSION.fullmatch(match.group(1)):
            raise ValueError(f"invalid URI template expression: {match.group(0)!r}")
        position = match.end()
    tail = template[position:]
    if "{" in tail or "}" in tail:
        raise ValueError(f"invalid URI template: unbalanced braces in {template!r}")


def _role_value(role: Any) -> Any:
    return role.value if isinstance(role, Enum) else role


@dataclass
class Annotations:
    """Hints on the intended audience and importance of an object."""

    audience: list[Role] = field(default_factory=list)
    priority: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.audience:
            result["audience"] = [_role_value(role) for role in self.audience]
        if self.priority:
            result["priority"] = self.priority
        return result


def _with_annotations(result: dict[str, Any], annotations: Optional[Annotations]) -> dict[str, Any]:
    if annotations is not None:
        return {"annotations": annotations.to_dict(), **result}
    return result


@dataclass(frozen=True)
class URITemplate:
    """An RFC 6570 URI template, checked for valid syntax on creation."""

    template: str

    def __post_init__(self) -> None:
        _validate_template(self.template)

    def raw(self) -> str:
        return self.template

    def __str__(self) -> str:
        return self.template


@dataclass
class TextContent:
    """Text provided to or from an LLM."""

    text: str = ""
    type: str = "text"
    annotations: Optional[Annotations] = None

    def to_dict(self) -> dict[str, Any]:
        return _with_annotations({"type": self.type, "text": self.text}, self.annotations)


@dataclass
class ImageContent:
    """A base64-encoded image provided to or from an LLM."""

    data: str = ""
    mime_type: str = ""
    type: str = "image"
    annotations: Optional[Annotations] = None

    def to_dict(self) -> dict[str, Any]:
        return _with_annotations(
            {"type": self.type, "data": self.data, "mimeType": self.mime_type},
            self.annotations,
        )


@dataclass
class AudioContent:
    """Base64-encoded audio embedded into a prompt or tool result."""

    data: str = ""
    mime_type: str = ""
    type: str = "audio"
    annotations: Optional[Annotations] = None

    def to_dict(self) -> dict[str, Any]:
        return _with_annotations(
            {"type": self.type, "data": self.data, "mimeType": self.mime_type},
            self.annotations,
        )


@dataclass
class ResourceLink:
    """A link to a resource the client can access."""

    uri: str = ""
    name: str = ""
    description: str = ""
    mime_type: str = ""
    type: str = "resource_link"
    annotations: Optional[Annotations] = None

    def to_dict(self) -> dict[str, Any]:
        return _with_annotations(
            {
                "type": self.type,
                "uri": self.uri,
                "name": self.name,
                "description": self.description,
                "mimeType": self.mime_type,
            },
            self.annotations,
        )


@dataclass
class TextResourceContents:
    """Contents of a resource that can be represented as text."""

    uri: str = ""
    text: str = ""
    mime_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"uri": self.uri}
        if self.mime_type:
            result["mimeType"] = self.mime_type
        result["text"] = self.text
        return result


@dataclass
class BlobResourceContents:
    """Contents of a binary resource, base64-encoded."""

    uri: str = ""
    blob: str = ""
    mime_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"uri": self.uri}
        if self.mime_type:
            result["mimeType"] = self.mime_type
        result["blob"] = self.blob
        return result


ResourceContents = Union[TextResourceContents, BlobResourceContents]


@dataclass
class EmbeddedResource:
    """Resource contents embedded into a prompt or tool result."""

    resource: Optional[ResourceContents] = None
    type: str = "resource"
    annotations: Optional[Annotations] = None

    def to_dict(self) -> dict[str, Any]:
        resource = self.resource.to_dict() if self.resource is not None else None
        return _with_annotations({"type": self.type, "resource": resource}, self.annotations)


Content = Union[TextContent, ImageContent, AudioContent, ResourceLink, EmbeddedResource]


@dataclass
class Resource:
    """A known resource the server is capable of reading."""

    uri: str = ""
    name: str = ""
    description: str = ""
    mime_type: str = ""
    annotations: Optional[Annotations] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"uri": self.uri, "name": self.name}
        if self.description:
            result["description"] = self.description
        if self.mime_type:
            result["mimeType"] = self.mime_type
        return _with_annotations(result, self.annotations)


@dataclass
class ResourceTemplate:
    """A template describing a family of resources on the server."""

    uri_template: Optional[URITemplate] = None
    name: str = ""
    description: str = ""
    mime_type: str = ""
    annotations: Optional[Annotations] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "uriTemplate": self.uri_template.raw() if self.uri_template is not None else None,
            "name": self.name,
        }
        if self.description:
            result["description"] = self.description
        if self.mime_type:
            result["mimeType"] = self.mime_type
        return _with_annotations(result, self.annotations)


@dataclass
class ModelHint:
    """A hint, usually a substring of a model name, for model selection."""

    name: str = ""


@dataclass
class ModelPreferences:
    """Advisory preferences for model selection during sampling."""

    hints: list[ModelHint] = field(default_factory=list)
    cost_priority: float = 0.0
    speed_priority: float = 0.0
    intelligence_priority: float = 0.0


@dataclass
class SamplingMessage:
    """A message issued to or received from an LLM."""

    role: Role
    content: Any = None


@dataclass
class Root:
    """A root directory or file the server can operate on."""

    uri: str
    name: str = ""


def new_text_content(text: str) -> TextContent:
    """Create text content."""
    return TextContent(text=text)


def new_image_content(data: str, mime_type: str) -> ImageContent:
    """Create image content from base64 data."""
    return ImageContent(data=data, mime_type=mime_type)


def new_audio_content(data: str, mime_type: str) -> AudioContent:
    """Create audio content from base64 data."""
    return AudioContent(data=data, mime_type=mime_type)


def new_resource_link(uri: str, name: str, description: str, mime_type: str) -> ResourceLink:
    """Create a link to a resource."""
    return ResourceLink(uri=uri, name=name, description=description, mime_type=mime_type)


def new_embedded_resource(resource: ResourceContents) -> EmbeddedResource:
    """Embed resource contents as content."""
    return EmbeddedResource(resource=resource)