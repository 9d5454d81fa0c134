"""Tool definitions, input schemas and the option helpers that build them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, Union

RawSchema = Union[str, bytes, bytearray, Mapping[str, Any]]

_CONFLICT_MESSAGE = "provide either InputSchema or RawInputSchema, not both"


class ToolSchemaConflictError(ValueError):
    """Raised when a tool has both a structured and a raw input schema."""


def _decode_raw(raw: RawSchema) -> Any:
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    return json.loads(raw)


@dataclass
class ToolInputSchema:
    """A JSON Schema object describing a tool's parameters."""

    type: str = ""
    properties: Optional[dict[str, Any]] = None
    required: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        if self.properties is not None:
            result["properties"] = self.properties
        if self.required:
            result["required"] = list(self.required)
        return result


@dataclass
class ToolAnnotation:
    """Optional hints describing how a tool behaves."""

    title: str = ""
    read_only_hint: Optional[bool] = None
    destructive_hint: Optional[bool] = None
    idempotent_hint: Optional[bool] = None
    open_world_hint: Optional[bool] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.title:
            result["title"] = self.title
        for key, value in (
            ("readOnlyHint", self.read_only_hint),
            ("destructiveHint", self.destructive_hint),
            ("idempotentHint", self.idempotent_hint),
            ("openWorldHint", self.open_world_hint),
        ):
            if value is not None:
                result[key] = value
        return result


def _expect(value: Any, kind: type | tuple[type, ...], what: str) -> Any:
    if not isinstance(value, kind):
        raise ValueError(f"{what} has the wrong type: {type(value).__name__}")
    return value


def _optional_bool(data: Mapping[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    return _expect(value, bool, key)


def _schema_from_dict(data: Any) -> ToolInputSchema:
    if data is None:
        return ToolInputSchema()
    _expect(data, Mapping, "inputSchema")
    props = data.get("properties")
    if props is not None:
        props = dict(_expect(props, Mapping, "properties"))
    names = data.get("required") or []
    _expect(names, list, "required")
    return ToolInputSchema(
        type=_expect(data.get("type") or "", str, "type"),
        properties=props,
        required=[_expect(name, str, "required item") for name in names],
    )


def _annotation_from_dict(data: Any) -> ToolAnnotation:
    if data is None:
        return ToolAnnotation()
    _expect(data, Mapping, "annotations")
    return ToolAnnotation(
        title=_expect(data.get("title") or "", str, "title"),
        read_only_hint=_optional_bool(data, "readOnlyHint"),
        destructive_hint=_optional_bool(data, "destructiveHint"),
        idempotent_hint=_optional_bool(data, "idempotentHint"),
        open_world_hint=_optional_bool(data, "openWorldHint"),
    )


@dataclass
class Tool:
    """The definition of a tool a client can call."""

    name: str = ""
    description: str = ""
    input_schema: ToolInputSchema = field(default_factory=ToolInputSchema)
    raw_input_schema: Optional[RawSchema] = None
    annotations: ToolAnnotation = field(default_factory=ToolAnnotation)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form; raises ToolSchemaConflictError if both schemas are set."""
        result: dict[str, Any] = {"name": self.name}
        if self.description:
            result["description"] = self.description
        if self.raw_input_schema is not None:
            if self.input_schema.type:
                raise ToolSchemaConflictError(
                    f"tool {self.name} has both InputSchema and RawInputSchema set: "
                    f"{_CONFLICT_MESSAGE}"
                )
            result["inputSchema"] = _decode_raw(self.raw_input_schema)
        else:
            result["inputSchema"] = self.input_schema.to_dict()
        result["annotations"] = self.annotations.to_dict()
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Tool":
        """Read a tool; the input schema is always read into the structured form."""
        _expect(data, Mapping, "tool")
        return cls(
            name=_expect(data.get("name") or "", str, "name"),
            description=_expect(data.get("description") or "", str, "description"),
            input_schema=_schema_from_dict(data.get("inputSchema")),
            annotations=_annotation_from_dict(data.get("annotations")),
        )

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Tool":
        return cls.from_dict(json.loads(text))


ToolOption = Callable[[Tool], None]
PropertyOption = Callable[[dict], None]


def new_tool(name: str, *opts: ToolOption) -> Tool:
    """Create a tool with an object input schema and apply the options in order."""
    tool = Tool(
        name=name,
        input_schema=ToolInputSchema(type="object", properties={}),
        annotations=ToolAnnotation(
            read_only_hint=False,
            destructive_hint=True,
            idempotent_hint=False,
            open_world_hint=True,
        ),
    )
    for opt in opts:
        opt(tool)
    return tool


def new_tool_with_raw_schema(name: str, description: str, schema: RawSchema) -> Tool:
    """Create a tool whose input schema is given as arbitrary JSON Schema."""
    return Tool(name=name, description=description, raw_input_schema=schema)


def with_description(description: str) -> ToolOption:
    """Set the tool's description."""

    def apply(tool: Tool) -> None:
        tool.description = description

    return apply


def with_tool_annotation(annotation: ToolAnnotation) -> ToolOption:
    """Replace the tool's annotations."""

    def apply(tool: Tool) -> None:
        tool.annotations = annotation

    return apply


def with_title_annotation(title: str) -> ToolOption:
    """Set the human-readable title annotation."""

    def apply(tool: Tool) -> None:
        tool.annotations.title = title

    return apply


def with_read_only_hint_annotation(value: bool) -> ToolOption:
    """Mark whether the tool leaves its environment unchanged."""

    def apply(tool: Tool) -> None:
        tool.annotations.read_only_hint = value

    return apply


def with_destructive_hint_annotation(value: bool) -> ToolOption:
    """Mark whether the tool may perform destructive updates."""

    def apply(tool: Tool) -> None:
        tool.annotations.destructive_hint = value

    return apply


def with_idempotent_hint_annotation(value: bool) -> ToolOption:
    """Mark whether repeated calls with the same arguments have no further effect."""

    def apply(tool: Tool) -> None:
        tool.annotations.idempotent_hint = value

    return apply


def with_open_world_hint_annotation(value: bool) -> ToolOption:
    """Mark whether the tool interacts with external entities."""

    def apply(tool: Tool) -> None:
        tool.annotations.open_world_hint = value

    return apply


def _set(key: str, value: Any) -> PropertyOption:
    def apply(schema: dict) -> None:
        schema[key] = value

    return apply


def description(desc: str) -> PropertyOption:
    """Describe a property."""
    return _set("description", desc)


def required() -> PropertyOption:
    """Mark a property as required."""
    return _set("required", True)


def title(title: str) -> PropertyOption:
    """Give a property a display title."""
    return _set("title", title)


def default_string(value: str) -> PropertyOption:
    """Set a string property's default."""
    return _set("default", value)


def enum(*values: str) -> PropertyOption:
    """Restrict a string property to the given values."""
    return _set("enum", list(values))


def max_length(limit: int) -> PropertyOption:
    """Set a string property's maximum length."""
    return _set("maxLength", limit)


def min_length(limit: int) -> PropertyOption:
    """Set a string property's minimum length."""
    return _set("minLength", limit)


def pattern(regex: str) -> PropertyOption:
    """Require a string property to match a regular expression."""
    return _set("pattern", regex)


def default_number(value: float) -> PropertyOption:
    """Set a number property's default."""
    return _set("default", float(value))


def max_value(limit: float) -> PropertyOption:
    """Set a number property's maximum."""
    return _set("maximum", float(limit))


def min_value(limit: float) -> PropertyOption:
    """Set a number property's minimum."""
    return _set("minimum", float(limit))


def multiple_of(value: float) -> PropertyOption:
    """Require a number property to be a multiple of the value."""
    return _set("multipleOf", float(value))


def default_bool(value: bool) -> PropertyOption:
    """Set a boolean property's default."""
    return _set("default", value)


def default_array(value: Sequence[Any]) -> PropertyOption:
    """Set an array property's default."""
    return _set("default", list(value))


def _add_property(name: str, base: dict[str, Any], opts: Sequence[PropertyOption]) -> ToolOption:
    def apply(tool: Tool) -> None:
        schema = dict(base)
        for opt in opts:
            opt(schema)
        if schema.get("required") is True:
            del schema["required"]
            tool.input_schema.required.append(name)
        if tool.input_schema.properties is None:
            raise TypeError(f"tool {tool.name} has no structured input schema to add {name!r} to")
        tool.input_schema.properties[name] = schema

    return apply


def with_boolean(name: str, *opts: PropertyOption) -> ToolOption:
    """Add a boolean property to the tool's schema."""
    return _add_property(name, {"type": "boolean"}, opts)


def with_number(name: str, *opts: PropertyOption) -> ToolOption:
    """Add a number property to the tool's schema."""
    return _add_property(name, {"type": "number"}, opts)


def with_string(name: str, *opts: PropertyOption) -> ToolOption:
    """Add a string property to the tool's schema."""
    return _add_property(name, {"type": "string"}, opts)


def with_object(name: str, *opts: PropertyOption) -> ToolOption:
    """Add an object property to the tool's schema."""

    def apply(tool: Tool) -> None:
        _add_property(name, {"type": "object", "properties": {}}, opts)(tool)

    return apply


def with_array(name: str, *opts: PropertyOption) -> ToolOption:
    """Add an array property to the tool's schema."""
    return _add_property(name, {"type": "array"}, opts)


def properties(props: Mapping[str, Any]) -> PropertyOption:
    """Set the properties of an object schema."""
    return _set("properties", props)


def additional_properties(schema: Any) -> PropertyOption:
    """Allow, forbid or describe additional object properties."""
    return _set("additionalProperties", schema)


def min_properties(limit: int) -> PropertyOption:
    """Set an object's minimum number of properties."""
    return _set("minProperties", limit)


def max_properties(limit: int) -> PropertyOption:
    """Set an object's maximum number of properties."""
    return _set("maxProperties", limit)


def property_names(schema: Mapping[str, Any]) -> PropertyOption:
    """Set a schema for an object's property names."""
    return _set("propertyNames", schema)


def items(schema: Any) -> PropertyOption:
    """Set the schema of an array's items."""
    return _set("items", schema)


def min_items(limit: int) -> PropertyOption:
    """Set an array's minimum length."""
    return _set("minItems", limit)


def max_items(limit: int) -> PropertyOption:
    """Set an array's maximum length."""
    return _set("maxItems", limit)


def unique_items(unique: bool) -> PropertyOption:
    """Require an array's items to be unique."""
    return _set("uniqueItems", unique)


def _typed_items(item_type: str, opts: Sequence[PropertyOption]) -> PropertyOption:
    def apply(schema: dict) -> None:
        item_schema: dict[str, Any] = {"type": item_type}
        for opt in opts:
            opt(item_schema)
        schema["items"] = item_schema

    return apply


def with_string_items(*opts: PropertyOption) -> PropertyOption:
    """Make an array's items strings, configured by the options."""
    return _typed_items("string", opts)


def with_string_enum_items(values: Sequence[str]) -> PropertyOption:
    """Make an array's items strings restricted to the given values."""
    return _set("items", {"type": "string", "enum": list(values)})


def with_number_items(*opts: PropertyOption) -> PropertyOption:
    """Make an array's items numbers, configured by the options."""
    return _typed_items("number", opts)


def with_boolean_items(*opts: PropertyOption) -> PropertyOption:
    """Make an array's items booleans, configured by the options."""
    return _typed_items("boolean", opts)