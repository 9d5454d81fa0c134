"""Core protocol types: JSON-RPC envelopes, identifiers, metadata and capabilities."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field, fields, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

LATEST_PROTOCOL_VERSION = "2025-03-26"
VALID_PROTOCOL_VERSIONS = ("2024-11-05", LATEST_PROTOCOL_VERSION)
JSONRPC_VERSION = "2.0"

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# MCP error codes
RESOURCE_NOT_FOUND = -32002

METHOD_NOTIFICATION_RESOURCES_LIST_CHANGED = "notifications/resources/list_changed"
METHOD_NOTIFICATION_RESOURCE_UPDATED = "notifications/resources/updated"
METHOD_NOTIFICATION_PROMPTS_LIST_CHANGED = "notifications/prompts/list_changed"
METHOD_NOTIFICATION_TOOLS_LIST_CHANGED = "notifications/tools/list_changed"
METHOD_NOTIFICATION_PROGRESS = "notifications/progress"
METHOD_NOTIFICATION_MESSAGE = "notifications/message"


class MCPMethod(str, Enum):
    """Request methods understood by an MCP server."""

    INITIALIZE = "initialize"
    PING = "ping"
    RESOURCES_LIST = "resources/list"
    RESOURCES_TEMPLATES_LIST = "resources/templates/list"
    RESOURCES_READ = "resources/read"
    PROMPTS_LIST = "prompts/list"
    PROMPTS_GET = "prompts/get"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    SET_LOG_LEVEL = "logging/setLevel"


class Role(str, Enum):
    """Sender or recipient of a message in a conversation."""

    USER = "user"
    ASSISTANT = "assistant"


class LoggingLevel(str, Enum):
    """Severity of a log message, following syslog levels."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"


def _encode(value: Any) -> Any:
    """Convert protocol objects into plain JSON-compatible values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, RequestId):
        return value.value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, Mapping):
        return {key: _encode(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _encode(getattr(value, f.name)) for f in fields(value)}
    return value


def _dumps(value: Any) -> str:
    return json.dumps(_encode(value), sort_keys=True, separators=(",", ":"))


@dataclass
class Meta:
    """Metadata attached to request parameters."""

    progress_token: Any = None
    additional_fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        raw: dict[str, Any] = {}
        if self.progress_token is not None:
            raw["progressToken"] = self.progress_token
        raw.update(self.additional_fields or {})
        return raw

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Meta":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError("meta must be a JSON object")
        raw = dict(data)
        token = raw.pop("progressToken", None)
        return cls(progress_token=token, additional_fields=raw)

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "Meta":
        data = json.loads(text)
        if data is not None and not isinstance(data, dict):
            raise ValueError("meta must be a JSON object")
        return cls.from_dict(data)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)), "f")


@dataclass(frozen=True)
class RequestId:
    """A JSON-RPC request identifier: a string, a number or null."""

    value: Any = None

    def is_nil(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        value = self.value
        if value is None:
            return "<nil>"
        if isinstance(value, bool):
            return "unknown:" + ("true" if value else "false")
        if isinstance(value, str):
            return "string:" + value
        if isinstance(value, int):
            return f"int64:{value}"
        if isinstance(value, float):
            if math.isfinite(value) and value.is_integer():
                return f"int64:{int(value)}"
            return "float64:" + _format_float(value)
        return f"unknown:{value}"

    def to_json(self) -> str:
        return json.dumps(self.value)

    @classmethod
    def from_json(cls, text: str) -> "RequestId":
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ValueError(f"invalid request id: {text}") from exc
        if data is None:
            return cls(None)
        if isinstance(data, str):
            return cls(data)
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            number = float(data)
            if math.isfinite(number) and number.is_integer():
                return cls(int(number))
            return cls(number)
        raise ValueError(f"invalid request id: {text}")


@dataclass
class RequestParams:
    """Parameters common to every request."""

    meta: Optional[Meta] = None

    def to_dict(self) -> dict[str, Any]:
        if self.meta is None:
            return {}
        return {"_meta": self.meta.to_dict()}


@dataclass
class Request:
    """A request method with its common parameters."""

    method: str = ""
    params: RequestParams = field(default_factory=RequestParams)

    def to_dict(self) -> dict[str, Any]:
        return {"method": _encode(self.method), "params": self.params.to_dict()}


@dataclass
class NotificationParams:
    """Notification parameters: reserved metadata plus free-form fields."""

    meta: Optional[dict[str, Any]] = None
    additional_fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.meta is not None:
            result["_meta"] = self.meta
        for key, value in self.additional_fields.items():
            if key != "_meta":
                result[key] = _encode(value)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NotificationParams":
        if not isinstance(data, Mapping):
            raise TypeError("notification params must be a JSON object")
        params = cls(meta={}, additional_fields={})
        for key, value in data.items():
            if key == "_meta":
                if isinstance(value, dict):
                    params.meta = value
            else:
                params.additional_fields[key] = value
        return params


@dataclass
class Notification:
    """A notification method with its parameters."""

    method: str = ""
    params: NotificationParams = field(default_factory=NotificationParams)

    def to_dict(self) -> dict[str, Any]:
        return {"method": _encode(self.method), "params": self.params.to_dict()}


@dataclass
class Result:
    """Base result carrying optional metadata."""

    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        return {"_meta": self.meta} if self.meta else {}


@dataclass
class JSONRPCRequest:
    """A request that expects a response."""

    id: RequestId
    method: str
    params: Any = None
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        result = {
            "jsonrpc": self.jsonrpc,
            "id": self.id.value,
            "method": _encode(self.method),
        }
        if self.params is not None:
            result["params"] = _encode(self.params)
        return result


@dataclass
class JSONRPCNotification:
    """A notification, which expects no response."""

    method: str
    params: NotificationParams = field(default_factory=NotificationParams)
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "method": _encode(self.method),
            "params": self.params.to_dict(),
        }


@dataclass
class JSONRPCResponse:
    """A successful response to a request."""

    id: RequestId
    result: Any
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {"jsonrpc": self.jsonrpc, "id": self.id.value, "result": _encode(self.result)}


@dataclass
class JSONRPCErrorDetails:
    """Code, message and optional data of a JSON-RPC error."""

    code: int
    message: str
    data: Any = None


@dataclass
class JSONRPCError:
    """An error response to a request."""

    id: RequestId
    error: JSONRPCErrorDetails
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        details: dict[str, Any] = {"code": self.error.code, "message": self.error.message}
        if self.error.data is not None:
            details["data"] = _encode(self.error.data)
        return {"jsonrpc": self.jsonrpc, "id": self.id.value, "error": details}


@dataclass
class Implementation:
    """Name and version of an MCP implementation."""

    name: str = ""
    version: str = ""


def _flags(capability: Mapping[str, Any], known: tuple[str, ...]) -> dict[str, bool]:
    return {key: True for key in known if capability.get(key)}


@dataclass
class ClientCapabilities:
    """Capabilities a client may support.

    ``roots`` is None when unsupported, otherwise a mapping that may hold
    a true ``listChanged`` flag.
    """

    experimental: Optional[dict[str, Any]] = None
    roots: Optional[Mapping[str, bool]] = None
    sampling: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.experimental:
            result["experimental"] = self.experimental
        if self.roots is not None:
            result["roots"] = _flags(self.roots, ("listChanged",))
        if self.sampling:
            result["sampling"] = {}
        return result


@dataclass
class ServerCapabilities:
    """Capabilities a server may support.

    ``prompts``, ``resources`` and ``tools`` are None when not offered,
    otherwise mappings of feature flags such as ``listChanged``.
    """

    experimental: Optional[dict[str, Any]] = None
    logging: bool = False
    prompts: Optional[Mapping[str, bool]] = None
    resources: Optional[Mapping[str, bool]] = None
    tools: Optional[Mapping[str, bool]] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.experimental:
            result["experimental"] = self.experimental
        if self.logging:
            result["logging"] = {}
        if self.prompts is not None:
            result["prompts"] = _flags(self.prompts, ("listChanged",))
        if self.resources is not None:
            result["resources"] = _flags(self.resources, ("subscribe", "listChanged"))
        if self.tools is not None:
            result["tools"] = _flags(self.tools, ("listChanged",))
        return result


@dataclass
class InitializeParams:
    """Parameters of an initialize request."""

    protocol_version: str = ""
    capabilities: ClientCapabilities = field(default_factory=ClientCapabilities)
    client_info: Implementation = field(default_factory=Implementation)


@dataclass
class InitializeRequest:
    """Sent by a client when it first connects."""

    params: InitializeParams = field(default_factory=InitializeParams)
    method: str = MCPMethod.INITIALIZE.value


@dataclass
class InitializeResult:
    """The server's answer to an initialize request."""

    protocol_version: str
    capabilities: ServerCapabilities = field(default_factory=ServerCapabilities)
    server_info: Implementation = field(default_factory=Implementation)
    instructions: str = ""
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.meta:
            result["_meta"] = self.meta
        result["protocolVersion"] = self.protocol_version
        result["capabilities"] = self.capabilities.to_dict()
        result["serverInfo"] = {"name": self.server_info.name, "version": self.server_info.version}
        if self.instructions:
            result["instructions"] = self.instructions
        return result


@dataclass
class CancelledNotificationParams:
    """Identifies a request being cancelled and why."""

    request_id: RequestId
    reason: str = ""


@dataclass
class ProgressNotificationParams:
    """Progress of a long-running request."""

    progress_token: Any
    progress: float
    total: float = 0.0
    message: str = ""


@dataclass
class ProgressNotification:
    """Out-of-band progress update for a long-running request."""

    params: ProgressNotificationParams
    method: str = METHOD_NOTIFICATION_PROGRESS

    def to_dict(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "progressToken": _encode(self.params.progress_token),
            "progress": self.params.progress,
        }
        if self.params.total:
            params["total"] = self.params.total
        if self.params.message:
            params["message"] = self.params.message
        return {"method": self.method, "params": params}


@dataclass
class LoggingMessageNotificationParams:
    """A log message sent from server to client."""

    level: LoggingLevel
    logger: str = ""
    data: Any = None


@dataclass
class LoggingMessageNotification:
    """Notification carrying a log message."""

    params: LoggingMessageNotificationParams
    method: str = METHOD_NOTIFICATION_MESSAGE

    def to_dict(self) -> dict[str, Any]:
        params: dict[str, Any] = {"level": _encode(self.params.level)}
        if self.params.logger:
            params["logger"] = self.params.logger
        params["data"] = _encode(self.params.data)
        return {"method": self.method, "params": params}


def new_jsonrpc_response(id: RequestId, result: Any) -> JSONRPCResponse:
    """Build a successful JSON-RPC response."""
    return JSONRPCResponse(id=id, result=result)


def new_jsonrpc_error(id: RequestId, code: int, message: str, data: Any = None) -> JSONRPCError:
    """Build a JSON-RPC error response."""
    return JSONRPCError(id=id, error=JSONRPCErrorDetails(code=code, message=message, data=data))


def new_progress_notification(
    token: Any,
    progress: float,
    total: Optional[float] = None,
    message: Optional[str] = None,
) -> ProgressNotification:
    """Build a progress notification; total and message are optional."""
    params = ProgressNotificationParams(progress_token=token, progress=progress)
    if total is not None:
        params.total = total
    if message is not None:
        params.message = message
    return ProgressNotification(params=params)


def new_logging_message_notification(
    level: LoggingLevel, logger: str, data: Any
) -> LoggingMessageNotification:
    """Build a logging message notification."""
    return LoggingMessageNotification(
        params=LoggingMessageNotificationParams(level=level, logger=logger, data=data)
    )


def new_initialize_result(
    protocol_version: str,
    capabilities: ServerCapabilities,
    server_info: Implementation,
    instructions: str = "",
) -> InitializeResult:
    """Build the result of an initialize request."""
    return InitializeResult(
        protocol_version=protocol_version,
        capabilities=capabilities,
        server_info=server_info,
        instructions=instructions,
    )