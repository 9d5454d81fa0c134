import json

import pytest

from mcpcore.protocol import (
    INVALID_PARAMS,
    LATEST_PROTOCOL_VERSION,
    METHOD_NOT_FOUND,
    ClientCapabilities,
    Implementation,
    JSONRPCNotification,
    JSONRPCRequest,
    LoggingLevel,
    MCPMethod,
    Meta,
    Notification,
    NotificationParams,
    Request,
    RequestId,
    RequestParams,
    Result,
    Role,
    ServerCapabilities,
    new_initialize_result,
    new_jsonrpc_error,
    new_jsonrpc_response,
    new_logging_message_notification,
    new_progress_notification,
)

META_CASES = [
    ("{}", Meta(), Meta(additional_fields={})),
    ("{}", Meta(additional_fields={}), Meta(additional_fields={})),
    ('{"progressToken":"123"}', Meta(progress_token="123"), Meta(progress_token="123", additional_fields={})),
    (
        '{"progressToken":"123"}',
        Meta(progress_token="123", additional_fields={}),
        Meta(progress_token="123", additional_fields={}),
    ),
    ('{"a":2,"b":"1"}', Meta(additional_fields={"a": 2, "b": "1"}), Meta(additional_fields={"a": 2.0, "b": "1"})),
    (
        '{"a":2,"b":"1","progressToken":"123"}',
        Meta(progress_token="123", additional_fields={"a": 2, "b": "1"}),
        Meta(progress_token="123", additional_fields={"a": 2.0, "b": "1"}),
    ),
]


@pytest.mark.parametrize("text,meta,expected", META_CASES)
def test_meta_marshalling(text, meta, expected):
    assert meta.to_json() == text
    assert Meta.from_json(text) == expected


def test_meta_from_json_rejects_non_object():
    with pytest.raises(ValueError):
        Meta.from_json("[1, 2]")


def test_meta_additional_field_overrides_token():
    meta = Meta(progress_token="a", additional_fields={"progressToken": "b"})
    assert meta.to_dict() == {"progressToken": "b"}


@pytest.mark.parametrize(
    "value,expected",
    [
        ("abc", "string:abc"),
        (42, "int64:42"),
        (3.0, "int64:3"),
        (2.5, "float64:2.5"),
        (1e-7, "float64:0.0000001"),
        (None, "<nil>"),
        (True, "unknown:true"),
    ],
)
def test_request_id_str(value, expected):
    assert str(RequestId(value)) == expected


@pytest.mark.parametrize(
    "text,expected",
    [("\"abc\"", "abc"), ("1", 1), ("1.0", 1), ("2.5", 2.5), ("null", None)],
)
def test_request_id_from_json(text, expected):
    rid = RequestId.from_json(text)
    assert rid.value == expected
    assert type(rid.value) is type(expected)


def test_request_id_from_json_invalid():
    with pytest.raises(ValueError, match="invalid request id"):
        RequestId.from_json("true")
    with pytest.raises(ValueError, match="invalid request id"):
        RequestId.from_json("{not json")


def test_request_id_round_trip_and_nil():
    rid = RequestId("req-1")
    assert RequestId.from_json(rid.to_json()) == rid
    assert RequestId().is_nil() is True
    assert RequestId(0).is_nil() is False


def test_request_to_dict():
    req = Request(method="ping", params=RequestParams(meta=Meta(progress_token=5)))
    assert req.to_dict() == {"method": "ping", "params": {"_meta": {"progressToken": 5}}}
    assert Request(method="ping").to_dict() == {"method": "ping", "params": {}}


def test_notification_params_to_dict_skips_meta_override():
    params = NotificationParams(meta={"x": 1}, additional_fields={"_meta": "ignored", "uri": "file:///a"})
    assert params.to_dict() == {"_meta": {"x": 1}, "uri": "file:///a"}


def test_notification_params_from_dict():
    params = NotificationParams.from_dict({"_meta": {"k": "v"}, "level": "info"})
    assert params.meta == {"k": "v"}
    assert params.additional_fields == {"level": "info"}
    odd = NotificationParams.from_dict({"_meta": "not-a-map"})
    assert odd.meta == {}
    assert odd.additional_fields == {}


def test_notification_round_trip():
    note = Notification(method="notifications/x", params=NotificationParams(additional_fields={"a": 1}))
    data = note.to_dict()
    assert data == {"method": "notifications/x", "params": {"a": 1}}
    assert NotificationParams.from_dict(data["params"]).additional_fields == {"a": 1}


def test_result_to_dict():
    assert Result().to_dict() == {}
    assert Result(meta={"k": 1}).to_dict() == {"_meta": {"k": 1}}


def test_jsonrpc_request_to_dict():
    req = JSONRPCRequest(id=RequestId(7), method=MCPMethod.PING)
    assert req.to_dict() == {"jsonrpc": "2.0", "id": 7, "method": "ping"}
    with_params = JSONRPCRequest(id=RequestId("a"), method="tools/call", params={"role": Role.USER})
    assert with_params.to_dict()["params"] == {"role": "user"}


def test_jsonrpc_notification_to_dict():
    note = JSONRPCNotification(method="notifications/initialized")
    assert note.to_dict() == {"jsonrpc": "2.0", "method": "notifications/initialized", "params": {}}


def test_new_jsonrpc_response():
    resp = new_jsonrpc_response(RequestId(1), Result(meta={"a": "b"}))
    assert resp.to_dict() == {"jsonrpc": "2.0", "id": 1, "result": {"_meta": {"a": "b"}}}


def test_new_jsonrpc_error():
    err = new_jsonrpc_error(RequestId("abc"), METHOD_NOT_FOUND, "no such method", None)
    assert err.to_dict() == {
        "jsonrpc": "2.0",
        "id": "abc",
        "error": {"code": -32601, "message": "no such method"},
    }
    with_data = new_jsonrpc_error(RequestId(2), INVALID_PARAMS, "bad", {"field": "x"})
    assert with_data.to_dict()["error"] == {"code": -32602, "message": "bad", "data": {"field": "x"}}


def test_progress_notification():
    plain = new_progress_notification("tok", 0.5, None, None)
    assert plain.to_dict() == {
        "method": "notifications/progress",
        "params": {"progressToken": "tok", "progress": 0.5},
    }
    full = new_progress_notification(3, 1.0, 10.0, "working")
    assert full.to_dict()["params"] == {"progressToken": 3, "progress": 1.0, "total": 10.0, "message": "working"}


def test_logging_message_notification():
    note = new_logging_message_notification(LoggingLevel.WARNING, "core", {"msg": "hi"})
    assert note.to_dict() == {
        "method": "notifications/message",
        "params": {"level": "warning", "logger": "core", "data": {"msg": "hi"}},
    }
    anon = new_logging_message_notification(LoggingLevel.INFO, "", "text")
    assert anon.to_dict()["params"] == {"level": "info", "data": "text"}


def test_capabilities_to_dict():
    server = ServerCapabilities(
        logging=True,
        tools={"listChanged": True},
        resources={"subscribe": True, "listChanged": False},
    )
    assert server.to_dict() == {
        "logging": {},
        "tools": {"listChanged": True},
        "resources": {"subscribe": True},
    }
    client = ClientCapabilities(roots={"listChanged": True}, sampling=True)
    assert client.to_dict() == {"roots": {"listChanged": True}, "sampling": {}}
    assert ClientCapabilities().to_dict() == {}


def test_new_initialize_result():
    result = new_initialize_result(
        LATEST_PROTOCOL_VERSION,
        ServerCapabilities(prompts={"listChanged": True}),
        Implementation(name="demo", version="1.0.0"),
        "",
    )
    data = result.to_dict()
    assert data == {
        "protocolVersion": "2025-03-26",
        "capabilities": {"prompts": {"listChanged": True}},
        "serverInfo": {"name": "demo", "version": "1.0.0"},
    }
    assert json.loads(json.dumps(data)) == data


def test_method_enum_lookup():
    assert MCPMethod("tools/call") is MCPMethod.TOOLS_CALL
    assert MCPMethod.SET_LOG_LEVEL.value == "logging/setLevel"
    with pytest.raises(ValueError):
        MCPMethod("tools/unknown")