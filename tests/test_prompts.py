from mcpcore.content import new_text_content
from mcpcore.prompts import (
    GetPromptRequest,
    GetPromptResult,
    Prompt,
    PromptArgument,
    argument_description,
    new_prompt,
    new_prompt_message,
    required_argument,
    with_argument,
    with_prompt_description,
)
from mcpcore.protocol import Role


def test_new_prompt_without_options_is_static():
    prompt = new_prompt("greeting")
    assert prompt.arguments is None
    assert prompt.to_dict() == {"name": "greeting"}


def test_new_prompt_with_description_and_arguments():
    prompt = new_prompt(
        "greeting",
        with_prompt_description("A greeting prompt"),
        with_argument("name", argument_description("The name to greet"), required_argument()),
        with_argument("style"),
    )
    assert prompt.description == "A greeting prompt"
    assert prompt.arguments == [
        PromptArgument(name="name", description="The name to greet", required=True),
        PromptArgument(name="style"),
    ]


def test_prompt_to_dict_omits_empty_fields():
    prompt = new_prompt("p", with_argument("a"), with_argument("b", required_argument()))
    data = prompt.to_dict()
    assert "description" not in data
    assert data["arguments"] == [{"name": "a"}, {"name": "b", "required": True}]


def test_empty_argument_list_is_omitted():
    prompt = Prompt(name="p", arguments=[])
    assert "arguments" not in prompt.to_dict()


def test_options_apply_in_order():
    prompt = new_prompt("p", with_prompt_description("first"), with_prompt_description("second"))
    assert prompt.description == "second"


def test_prompt_message_to_dict():
    message = new_prompt_message(Role.USER, new_text_content("hello"))
    assert message.role is Role.USER
    assert message.to_dict() == {"role": "user", "content": {"type": "text", "text": "hello"}}


def test_get_prompt_result_to_dict():
    message = new_prompt_message(Role.ASSISTANT, new_text_content("hi"))
    result = GetPromptResult(messages=[message], description="desc")
    data = result.to_dict()
    assert data["description"] == "desc"
    assert data["messages"] == [message.to_dict()]
    assert "_meta" not in data


def test_get_prompt_result_with_meta():
    result = GetPromptResult(meta={"k": "v"})
    assert result.to_dict() == {"_meta": {"k": "v"}, "messages": []}


def test_get_prompt_request_defaults():
    request = GetPromptRequest()
    request.params.name = "greeting"
    request.params.arguments["name"] = "John"
    assert request.method == "prompts/get"
    assert request.params.arguments == {"name": "John"}
    assert GetPromptRequest().params.arguments == {}