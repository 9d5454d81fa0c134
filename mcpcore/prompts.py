"""Prompts, prompt arguments and messages, with option-based builders."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from .protocol import MCPMethod, Role


@dataclass
class PromptArgument:
    """An argument a prompt template accepts."""

    name: str
    description: str = ""
    required: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.description:
            result["description"] = self.description
        if self.required:
            result["required"] = True
        return result


@dataclass
class Prompt:
    """A prompt or prompt template offered by a server.

    A prompt with arguments is a template; one without is static.
    """

    name: str
    description: str = ""
    arguments: Optional[list[PromptArgument]] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.description:
            result["description"] = self.description
        if self.arguments:
            result["arguments"] = [argument.to_dict() for argument in self.arguments]
        return result


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    to_dict = getattr(value, "to_dict", None)
    return to_dict() if callable(to_dict) else value


@dataclass
class PromptMessage:
    """A message returned as part of a prompt."""

    role: Role
    content: Any

    def to_dict(self) -> dict[str, Any]:
        return {"role": _plain(self.role), "content": _plain(self.content)}


@dataclass
class GetPromptParams:
    """Name of the prompt to get and the arguments to fill it with."""

    name: str = ""
    arguments: dict[str, str] = field(default_factory=dict)


@dataclass
class GetPromptRequest:
    """A client's request for a prompt."""

    params: GetPromptParams = field(default_factory=GetPromptParams)
    method: str = MCPMethod.PROMPTS_GET.value


@dataclass
class GetPromptResult:
    """The server's answer to a prompts/get request."""

    messages: list[PromptMessage] = field(default_factory=list)
    description: str = ""
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.meta:
            result["_meta"] = self.meta
        if self.description:
            result["description"] = self.description
        result["messages"] = [message.to_dict() for message in self.messages]
        return result


PromptOption = Callable[[Prompt], None]
ArgumentOption = Callable[[PromptArgument], None]


def new_prompt(name: str, *opts: PromptOption) -> Prompt:
    """Create a prompt and apply the options in order."""
    prompt = Prompt(name=name)
    for opt in opts:
        opt(prompt)
    return prompt


def with_prompt_description(description: str) -> PromptOption:
    """Set the prompt's description."""

    def apply(prompt: Prompt) -> None:
        prompt.description = description

    return apply


def with_argument(name: str, *opts: ArgumentOption) -> PromptOption:
    """Append an argument, configured by the options, to the prompt."""

    def apply(prompt: Prompt) -> None:
        argument = PromptArgument(name=name)
        for opt in opts:
            opt(argument)
        if prompt.arguments is None:
            prompt.arguments = []
        prompt.arguments.append(argument)

    return apply


def argument_description(desc: str) -> ArgumentOption:
    """Describe a prompt argument."""

    def apply(argument: PromptArgument) -> None:
        argument.description = desc

    return apply


def required_argument() -> ArgumentOption:
    """Mark a prompt argument as required."""

    def apply(argument: PromptArgument) -> None:
        argument.required = True

    return apply


def new_prompt_message(role: Role, content: Any) -> PromptMessage:
    """Create a prompt message."""
    return PromptMessage(role=role, content=content)