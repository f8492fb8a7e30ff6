"""Request translation: vendor-neutral request -> Mistral wire request.

Pure functions, no I/O. Content the provider cannot represent for a given
role is dropped or substituted; translation never fails for well-typed input.

Per role:
- user: text, thinking and images fold into one user message; tool results
  become separate ``tool`` messages (emitted as encountered, ahead of the
  user message of the same turn); tool uses and redacted thinking are dropped.
  A turn whose content stays empty plain text emits no user message.
- assistant: each text/thinking part opens an assistant message; a tool use
  joins the trailing assistant message or opens one without content.
- system: each text/thinking part is its own system message.

Mistral rejects a ``tool`` message directly followed by a ``user`` message,
so a whitespace assistant message is spliced between such pairs last.
"""

from __future__ import annotations

import json
from typing import List, Optional

from ..base.constants import PLACEHOLDER_ASSISTANT_CONTENT, TOOL_IMAGE_RESULT_PLACEHOLDER
from ..base.models import (
    CompletionRequest,
    ImageContent,
    RedactedThinkingContent,
    RequestMessage,
    Role,
    TextContent,
    ThinkingContent,
    ToolChoice,
    ToolResultContent,
    ToolUse,
)
from .wire import (
    AssistantMessage,
    FunctionContent,
    FunctionDefinition,
    ImageUrlPart,
    MistralRequest,
    SystemMessage,
    TextPart,
    ToolCall,
    ToolDefinition,
    ToolMessage,
    UserContent,
    UserMessage,
    WireToolChoice,
    is_empty_content,
    push_part,
)
from .wire import RequestMessage as WireMessage


def _unhandled(part: object) -> TypeError:
    return TypeError(f"unsupported message content: {type(part).__name__}")


def _tool_result_text(result: ToolResultContent) -> str:
    if isinstance(result.content, ImageContent):
        return TOOL_IMAGE_RESULT_PLACEHOLDER
    return result.content


def _translate_user(message: RequestMessage, out: List[WireMessage]) -> None:
    content: UserContent = ""
    for part in message.content:
        if isinstance(part, (TextContent, ThinkingContent)):
            content = push_part(content, TextPart(text=part.text))
        elif isinstance(part, ImageContent):
            content = push_part(content, ImageUrlPart(image_url=part.to_base64_url()))
        elif isinstance(part, ToolResultContent):
            out.append(ToolMessage(content=_tool_result_text(part), tool_call_id=part.tool_use_id))
        elif isinstance(part, (ToolUse, RedactedThinkingContent)):
            continue
        else:
            raise _unhandled(part)
    if not is_empty_content(content):
        out.append(UserMessage(content=content))


def _to_tool_call(tool_use: ToolUse) -> ToolCall:
    return ToolCall(
        id=tool_use.id,
        function=FunctionContent(name=tool_use.name, arguments=json.dumps(tool_use.input)),
    )


def _translate_assistant(message: RequestMessage, out: List[WireMessage]) -> None:
    for part in message.content:
        if isinstance(part, (TextContent, ThinkingContent)):
            out.append(AssistantMessage(content=part.text))
        elif isinstance(part, ToolUse):
            tool_call = _to_tool_call(part)
            if out and isinstance(out[-1], AssistantMessage):
                out[-1].tool_calls.append(tool_call)
            else:
                out.append(AssistantMessage(content=None, tool_calls=[tool_call]))
        elif isinstance(part, (RedactedThinkingContent, ImageContent, ToolResultContent)):
            continue
        else:
            raise _unhandled(part)


def _translate_system(message: RequestMessage, out: List[WireMessage]) -> None:
    for part in message.content:
        if isinstance(part, (TextContent, ThinkingContent)):
            out.append(SystemMessage(content=part.text))
        elif isinstance(part, (RedactedThinkingContent, ImageContent, ToolUse, ToolResultContent)):
            continue
        else:
            raise _unhandled(part)


_ROLE_HANDLERS = {
    Role.USER: _translate_user,
    Role.ASSISTANT: _translate_assistant,
    Role.SYSTEM: _translate_system,
}


def insert_placeholder_assistants(messages: List[WireMessage]) -> List[WireMessage]:
    """Return ``messages`` with a placeholder assistant after every tool->user pair.

    Idempotent: a repaired sequence has no adjacent tool/user pair left.
    """
    fixed: List[WireMessage] = []
    for i, message in enumerate(messages):
        fixed.append(message)
        nxt = messages[i + 1] if i + 1 < len(messages) else None
        if isinstance(message, ToolMessage) and isinstance(nxt, UserMessage):
            fixed.append(AssistantMessage(content=PLACEHOLDER_ASSISTANT_CONTENT, tool_calls=[]))
    return fixed


def translate_tool_choice(choice: Optional[ToolChoice], has_tools: bool) -> Optional[WireToolChoice]:
    """Map the neutral tool choice to the wire value.

    Without tools there is no tool_choice field at all. With tools the
    requested choice passes through and an unset choice becomes ``auto``.
    """
    if not has_tools:
        return None
    if choice is ToolChoice.NONE:
        return "none"
    if choice is ToolChoice.ANY:
        return "any"
    return "auto"


def into_mistral(
    request: CompletionRequest,
    model: str,
    max_output_tokens: Optional[int] = None,
) -> MistralRequest:
    """Translate ``request`` into a streaming Mistral request for ``model``.

    ``max_output_tokens`` is the model ceiling; the request's own
    ``max_output_tokens`` wins when set.
    """
    messages: List[WireMessage] = []
    for message in request.messages:
        _ROLE_HANDLERS[message.role](message, messages)

    has_tools = bool(request.tools)
    return MistralRequest(
        model=model,
        messages=insert_placeholder_assistants(messages),
        stream=True,
        max_tokens=request.max_output_tokens if request.max_output_tokens is not None else max_output_tokens,
        temperature=request.temperature,
        tool_choice=translate_tool_choice(request.tool_choice, has_tools),
        parallel_tool_calls=False if has_tools else None,
        tools=[
            ToolDefinition(
                function=FunctionDefinition(
                    name=tool.name,
                    description=tool.description,
                    parameters=tool.input_schema,
                )
            )
            for tool in request.tools
        ],
    )


__all__ = [
    "into_mistral",
    "insert_placeholder_assistants",
    "translate_tool_choice",
]
