"""Tests for vendor-neutral -> Mistral request translation.

Covers:
- per-role content handling and message counts
- tool results, tool uses and the tool->user placeholder repair
- tool choice defaulting and parallel tool calls
- payload shape (omitted optionals, image parts)
"""
from __future__ import annotations

import json

import pytest

from mistral_providers.base.constants import TOOL_IMAGE_RESULT_PLACEHOLDER
from mistral_providers.base.models import (
    CompletionRequest,
    ImageContent,
    RedactedThinkingContent,
    RequestMessage,
    Role,
    TextContent,
    ThinkingContent,
    ToolChoice,
    ToolDefinition,
    ToolResultContent,
    ToolUse,
)
from mistral_providers.mistral.translate import (
    insert_placeholder_assistants,
    into_mistral,
    translate_tool_choice,
)
from mistral_providers.mistral.wire import (
    AssistantMessage,
    ImageUrlPart,
    SystemMessage,
    TextPart,
    ToolMessage,
    UserMessage,
)

WEATHER_TOOL = ToolDefinition(
    name="get_weather",
    description="Look up the weather",
    input_schema={"type": "object", "properties": {"city": {"type": "string"}}},
)


def _msg(role: Role, *parts) -> RequestMessage:
    return RequestMessage(role=role, content=list(parts))


def test_system_and_user_round_trip():
    request = CompletionRequest(
        messages=[
            _msg(Role.SYSTEM, TextContent("You are helpful")),
            _msg(Role.USER, TextContent("Hello")),
        ],
        temperature=0.5,
    )
    wire = into_mistral(request, "mistral-small-latest")

    assert len(wire.messages) == 2  # nosec B101
    assert isinstance(wire.messages[0], SystemMessage)  # nosec B101
    assert wire.messages[0].content == "You are helpful"  # nosec B101
    assert isinstance(wire.messages[1], UserMessage)  # nosec B101
    assert wire.messages[1].content == "Hello"  # nosec B101
    assert wire.stream is True  # nosec B101
    assert wire.temperature == 0.5  # nosec B101
    assert wire.tool_choice is None  # nosec B101
    assert wire.tools == []  # nosec B101
    assert wire.parallel_tool_calls is None  # nosec B101


def test_payload_omits_unset_fields():
    request = CompletionRequest(messages=[_msg(Role.USER, TextContent("Hi"))])
    payload = into_mistral(request, "mistral-small-latest").to_payload()

    assert payload == {  # nosec B101
        "model": "mistral-small-latest",
        "messages": [{"role": "user", "content": "Hi"}],
        "stream": True,
    }


def test_max_output_tokens_becomes_max_tokens():
    request = CompletionRequest(messages=[_msg(Role.USER, TextContent("Hi"))])
    wire = into_mistral(request, "m", max_output_tokens=512)
    assert wire.to_payload()["max_tokens"] == 512  # nosec B101


def test_message_count_matches_non_empty_text_messages():
    request = CompletionRequest(
        messages=[
            _msg(Role.SYSTEM, TextContent("s")),
            _msg(Role.USER, TextContent("a")),
            _msg(Role.USER, TextContent("")),
            _msg(Role.USER, TextContent("b")),
        ]
    )
    wire = into_mistral(request, "m")
    assert len(wire.messages) == 3  # nosec B101


def test_user_text_and_thinking_concatenate():
    request = CompletionRequest(
        messages=[_msg(Role.USER, TextContent("Hello "), ThinkingContent("world", signature="sig"))]
    )
    wire = into_mistral(request, "m")
    assert wire.messages[0].content == "Hello world"  # nosec B101


def test_user_with_only_tool_use_emits_nothing():
    request = CompletionRequest(
        messages=[_msg(Role.USER, ToolUse(id="t1", name="get_weather", input={}))]
    )
    assert into_mistral(request, "m").messages == []  # nosec B101


def test_redacted_thinking_is_dropped_everywhere():
    request = CompletionRequest(
        messages=[
            _msg(Role.SYSTEM, RedactedThinkingContent("x")),
            _msg(Role.USER, RedactedThinkingContent("x")),
            _msg(Role.ASSISTANT, RedactedThinkingContent("x")),
        ]
    )
    assert into_mistral(request, "m").messages == []  # nosec B101


def test_image_makes_user_content_multipart():
    request = CompletionRequest(
        messages=[_msg(Role.USER, TextContent("What is this?"), ImageContent(source="aGVsbG8="))]
    )
    wire = into_mistral(request, "pixtral-12b-latest")

    (message,) = wire.messages
    assert isinstance(message, UserMessage)  # nosec B101
    assert isinstance(message.content, list) and len(message.content) == 2  # nosec B101
    assert isinstance(message.content[0], TextPart)  # nosec B101
    assert message.content[0].text == "What is this?"  # nosec B101
    assert isinstance(message.content[1], ImageUrlPart)  # nosec B101
    assert message.content[1].image_url == "data:image/png;base64,aGVsbG8="  # nosec B101

    payload = wire.to_payload()
    assert payload["messages"][0]["content"] == [  # nosec B101
        {"type": "text", "text": "What is this?"},
        {"type": "image_url", "image_url": "data:image/png;base64,aGVsbG8="},
    ]


def test_text_after_image_appends_part():
    request = CompletionRequest(
        messages=[_msg(Role.USER, ImageContent(source="AA=="), TextContent("caption"))]
    )
    (message,) = into_mistral(request, "m").messages
    assert [type(p) for p in message.content] == [ImageUrlPart, TextPart]  # nosec B101


def test_images_dropped_for_system_and_assistant():
    request = CompletionRequest(
        messages=[
            _msg(Role.SYSTEM, ImageContent(source="AA==")),
            _msg(Role.ASSISTANT, ImageContent(source="AA==")),
        ]
    )
    assert into_mistral(request, "m").messages == []  # nosec B101


def test_tool_result_becomes_tool_message_before_user_text():
    request = CompletionRequest(
        messages=[
            _msg(
                Role.USER,
                ToolResultContent(tool_use_id="call_1", tool_name="get_weather", content="sunny"),
                TextContent("thanks"),
            )
        ]
    )
    wire = into_mistral(request, "m")

    tool, placeholder, user = wire.messages
    assert isinstance(tool, ToolMessage)  # nosec B101
    assert tool.tool_call_id == "call_1" and tool.content == "sunny"  # nosec B101
    assert isinstance(placeholder, AssistantMessage) and placeholder.content == " "  # nosec B101
    assert isinstance(user, UserMessage) and user.content == "thanks"  # nosec B101


def test_image_tool_result_uses_placeholder_text():
    request = CompletionRequest(
        messages=[
            _msg(
                Role.USER,
                ToolResultContent(tool_use_id="call_1", tool_name="screenshot", content=ImageContent(source="AA==")),
            )
        ]
    )
    (tool,) = into_mistral(request, "m").messages
    assert tool.content == TOOL_IMAGE_RESULT_PLACEHOLDER  # nosec B101


def test_assistant_tool_use_joins_preceding_text():
    request = CompletionRequest(
        messages=[
            _msg(
                Role.ASSISTANT,
                TextContent("Let me check."),
                ToolUse(id="call_1", name="get_weather", input={"city": "Paris"}),
                ToolUse(id="call_2", name="get_weather", input={"city": "Rome"}),
            )
        ],
        tools=[WEATHER_TOOL],
    )
    (message,) = into_mistral(request, "m").messages

    assert message.content == "Let me check."  # nosec B101
    assert [c.id for c in message.tool_calls] == ["call_1", "call_2"]  # nosec B101
    assert json.loads(message.tool_calls[0].function.arguments) == {"city": "Paris"}  # nosec B101
    assert message.tool_calls[0].type == "function"  # nosec B101


def test_assistant_tool_use_without_text_has_no_content():
    request = CompletionRequest(
        messages=[_msg(Role.ASSISTANT, ToolUse(id="call_1", name="get_weather", input={}))]
    )
    wire = into_mistral(request, "m")
    payload_message = wire.to_payload()["messages"][0]

    assert payload_message["role"] == "assistant"  # nosec B101
    assert "content" not in payload_message  # nosec B101
    assert payload_message["tool_calls"][0]["function"] == {"name": "get_weather", "arguments": "{}"}  # nosec B101


def test_assistant_text_parts_are_separate_messages():
    request = CompletionRequest(
        messages=[_msg(Role.ASSISTANT, TextContent("one"), ThinkingContent("two"))]
    )
    wire = into_mistral(request, "m")
    assert [m.content for m in wire.messages] == ["one", "two"]  # nosec B101
    assert "tool_calls" not in wire.to_payload()["messages"][0]  # nosec B101


def test_tool_use_in_next_assistant_message_joins_trailing_assistant():
    request = CompletionRequest(
        messages=[
            _msg(Role.ASSISTANT, TextContent("thinking aloud")),
            _msg(Role.ASSISTANT, ToolUse(id="call_1", name="get_weather", input={})),
        ]
    )
    (message,) = into_mistral(request, "m").messages
    assert message.content == "thinking aloud" and len(message.tool_calls) == 1  # nosec B101


def test_unsupported_content_raises_type_error():
    request = CompletionRequest(messages=[RequestMessage(role=Role.USER, content=[object()])])
    with pytest.raises(TypeError):
        into_mistral(request, "m")


def test_full_tool_conversation_has_no_tool_user_adjacency():
    request = CompletionRequest(
        messages=[
            _msg(Role.USER, TextContent("Weather in Paris?")),
            _msg(Role.ASSISTANT, ToolUse(id="call_1", name="get_weather", input={"city": "Paris"})),
            _msg(Role.USER, ToolResultContent(tool_use_id="call_1", tool_name="get_weather", content="sunny")),
            _msg(Role.USER, TextContent("And Rome?")),
        ],
        tools=[WEATHER_TOOL],
    )
    messages = into_mistral(request, "m").messages
    roles = [m.role for m in messages]

    assert roles == ["user", "assistant", "tool", "assistant", "user"]  # nosec B101
    for current, following in zip(messages, messages[1:]):
        assert not (isinstance(current, ToolMessage) and isinstance(following, UserMessage))  # nosec B101


def test_placeholder_repair_is_idempotent():
    messages = [
        ToolMessage(content="a", tool_call_id="1"),
        UserMessage(content="b"),
        ToolMessage(content="c", tool_call_id="2"),
        ToolMessage(content="d", tool_call_id="3"),
        UserMessage(content="e"),
    ]
    once = insert_placeholder_assistants(messages)
    twice = insert_placeholder_assistants(once)

    assert len(once) == 7  # nosec B101
    assert twice == once  # nosec B101


@pytest.mark.parametrize(
    "choice, has_tools, expected",
    [
        (None, False, None),
        (ToolChoice.AUTO, False, None),
        (ToolChoice.ANY, False, None),
        (ToolChoice.NONE, False, None),
        (None, True, "auto"),
        (ToolChoice.AUTO, True, "auto"),
        (ToolChoice.ANY, True, "any"),
        (ToolChoice.NONE, True, "none"),
    ],
)
def test_translate_tool_choice(choice, has_tools, expected):
    assert translate_tool_choice(choice, has_tools) == expected  # nosec B101


def test_tools_set_parallel_tool_calls_false_and_translate_definitions():
    request = CompletionRequest(
        messages=[_msg(Role.USER, TextContent("Hi"))],
        tools=[WEATHER_TOOL],
    )
    payload = into_mistral(request, "m").to_payload()

    assert payload["parallel_tool_calls"] is False  # nosec B101
    assert payload["tool_choice"] == "auto"  # nosec B101
    assert payload["tools"] == [  # nosec B101
        {
            "type": "function",
            "function": {
                "name": "get_weather",
                "description": "Look up the weather",
                "parameters": WEATHER_TOOL.input_schema,
            },
        }
    ]


def test_no_tools_omits_tool_choice_even_when_requested():
    request = CompletionRequest(
        messages=[_msg(Role.USER, TextContent("Hi"))],
        tool_choice=ToolChoice.NONE,
    )
    payload = into_mistral(request, "m").to_payload()
    assert "tool_choice" not in payload and "parallel_tool_calls" not in payload  # nosec B101


def test_request_max_output_tokens_overrides_model_ceiling():
    request = CompletionRequest(messages=[_msg(Role.USER, TextContent("Hi"))], max_output_tokens=64)
    assert into_mistral(request, "m", max_output_tokens=512).max_tokens == 64  # nosec B101
    request.max_output_tokens = None
    assert into_mistral(request, "m", max_output_tokens=512).max_tokens == 512  # nosec B101
