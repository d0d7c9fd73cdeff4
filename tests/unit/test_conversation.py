"""Unit tests for the search-augmented conversation LLM."""

import json
from unittest.mock import MagicMock, patch

import pytest

from src.agent.service import WebSearchService
from src.llm.conversation import ConversationLLM
from src.llm.tools import ToolDispatcher
from src.web.search_provider import RawSearchPayload


def _response(message):
    resp = MagicMock()
    resp.choices = [MagicMock(message=message)]
    return resp


def _message(content=None, tool_calls=None):
    msg = MagicMock()
    msg.content = content
    msg.tool_calls = tool_calls
    return msg


def _tool_call(call_id, name, arguments):
    call = MagicMock()
    call.id = call_id
    call.function.name = name
    call.function.arguments = arguments
    return call


def test_generate_response_inserts_search_text():
    with patch("src.llm.base.OpenAI") as mock_cls:
        mock_client = MagicMock()
        mock_cls.return_value = mock_client
        mock_client.chat.completions.create.return_value = _response(_message("It is sunny."))

        llm = ConversationLLM(model="test-model", insertion_template="WEB[{{query}}]: {{text}}")
        answer = llm.generate_response("weather in Paris", "Sunny, 25C.\n")

        assert answer == "It is sunny."
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert "WEB[weather in Paris]: Sunny, 25C." in kwargs["messages"][0]["content"]
        assert kwargs["messages"][1] == {"role": "user", "content": "weather in Paris"}


def test_generate_response_without_search_text():
    with patch("src.llm.base.OpenAI"):
        llm = ConversationLLM(model="m", insertion_template="WEB: {{text}}")
        messages = llm.build_messages("hello", "")
        assert "WEB:" not in messages[0]["content"]


def test_completion_failure_returns_none():
    with patch("src.llm.base.OpenAI") as mock_cls:
        mock_cls.return_value.chat.completions.create.side_effect = RuntimeError("api down")
        llm = ConversationLLM(model="m")
        assert llm.generate_response("q", "text") is None


@pytest.mark.asyncio
async def test_chat_with_tools_runs_requested_search(test_settings, fake_provider, result_cache):
    fake_provider.payload = RawSearchPayload(text_bits=["Paris is the capital."], links=["https://a"])
    dispatcher = ToolDispatcher(
        WebSearchService(test_settings, provider=fake_provider, cache=result_cache)
    )

    with patch("src.llm.base.OpenAI") as mock_cls:
        mock_client = MagicMock()
        mock_cls.return_value = mock_client
        call = _tool_call("call_1", "WebSearch", json.dumps({"query": "capital of france"}))
        mock_client.chat.completions.create.side_effect = [
            _response(_message(tool_calls=[call])),
            _response(_message("Paris.")),
        ]

        llm = ConversationLLM(model="m")
        reply = await llm.chat_with_tools([{"role": "user", "content": "capital?"}], dispatcher)

    assert reply == "Paris."
    assert fake_provider.calls == ["capital of france"]
    second = mock_client.chat.completions.create.call_args_list[1].kwargs["messages"]
    tool_msg = second[-1]
    assert tool_msg["role"] == "tool"
    assert tool_msg["tool_call_id"] == "call_1"
    assert json.loads(tool_msg["content"])["text"] == "Paris is the capital.\n"


@pytest.mark.asyncio
async def test_chat_with_tools_reports_tool_errors(test_settings, fake_provider, result_cache):
    dispatcher = ToolDispatcher(
        WebSearchService(test_settings, provider=fake_provider, cache=result_cache)
    )

    with patch("src.llm.base.OpenAI") as mock_cls:
        mock_client = MagicMock()
        mock_cls.return_value = mock_client
        call = _tool_call("call_9", "WebSearch", "{}")
        mock_client.chat.completions.create.side_effect = [
            _response(_message(tool_calls=[call])),
            _response(_message("Sorry.")),
        ]

        reply = await ConversationLLM(model="m").chat_with_tools([], dispatcher)

    assert reply == "Sorry."
    tool_msg = mock_client.chat.completions.create.call_args_list[1].kwargs["messages"][-1]
    assert json.loads(tool_msg["content"]) == {"error": "No query provided"}


@pytest.mark.asyncio
async def test_chat_without_tool_calls_returns_content(test_settings, fake_provider, result_cache):
    dispatcher = ToolDispatcher(
        WebSearchService(test_settings, provider=fake_provider, cache=result_cache)
    )
    with patch("src.llm.base.OpenAI") as mock_cls:
        mock_cls.return_value.chat.completions.create.return_value = _response(_message("Hi."))
        reply = await ConversationLLM(model="m").chat_with_tools([], dispatcher)
    assert reply == "Hi."
    assert fake_provider.calls == []
