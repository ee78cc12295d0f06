"""TDD: Groq inference client tests written FIRST"""
import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from src.errors import ModelInvocationError


def make_response(*contents):
    choices = []
    for content in contents:
        choice = MagicMock()
        choice.message.content = content
        choices.append(choice)
    response = MagicMock()
    response.choices = choices
    return response


def make_text_client(mock_openai, **kwargs):
    from src.inference.groq import GroqTextClient

    with patch("src.inference.groq.AsyncOpenAI", return_value=mock_openai) as mock_cls:
        client = GroqTextClient(api_key="gsk_test", **kwargs)
    return client, mock_cls


def make_vision_client(mock_openai, **kwargs):
    from src.inference.groq import GroqVisionClient

    with patch("src.inference.groq.AsyncOpenAI", return_value=mock_openai) as mock_cls:
        client = GroqVisionClient(api_key="gsk_test", **kwargs)
    return client, mock_cls


def mock_openai_returning(response):
    mock_openai = AsyncMock()
    mock_openai.chat.completions.create = AsyncMock(return_value=response)
    return mock_openai


# ── GroqTextClient ────────────────────────────────────────────────────────────


async def test_text_client_targets_groq_without_sdk_retries():
    _, mock_cls = make_text_client(mock_openai_returning(make_response("hi")))

    kwargs = mock_cls.call_args.kwargs
    assert kwargs["api_key"] == "gsk_test"
    assert kwargs["base_url"] == "https://api.groq.com/openai/v1"
    assert kwargs["max_retries"] == 0


async def test_text_client_sends_fixed_sampling_parameters():
    mock_openai = mock_openai_returning(make_response("4"))
    client, _ = make_text_client(mock_openai)

    result = await client.complete("what is 2+2?")

    mock_openai.chat.completions.create.assert_called_once()
    call_kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert call_kwargs["model"] == "llama-3.3-70b-versatile"
    assert call_kwargs["temperature"] == 0.7
    assert call_kwargs["max_tokens"] == 1024
    assert call_kwargs["messages"] == [{"role": "user", "content": "what is 2+2?"}]
    assert result.text == "4"


async def test_text_client_uses_first_choice():
    client, _ = make_text_client(mock_openai_returning(make_response("first", "second")))

    result = await client.complete("hello")

    assert result.text == "first"


async def test_text_client_placeholder_when_no_choices():
    client, _ = make_text_client(mock_openai_returning(make_response()))

    result = await client.complete("hello")

    assert result.text == "No response generated."


async def test_text_client_placeholder_when_content_empty():
    client, _ = make_text_client(mock_openai_returning(make_response(None)))

    result = await client.complete("hello")

    assert result.text == "No response generated."


async def test_text_client_wraps_api_error():
    mock_openai = AsyncMock()
    mock_openai.chat.completions.create = AsyncMock(side_effect=RuntimeError("401 bad key"))
    client, _ = make_text_client(mock_openai)

    with pytest.raises(ModelInvocationError) as info:
        await client.complete("hello")

    assert str(info.value) == "Failed to generate AI response"
    assert isinstance(info.value.__cause__, RuntimeError)


async def test_text_client_malformed_choices_is_an_invocation_error():
    response = make_response()
    response.choices = None
    client, _ = make_text_client(mock_openai_returning(response))

    with pytest.raises(ModelInvocationError) as info:
        await client.complete("hello")

    assert isinstance(info.value.__cause__, TypeError)


async def test_text_client_deadline_is_an_invocation_error():
    async def _hang(**_):
        await asyncio.sleep(5)

    mock_openai = AsyncMock()
    mock_openai.chat.completions.create = AsyncMock(side_effect=_hang)
    client, _ = make_text_client(mock_openai, timeout=0.01)

    with pytest.raises(ModelInvocationError):
        await client.complete("hello")


# ── GroqVisionClient ──────────────────────────────────────────────────────────


async def test_vision_client_sends_prompt_and_jpeg_data_uri():
    mock_openai = mock_openai_returning(make_response("a cat"))
    client, _ = make_vision_client(mock_openai)

    result = await client.analyze("iVBORw0KGgo=", "describe")

    call_kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert call_kwargs["model"] == "meta-llama/llama-4-scout-17b-16e-instruct"
    assert call_kwargs["temperature"] == 0.7
    assert call_kwargs["max_tokens"] == 1024
    content = call_kwargs["messages"][0]["content"]
    assert content[0] == {"type": "text", "text": "describe"}
    assert content[1] == {
        "type": "image_url",
        "image_url": {"url": "data:image/jpeg;base64,iVBORw0KGgo="},
    }
    assert result.text == "a cat"


async def test_vision_client_defaults_omitted_prompt():
    mock_openai = mock_openai_returning(make_response("a dog"))
    client, _ = make_vision_client(mock_openai)

    await client.analyze("AAAA")

    content = mock_openai.chat.completions.create.call_args.kwargs["messages"][0]["content"]
    assert content[0]["text"] == "What's in this image?"


async def test_vision_client_placeholder_when_no_content():
    client, _ = make_vision_client(mock_openai_returning(make_response("")))

    result = await client.analyze("AAAA", "describe")

    assert result.text == "No analysis generated."


async def test_vision_client_wraps_api_error():
    mock_openai = AsyncMock()
    mock_openai.chat.completions.create = AsyncMock(side_effect=RuntimeError("API down"))
    client, _ = make_vision_client(mock_openai)

    with pytest.raises(ModelInvocationError, match="Failed to analyze image"):
        await client.analyze("AAAA", "describe")


async def test_vision_client_passes_blank_prompt_through():
    mock_openai = mock_openai_returning(make_response("a dog"))
    client, _ = make_vision_client(mock_openai)

    await client.analyze("AAAA", "   ")

    content = mock_openai.chat.completions.create.call_args.kwargs["messages"][0]["content"]
    assert content[0]["text"] == "   "


async def test_vision_client_malformed_choices_is_an_invocation_error():
    response = make_response()
    response.choices = None
    client, _ = make_vision_client(mock_openai_returning(response))

    with pytest.raises(ModelInvocationError, match="Failed to analyze image") as info:
        await client.analyze("AAAA", "describe")

    assert isinstance(info.value.__cause__, TypeError)


async def test_vision_client_deadline_is_an_invocation_error():
    async def _hang(**_):
        await asyncio.sleep(5)

    mock_openai = AsyncMock()
    mock_openai.chat.completions.create = AsyncMock(side_effect=_hang)
    client, _ = make_vision_client(mock_openai, timeout=0.01)

    with pytest.raises(ModelInvocationError, match="Failed to analyze image") as info:
        await client.analyze("AAAA", "describe")

    assert isinstance(info.value.__cause__, asyncio.TimeoutError)
