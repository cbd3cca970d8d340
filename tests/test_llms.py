from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from it_support_chat.llms.base import ContentPart, LLMMessage, Roles
from it_support_chat.llms.fake import DEFAULT_FAKE_REPLY, FakeLLM
from it_support_chat.llms.gemini import GeminiLLM, _response_text, _to_langchain_message
from it_support_chat.llms.openai import OpenAILLM

CONVERSATION = [
    LLMMessage(role=Roles.SYSTEM, content="Be brief."),
    LLMMessage(
        role=Roles.USER,
        content=[ContentPart.from_text("What is this?"), ContentPart.from_image(b"\x89PNG", "image/png")],
    ),
]


class TestContentPart:
    def test_data_url(self):
        assert ContentPart.from_image(b"abc", "image/png").data_url() == "data:image/png;base64,YWJj"

    def test_message_text_skips_images(self):
        assert CONVERSATION[1].text() == "What is this?"


class TestFakeLLM:
    @pytest.mark.asyncio
    async def test_script_repeats_last_reply(self):
        llm = FakeLLM(["one", "two"])
        replies = [(await llm.generate(CONVERSATION)).content for _ in range(3)]
        assert replies == ["one", "two", "two"]
        assert len(llm.calls) == 3

    @pytest.mark.asyncio
    async def test_default_reply(self):
        assert (await FakeLLM().generate(CONVERSATION)).content == DEFAULT_FAKE_REPLY

    def test_empty_script(self):
        with pytest.raises(ValueError):
            FakeLLM([])


class TestOpenAILLM:
    @pytest.mark.asyncio
    async def test_generate_sends_image_url_parts(self):
        llm = OpenAILLM(model_name="gpt-4o", temperature=0.2, seed=42, openai_api_key="sk-test")
        completion = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="Looks like a PNG."))])
        llm.client = MagicMock()
        llm.client.chat.completions.create = AsyncMock(return_value=completion)

        response = await llm.generate(CONVERSATION)

        assert response.content == "Looks like a PNG."
        assert response.role is Roles.ASSISTANT
        kwargs = llm.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["seed"] == 42
        assert kwargs["messages"] == [
            {"role": "system", "content": "Be brief."},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "What is this?"},
                    {"type": "image_url", "image_url": {"url": "data:image/png;base64,iVBORw=="}},
                ],
            },
        ]

    @pytest.mark.asyncio
    async def test_null_content_becomes_empty_text(self):
        llm = OpenAILLM(openai_api_key="sk-test")
        completion = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))])
        llm.client = MagicMock()
        llm.client.chat.completions.create = AsyncMock(return_value=completion)

        assert (await llm.generate(CONVERSATION)).text() == ""


class TestGeminiLLM:
    def test_message_conversion(self):
        system, user = (_to_langchain_message(message) for message in CONVERSATION)
        assert isinstance(system, SystemMessage)
        assert system.content == "Be brief."
        assert isinstance(user, HumanMessage)
        assert user.content[1] == {"type": "image_url", "image_url": {"url": "data:image/png;base64,iVBORw=="}}
        assert isinstance(_to_langchain_message(LLMMessage(content="ok")), AIMessage)

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("plain", "plain"),
            ([{"type": "text", "text": "a"}, {"type": "thinking", "thinking": "x"}, "b"], "ab"),
        ],
    )
    def test_response_text(self, content, expected):
        assert _response_text(content) == expected

    @pytest.mark.asyncio
    async def test_generate(self):
        llm = GeminiLLM.__new__(GeminiLLM)
        llm.model_name = "gemini-2.0-flash"
        llm.client = MagicMock()
        llm.client.ainvoke = AsyncMock(return_value=AIMessage(content="Restart the spooler."))

        response = await llm.generate(CONVERSATION)

        assert response.content == "Restart the spooler."
        sent = llm.client.ainvoke.call_args.args[0]
        assert [type(message) for message in sent] == [SystemMessage, HumanMessage]
