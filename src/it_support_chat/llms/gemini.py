"""
Google Gemini backend built on 'langchain_google_genai'.

The text and vision paths of the chat service may use different Gemini models,
so 'AIGateway' is usually handed two 'GeminiLLM' instances. Images travel as
'image_url' content blocks holding a base64 'data:' URL.
"""

from typing import Any

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from it_support_chat.llms.base import LLM, LLMMessage, Roles


def _to_langchain_message(message: LLMMessage) -> BaseMessage:
    content: str | list[str | dict[str, Any]]
    if isinstance(message.content, str):
        content = message.content
    else:
        content = [
            {"type": "text", "text": part.text}
            if part.type == "text"
            else {"type": "image_url", "image_url": {"url": part.data_url()}}
            for part in message.content
        ]
    match message.role:
        case Roles.SYSTEM:
            return SystemMessage(content=content)
        case Roles.USER:
            return HumanMessage(content=content)
        case _:
            return AIMessage(content=content)


def _response_text(content: str | list[Any]) -> str:
    if isinstance(content, str):
        return content
    # Newer Gemini models answer with a list of typed blocks.
    return "".join(
        block if isinstance(block, str) else block.get("text", "")
        for block in content
        if isinstance(block, str) or block.get("type") == "text"
    )


class GeminiLLM(LLM):
    def __init__(
        self,
        model_name: str = "gemini-2.0-flash",
        temperature: float = 0.3,
        google_api_key: str | None = None,
    ) -> None:
        self.model_name = model_name
        self.temperature = temperature
        self.client = ChatGoogleGenerativeAI(
            model=model_name,
            google_api_key=google_api_key,
            temperature=temperature,
        )

    async def generate(self, conversation: list[LLMMessage]) -> LLMMessage:
        response = await self.client.ainvoke([_to_langchain_message(message) for message in conversation])
        return LLMMessage(content=_response_text(response.content), role=Roles.ASSISTANT)
