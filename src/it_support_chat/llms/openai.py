"""
OpenAI chat-completions backend.

Multi-part messages are sent as 'text' / 'image_url' content items, with images
inlined as base64 'data:' URLs, which vision-capable models accept directly.
"""

from typing import Any

from openai import AsyncOpenAI

from it_support_chat.llms.base import LLM, LLMMessage, Roles


def _to_openai_content(message: LLMMessage) -> str | list[dict[str, Any]]:
    if isinstance(message.content, str):
        return message.content
    content: list[dict[str, Any]] = []
    for part in message.content:
        if part.type == "text":
            content.append({"type": "text", "text": part.text})
        else:
            content.append({"type": "image_url", "image_url": {"url": part.data_url()}})
    return content


class OpenAILLM(LLM):
    def __init__(
        self,
        model_name: str = "gpt-4o-mini",
        temperature: float = 0.3,
        seed: int | None = None,
        openai_api_key: str | None = None,
        base_url: str | None = None,
    ) -> None:
        self.model_name = model_name
        self.temperature = temperature
        self.seed = seed
        self.client = AsyncOpenAI(api_key=openai_api_key, base_url=base_url)

    async def generate(self, conversation: list[LLMMessage]) -> LLMMessage:
        completion = await self.client.chat.completions.create(
            model=self.model_name,
            messages=[
                {"role": message.role.value, "content": _to_openai_content(message)}  # type: ignore[misc]
                for message in conversation
            ],
            temperature=self.temperature,
            seed=self.seed,
        )
        return LLMMessage(content=completion.choices[0].message.content or "", role=Roles.ASSISTANT)
