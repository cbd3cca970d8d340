"""
Core LLM abstractions and message data models.

All concrete backends ('GeminiLLM', 'OpenAILLM', 'FakeLLM') implement the 'LLM'
ABC. The shared message format ('LLMMessage') is backend-agnostic so the
gateway never needs to know which vendor is answering.

A message's content is either plain text or an ordered list of 'ContentPart'
objects. The list form carries inline images next to text, in the order the
caller supplied them; each backend translates it into its own multi-part
payload.
"""

import base64
from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel


class Roles(StrEnum):
    """Conversation roles understood by the chat-completion style APIs."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ContentPart(BaseModel):
    """
    One segment of a multi-part message.

    Text parts carry 'text'; image parts carry the raw bytes in 'data' along
    with the sniffed 'mime_type'.
    """

    type: Literal["text", "image"]
    text: str = ""
    data: bytes = b""
    mime_type: str = ""

    @classmethod
    def from_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def from_image(cls, data: bytes, mime_type: str) -> "ContentPart":
        return cls(type="image", data=data, mime_type=mime_type)

    def data_url(self) -> str:
        """Image bytes as a base64 'data:' URL, the inline form both vendors accept."""
        return f"data:{self.mime_type};base64,{base64.b64encode(self.data).decode('ascii')}"


class LLMMessage(BaseModel):
    """A single message sent to or received from an LLM."""

    content: str | list[ContentPart] = ""
    role: Roles = Roles.ASSISTANT

    def text(self) -> str:
        """Concatenated text of the message, ignoring image parts."""
        if isinstance(self.content, str):
            return self.content
        return "".join(part.text for part in self.content if part.type == "text")


class LLM(ABC):
    """
    Abstract base class for language model backends.

    Concrete implementations adapt one vendor client to a common interface.
    'generate' may raise any exception; translating failures into the
    package's error taxonomy is the gateway's job.
    """

    model_name: str

    @abstractmethod
    async def generate(self, conversation: list[LLMMessage]) -> LLMMessage:
        """Return a single complete response for the given conversation."""
        pass
