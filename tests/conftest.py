"""Shared fixtures: a fresh store, scripted LLMs, stub gateways and an app per test."""

from __future__ import annotations

import base64
import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from it_support_chat.config import Settings
from it_support_chat.conversation_database.controller import SupportChatController
from it_support_chat.conversation_database.in_memory import InMemoryConversationDatabase
from it_support_chat.gateway.ai_gateway import AIGateway
from it_support_chat.llms.base import LLM, LLMMessage
from it_support_chat.llms.fake import FakeLLM
from it_support_chat.server import create_app
from it_support_chat.uploads import UploadStore

CABLE_REPLY = "Have you checked the cable?"


class RaisingLLM(LLM):
    """Backend whose every call fails, like an unreachable vendor API."""

    model_name = "raising"

    def __init__(self) -> None:
        self.calls: list[list[LLMMessage]] = []

    async def generate(self, conversation: list[LLMMessage]) -> LLMMessage:
        self.calls.append(list(conversation))
        raise RuntimeError("upstream exploded: api key sk-secret rejected")


class EchoGateway(AIGateway):
    """Gateway stub: image calls return a fixed analysis, text calls echo the prompt."""

    def __init__(self, analysis: str = "A") -> None:
        super().__init__(llm=FakeLLM())
        self.analysis = analysis
        self.text_prompts: list[str] = []
        self.image_calls: list[tuple[bytes, str | None]] = []

    async def process_text(self, text: str) -> str:
        self.text_prompts.append(text)
        return text

    async def process_image(self, data: bytes, prompt: str | None = None) -> str:
        self.image_calls.append((data, prompt))
        return self.analysis


def make_png(color: str = "red") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=color).save(buffer, format="PNG")
    return buffer.getvalue()


def data_url(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def store() -> InMemoryConversationDatabase:
    return InMemoryConversationDatabase()


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM([CABLE_REPLY])


@pytest.fixture
def gateway(fake_llm) -> AIGateway:
    return AIGateway(llm=fake_llm)


@pytest.fixture
def upload_store(tmp_path) -> UploadStore:
    return UploadStore(tmp_path / "uploads", max_bytes=1024 * 1024)


@pytest.fixture
def controller(store, gateway, upload_store) -> SupportChatController:
    return SupportChatController(conversation_db=store, gateway=gateway, upload_store=upload_store)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(upload_dir=tmp_path / "uploads", max_upload_bytes=1024 * 1024)


@pytest.fixture
def app(settings, controller):
    return create_app(settings, controller=controller)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
