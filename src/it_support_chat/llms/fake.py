"""
Offline LLM backend.

'FakeLLM' answers every request with a canned reply (or replies in turn from a
script) without touching the network. It backs the 'fake' LLM backend for local
UI work and serves as the test double for the gateway. It is never a production
answer path.
"""

from collections.abc import Sequence

from it_support_chat.llms.base import LLM, LLMMessage, Roles

DEFAULT_FAKE_REPLY = (
    "I understand your issue. Let me help you with that. "
    "(This reply comes from the offline 'fake' backend; configure LLM_BACKEND to use a real model.)"
)


class FakeLLM(LLM):
    """
    Deterministic stand-in for a real model.

    Replies are taken from 'replies' in order, the last one repeating once the
    script is exhausted. Every conversation received is recorded in 'calls' so
    tests can assert on the exact prompt that was dispatched.
    """

    def __init__(self, replies: Sequence[str] = (DEFAULT_FAKE_REPLY,), model_name: str = "fake") -> None:
        if not replies:
            raise ValueError("FakeLLM needs at least one reply")
        self.model_name = model_name
        self.replies = list(replies)
        self.calls: list[list[LLMMessage]] = []

    async def generate(self, conversation: list[LLMMessage]) -> LLMMessage:
        self.calls.append(list(conversation))
        reply = self.replies[min(len(self.calls), len(self.replies)) - 1]
        return LLMMessage(content=reply, role=Roles.ASSISTANT)
