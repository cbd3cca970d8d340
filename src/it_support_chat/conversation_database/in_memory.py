"""
Process-local conversation store.

'InMemoryConversationDatabase' keeps every conversation in a dict keyed by id,
preserving insertion order for listing. Nothing survives a restart.

Writers are serialised with asyncio locks: one store-level lock guards inserts
and deletes of the mapping, and one lock per conversation guards its message
list. Locks are only held around the in-memory mutation, never across an AI
call, so a slow reply in one request does not block appends in another.
Concurrent appends to the same conversation are committed in lock acquisition
order, which is not necessarily submission order.
"""

import asyncio

from loguru import logger

from it_support_chat.conversation_database.data_models.attachment import Attachment
from it_support_chat.conversation_database.data_models.conversation import (
    DEFAULT_CONVERSATION_TITLE,
    WELCOME_MESSAGE,
    Conversation,
    ConversationDatabase,
)
from it_support_chat.conversation_database.data_models.message import Message, Sender
from it_support_chat.errors import ConversationNotFoundError
from it_support_chat.utils.database import generate_uid
from it_support_chat.utils.time import get_current_timestamp


def _welcome_message() -> Message:
    return Message(
        id=generate_uid(),
        content=WELCOME_MESSAGE,
        sender=Sender.ASSISTANT,
        timestamp=get_current_timestamp(),
    )


def _snapshot(conversation: Conversation) -> Conversation:
    return conversation.model_copy(update={"messages": list(conversation.messages)})


class InMemoryConversationDatabase(ConversationDatabase):
    """
    'ConversationDatabase' backed by a plain dict.

    Every new or cleared conversation starts with a single assistant welcome
    message. Titles that are missing or blank fall back to
    'DEFAULT_CONVERSATION_TITLE'.
    """

    def __init__(self) -> None:
        self._conversations: dict[str, Conversation] = {}
        self._conversation_locks: dict[str, asyncio.Lock] = {}
        self._lock = asyncio.Lock()

    async def create_conversation(self, title: str | None = None) -> Conversation:
        conversation = Conversation(
            id=generate_uid(),
            title=title if title and title.strip() else DEFAULT_CONVERSATION_TITLE,
            messages=[_welcome_message()],
            created_at=get_current_timestamp(),
        )
        async with self._lock:
            self._conversations[conversation.id] = conversation
            self._conversation_locks[conversation.id] = asyncio.Lock()
        logger.info(f"Created conversation {conversation.id} ({conversation.title!r})")
        return _snapshot(conversation)

    async def list_conversations(self) -> list[Conversation]:
        return [_snapshot(conversation) for conversation in self._conversations.values()]

    async def get_conversation(self, conversation_id: str) -> Conversation:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        return _snapshot(conversation)

    async def append_message(
        self,
        conversation_id: str,
        content: str,
        sender: Sender,
        attachments: list[Attachment] | None = None,
    ) -> Message:
        lock = self._conversation_locks.get(conversation_id)
        if lock is None:
            raise ConversationNotFoundError(conversation_id)

        async with lock:
            # The conversation may have been deleted while we waited for the lock.
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                raise ConversationNotFoundError(conversation_id)
            message = Message(
                id=generate_uid(),
                content=content,
                sender=Sender(sender),
                timestamp=get_current_timestamp(),
                attachments=list(attachments) if attachments else None,
            )
            conversation.messages.append(message)

        logger.debug(f"Appended {message.sender} message {message.id} to conversation {conversation_id}")
        return message

    async def delete_conversation(self, conversation_id: str) -> None:
        async with self._lock:
            if self._conversations.pop(conversation_id, None) is None:
                raise ConversationNotFoundError(conversation_id)
            self._conversation_locks.pop(conversation_id, None)
        logger.info(f"Deleted conversation {conversation_id}")

    async def clear_conversation(self, conversation_id: str) -> None:
        lock = self._conversation_locks.get(conversation_id)
        if lock is None:
            raise ConversationNotFoundError(conversation_id)

        async with lock:
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                raise ConversationNotFoundError(conversation_id)
            conversation.messages = [_welcome_message()]
        logger.info(f"Cleared conversation {conversation_id}")
