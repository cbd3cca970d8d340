"""
Conversation data model and storage interface.

The 'ConversationDatabase' ABC is the pluggable storage backend for
conversations and their messages. 'InMemoryConversationDatabase' is the only
concrete implementation; it is constructed once at start-up and handed to the
controller, so tests can build a fresh store per case.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from it_support_chat.conversation_database.data_models.attachment import Attachment
from it_support_chat.conversation_database.data_models.message import Message, Sender

DEFAULT_CONVERSATION_TITLE = "New Conversation"
WELCOME_MESSAGE = "Hello! I'm your IT Support Agent. What technical issue can I help you with?"


class Conversation(BaseModel):
    """
    A titled, timestamped sequence of messages.

    'created_at' is exposed as 'createdAt' on the wire because that is the
    name the browser client reads.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    messages: list[Message] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")


class ConversationDatabase(ABC):
    """
    Abstract repository for 'Conversation' records.

    Every lookup by id raises 'ConversationNotFoundError' when the id does not
    resolve. Returned conversations are snapshots: mutating them does not
    change the stored record.
    """

    @abstractmethod
    async def create_conversation(self, title: str | None = None) -> Conversation:
        pass

    @abstractmethod
    async def list_conversations(self) -> list[Conversation]:
        pass

    @abstractmethod
    async def get_conversation(self, conversation_id: str) -> Conversation:
        pass

    @abstractmethod
    async def append_message(
        self,
        conversation_id: str,
        content: str,
        sender: Sender,
        attachments: list[Attachment] | None = None,
    ) -> Message:
        pass

    @abstractmethod
    async def delete_conversation(self, conversation_id: str) -> None:
        pass

    @abstractmethod
    async def clear_conversation(self, conversation_id: str) -> None:
        pass
