"""
Message data model.

Messages are frozen once created: the store appends them and never edits or
removes them individually. Only deleting or clearing the whole conversation
affects a message after it has been appended.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from it_support_chat.conversation_database.data_models.attachment import Attachment


class Sender(StrEnum):
    """Author of a message. There is no system or tool role in a conversation."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    content: str
    sender: Sender
    timestamp: datetime
    attachments: list[Attachment] | None = None
