"""Request and response bodies of the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from it_support_chat.conversation_database.data_models.attachment import Attachment
from it_support_chat.conversation_database.data_models.message import Sender


class ConversationInput(BaseModel):
    title: str | None = None


class MessageInput(BaseModel):
    content: str = ""
    sender: Sender
    attachments: list[Attachment] | None = None


class StatusResponse(BaseModel):
    message: str


class TextInput(BaseModel):
    text: str = ""


class AIResponse(BaseModel):
    response: str


class MultiModalInput(BaseModel):
    """
    One entry of the 'inputs' JSON list of a multi-modal request.

    Text entries carry 'content'; image and audio entries name the multipart
    field holding their file in 'fileField'.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str
    content: str | None = None
    file_field: str | None = Field(default=None, alias="fileField")
