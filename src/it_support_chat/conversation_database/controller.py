"""
Support chat controller (Facade).

'SupportChatController' is the single entry point for conversation logic. It
coordinates the conversation store, the AI gateway and the upload store to
handle a full conversation turn:

    1. the incoming message is appended right away, so a user's message is
       kept even if no reply can be produced;
    2. for user messages, attachments are turned into prompt sections: images
       are analysed by the gateway, concurrently, and every other attachment is
       described by type and name;
    3. the composed prompt is sent to the gateway's text path;
    4. the reply is appended as an assistant message.

A failure in step 2 or 3 propagates to the caller after step 1 has committed;
no assistant message is added in that case. Messages sent as 'assistant' are
only appended.

'MessageExchange' is the API response for a turn: the appended message plus the
assistant reply it triggered, if any.
"""

import asyncio

from loguru import logger
from pydantic import BaseModel

from it_support_chat.conversation_database.data_models.attachment import Attachment, AttachmentType
from it_support_chat.conversation_database.data_models.conversation import Conversation, ConversationDatabase
from it_support_chat.conversation_database.data_models.message import Message, Sender
from it_support_chat.conversation_database.export import ExportFormat, export_conversation, export_filename
from it_support_chat.gateway.ai_gateway import AIGateway
from it_support_chat.uploads import UploadStore

IMAGE_ANALYSIS_PROMPT = "Please analyze this image and provide relevant context for the conversation."


class MessageExchange(BaseModel):
    message: Message
    reply: Message | None = None


class ExportedConversation(BaseModel):
    filename: str
    media_type: str
    content: str


class SupportChatController:
    def __init__(
        self,
        conversation_db: ConversationDatabase,
        gateway: AIGateway,
        upload_store: UploadStore,
    ):
        self.conversation_db = conversation_db
        self.gateway = gateway
        self.upload_store = upload_store

    async def create_conversation(self, title: str | None = None) -> Conversation:
        return await self.conversation_db.create_conversation(title)

    async def list_conversations(self) -> list[Conversation]:
        return await self.conversation_db.list_conversations()

    async def get_conversation(self, conversation_id: str) -> Conversation:
        return await self.conversation_db.get_conversation(conversation_id)

    async def delete_conversation(self, conversation_id: str) -> None:
        await self.conversation_db.delete_conversation(conversation_id)

    async def clear_conversation(self, conversation_id: str) -> None:
        await self.conversation_db.clear_conversation(conversation_id)

    async def export_conversation(self, conversation_id: str, export_format: ExportFormat) -> ExportedConversation:
        conversation = await self.conversation_db.get_conversation(conversation_id)
        return ExportedConversation(
            filename=export_filename(conversation, export_format),
            media_type=export_format.media_type,
            content=export_conversation(conversation, export_format),
        )

    async def process_new_message(
        self,
        conversation_id: str,
        content: str,
        sender: Sender,
        attachments: list[Attachment] | None = None,
    ) -> MessageExchange:
        message = await self.conversation_db.append_message(conversation_id, content, sender, attachments)
        if message.sender is not Sender.USER:
            return MessageExchange(message=message)

        prompt = await self.build_prompt(message.content, message.attachments or [])
        logger.debug(f"Prompt for conversation {conversation_id}: {prompt!r}")
        response = await self.gateway.process_text(prompt)

        reply = await self.conversation_db.append_message(conversation_id, response, Sender.ASSISTANT)
        return MessageExchange(message=message, reply=reply)

    async def build_prompt(self, content: str, attachments: list[Attachment]) -> str:
        """
        Compose the text prompt for a user message.

        Attachment sections keep the attachment order even though image
        analyses complete in any order. The first failing analysis cancels the
        others and is re-raised as is.
        """
        if not attachments:
            return content
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self._describe_attachment(attachment)) for attachment in attachments]
        except ExceptionGroup as errors:
            raise errors.exceptions[0]
        return f"{content}\n\nAttachments:\n" + "\n".join(task.result() for task in tasks)

    async def _describe_attachment(self, attachment: Attachment) -> str:
        if attachment.type is AttachmentType.IMAGE:
            data = await self.upload_store.load(attachment.url)
            analysis = await self.gateway.process_image(data, IMAGE_ANALYSIS_PROMPT)
            return f"[Image Analysis: {analysis}]"
        return f"[{attachment.type.value} attachment: {attachment.name}]"
