"""Conversation routes: CRUD, message turns, clear and export."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from it_support_chat.api.dependencies import get_controller
from it_support_chat.api.schemas import ConversationInput, MessageInput, StatusResponse
from it_support_chat.conversation_database.controller import MessageExchange, SupportChatController
from it_support_chat.conversation_database.data_models.conversation import Conversation
from it_support_chat.conversation_database.export import ExportFormat
from it_support_chat.errors import ValidationError

router = APIRouter(prefix="/conversations", tags=["conversations"])

Controller = Annotated[SupportChatController, Depends(get_controller)]


@router.get("", response_model=list[Conversation])
async def list_conversations(controller: Controller) -> list[Conversation]:
    return await controller.list_conversations()


@router.get("/{conversation_id}", response_model=Conversation)
async def get_conversation(conversation_id: str, controller: Controller) -> Conversation:
    return await controller.get_conversation(conversation_id)


@router.post("", response_model=Conversation, status_code=status.HTTP_201_CREATED)
async def create_conversation(controller: Controller, body: ConversationInput | None = None) -> Conversation:
    return await controller.create_conversation(body.title if body else None)


@router.post("/{conversation_id}/messages", response_model=MessageExchange, status_code=status.HTTP_201_CREATED)
async def add_message(conversation_id: str, body: MessageInput, controller: Controller) -> MessageExchange:
    """Append a message; a user message also gets the assistant's reply."""
    if not body.content.strip() and not body.attachments:
        raise ValidationError("Content or attachments are required")
    return await controller.process_new_message(conversation_id, body.content, body.sender, body.attachments)


@router.delete("/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_conversation(conversation_id: str, controller: Controller) -> Response:
    await controller.delete_conversation(conversation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{conversation_id}/clear", response_model=StatusResponse)
async def clear_conversation(conversation_id: str, controller: Controller) -> StatusResponse:
    await controller.clear_conversation(conversation_id)
    return StatusResponse(message="Conversation cleared successfully")


@router.get("/{conversation_id}/export")
async def export_conversation(
    conversation_id: str,
    controller: Controller,
    export_format: Annotated[ExportFormat, Query(alias="format")] = ExportFormat.JSON,
) -> Response:
    exported = await controller.export_conversation(conversation_id, export_format)
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )
