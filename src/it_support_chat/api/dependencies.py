"""FastAPI dependencies resolving the objects built once by 'create_app'."""

from fastapi import Request

from it_support_chat.conversation_database.controller import SupportChatController
from it_support_chat.gateway.ai_gateway import AIGateway
from it_support_chat.uploads import UploadStore


def get_controller(request: Request) -> SupportChatController:
    return request.app.state.controller


def get_gateway(request: Request) -> AIGateway:
    return get_controller(request).gateway


def get_upload_store(request: Request) -> UploadStore:
    return get_controller(request).upload_store
