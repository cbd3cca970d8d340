"""
Direct AI routes.

These expose the gateway operations without touching any conversation. Files
arrive as multipart uploads; the multi-modal route takes an 'inputs' form field
holding a JSON list whose image and audio entries reference their file by
multipart field name.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile as StarletteUploadFile

from it_support_chat.api.dependencies import get_gateway, get_upload_store
from it_support_chat.api.schemas import AIResponse, MultiModalInput, TextInput
from it_support_chat.api.uploads import read_upload
from it_support_chat.errors import ValidationError
from it_support_chat.gateway.ai_gateway import AIGateway
from it_support_chat.gateway.media import GatewayPart
from it_support_chat.uploads import UploadStore

router = APIRouter(prefix="/ai", tags=["ai"])

Gateway = Annotated[AIGateway, Depends(get_gateway)]
Uploads = Annotated[UploadStore, Depends(get_upload_store)]

_inputs_adapter = TypeAdapter(list[MultiModalInput])


@router.post("/process-text", response_model=AIResponse)
async def process_text(body: TextInput, gateway: Gateway) -> AIResponse:
    return AIResponse(response=await gateway.process_text(body.text))


@router.post("/process-image", response_model=AIResponse)
async def process_image(
    gateway: Gateway,
    upload_store: Uploads,
    image: Annotated[UploadFile | None, File()] = None,
    prompt: Annotated[str | None, Form()] = None,
) -> AIResponse:
    data = await read_upload(image, upload_store, "Image file is required")
    return AIResponse(response=await gateway.process_image(data, prompt))


@router.post("/process-audio", response_model=AIResponse)
async def process_audio(
    gateway: Gateway,
    upload_store: Uploads,
    audio: Annotated[UploadFile | None, File()] = None,
    prompt: Annotated[str | None, Form()] = None,
) -> AIResponse:
    data = await read_upload(audio, upload_store, "Audio file is required")
    mime_type = audio.content_type if audio else None
    return AIResponse(response=await gateway.process_audio(data, prompt, mime_type=mime_type))


@router.post("/process-multimodal", response_model=AIResponse)
async def process_multimodal(request: Request, gateway: Gateway, upload_store: Uploads) -> AIResponse:
    form = await request.form()
    raw_inputs = form.get("inputs")
    if not isinstance(raw_inputs, str):
        raise ValidationError("Invalid input format")
    try:
        inputs = _inputs_adapter.validate_json(raw_inputs)
    except PydanticValidationError as exc:
        raise ValidationError("Invalid input format") from exc

    parts: list[GatewayPart] = []
    for item in inputs:
        match item.type:
            case "text":
                parts.append(GatewayPart(type="text", text=item.content or ""))
            case "image" | "audio":
                upload = form.get(item.file_field) if item.file_field else None
                if not isinstance(upload, StarletteUploadFile):
                    raise ValidationError(f"File not found for field: {item.file_field}")
                data = await read_upload(upload, upload_store, f"File not found for field: {item.file_field}")
                parts.append(GatewayPart(type=item.type, data=data, mime_type=upload.content_type))
            case _:
                raise ValidationError(f"Unsupported input type: {item.type}")

    return AIResponse(response=await gateway.process_multimodal(parts))
