from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from it_support_chat.api.dependencies import get_upload_store
from it_support_chat.conversation_database.data_models.attachment import Attachment
from it_support_chat.errors import ValidationError
from it_support_chat.uploads import UploadStore

router = APIRouter(tags=["uploads"])


async def read_upload(upload: StarletteUploadFile | None, upload_store: UploadStore, missing_message: str) -> bytes:
    """Read a multipart file, rejecting oversized ones by their declared size before reading."""
    if upload is None:
        raise ValidationError(missing_message)
    if upload.size is not None and upload.size > upload_store.max_bytes:
        upload_store.check_size(upload.size)
    data = await upload.read()
    if not data:
        raise ValidationError(missing_message)
    upload_store.check_size(len(data))
    return data


@router.post("/upload", response_model=list[Attachment])
async def upload_files(
    files: Annotated[list[UploadFile], File()],
    upload_store: Annotated[UploadStore, Depends(get_upload_store)],
) -> list[Attachment]:
    """Store uploaded files and return attachment metadata to send with a message."""
    batch = [
        (file.filename, file.content_type, await read_upload(file, upload_store, "Uploaded file is empty"))
        for file in files
    ]
    return await upload_store.save_many(batch)
