"""
Upload storage and attachment resolution.

Uploaded files are written under 'UploadStore.directory' and described by an
'Attachment' whose URL is '/uploads/<stored name>'; the API serves that
directory statically. 'UploadStore.load' turns an attachment URL back into
bytes for image analysis. It understands both stored uploads and inline
'data:' URLs, which is what the browser produces for screen captures.
"""

import asyncio
import base64
import binascii
from pathlib import Path

from loguru import logger

from it_support_chat.conversation_database.data_models.attachment import Attachment, AttachmentType
from it_support_chat.errors import InternalError, InvalidInputError, ValidationError
from it_support_chat.utils.database import generate_uid

UPLOADS_URL_PREFIX = "/uploads/"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def decode_data_url(url: str) -> bytes:
    """Decode a base64 'data:' URL such as 'data:image/png;base64,iVBOR...'."""
    header, separator, payload = url.partition(",")
    if not separator or not header.endswith(";base64"):
        raise InvalidInputError("Attachment data URL must be base64 encoded")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError("Attachment data URL is not valid base64") from exc


class UploadStore:
    """
    Disk-backed store for uploaded attachment bytes.

    Stored names are prefixed with a fresh uid so two uploads of the same
    filename never overwrite each other.
    """

    def __init__(self, directory: str | Path, max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> None:
        self.directory = Path(directory)
        self.max_bytes = max_bytes
        self.directory.mkdir(parents=True, exist_ok=True)

    def check_size(self, size: int) -> None:
        if size <= 0:
            raise ValidationError("Uploaded file is empty")
        if size > self.max_bytes:
            raise ValidationError(f"File exceeds the {self.max_bytes} byte upload limit")

    async def save(self, filename: str | None, mime_type: str | None, data: bytes) -> Attachment:
        return (await self.save_many([(filename, mime_type, data)]))[0]

    async def save_many(self, files: list[tuple[str | None, str | None, bytes]]) -> list[Attachment]:
        """
        Store a batch of uploads, all or nothing.

        Every file is checked before anything is written, and files already
        written are removed again if a later write fails.
        """
        for _, _, data in files:
            self.check_size(len(data))

        attachments: list[Attachment] = []
        try:
            for filename, mime_type, data in files:
                attachments.append(await self._write(filename, mime_type, data))
        except InternalError:
            for attachment in attachments:
                (self.directory / attachment.url[len(UPLOADS_URL_PREFIX) :]).unlink(missing_ok=True)
            raise
        return attachments

    async def _write(self, filename: str | None, mime_type: str | None, data: bytes) -> Attachment:
        name = Path(filename or "").name or "upload"
        uid = generate_uid()
        stored_name = f"{uid}-{name}"
        try:
            await asyncio.to_thread((self.directory / stored_name).write_bytes, data)
        except OSError as exc:
            logger.exception(f"Could not write upload {stored_name}")
            raise InternalError("Failed to store upload") from exc
        logger.info(f"Stored upload {name!r} ({len(data)} bytes) as {stored_name}")

        return Attachment(
            id=uid,
            name=name,
            type=AttachmentType.from_mime_type(mime_type),
            url=f"{UPLOADS_URL_PREFIX}{stored_name}",
            size=len(data),
        )

    async def load(self, url: str) -> bytes:
        """Return the bytes an attachment URL refers to."""
        if url.startswith("data:"):
            return decode_data_url(url)
        if url.startswith(UPLOADS_URL_PREFIX):
            stored_name = url[len(UPLOADS_URL_PREFIX) :]
            if not stored_name or Path(stored_name).name != stored_name:
                raise InvalidInputError("Invalid attachment reference")
            path = self.directory / stored_name
            if not path.is_file():
                raise InvalidInputError("Attachment not found")
            return await asyncio.to_thread(path.read_bytes)
        raise InvalidInputError("Unsupported attachment URL")
