"""
Attachment data model.

An attachment is a reference to bytes owned by whoever produced them: the
upload endpoint (an '/uploads/<name>' URL served by 'UploadStore') or the
browser's capture feature (an inline 'data:' URL). The conversation store only
keeps this metadata, never the bytes themselves.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class AttachmentType(StrEnum):
    IMAGE = "image"
    FILE = "file"
    AUDIO = "audio"

    @classmethod
    def from_mime_type(cls, mime_type: str | None) -> "AttachmentType":
        mime_type = (mime_type or "").lower()
        if mime_type.startswith("image/"):
            return cls.IMAGE
        if mime_type.startswith("audio/"):
            return cls.AUDIO
        return cls.FILE


class Attachment(BaseModel):
    """A file attached to a message. 'size' is informational only."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: AttachmentType
    url: str
    size: int | None = None
