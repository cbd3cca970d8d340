"""
Conversation transcript export.

Renders a conversation as a downloadable JSON document, a plain-text
transcript ("USER: ..." blocks separated by blank lines) or a CSV table with
one row per message.
"""

import csv
import io
from enum import StrEnum

from it_support_chat.conversation_database.data_models.conversation import Conversation


class ExportFormat(StrEnum):
    JSON = "json"
    TEXT = "text"
    CSV = "csv"

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]

    @property
    def extension(self) -> str:
        return "txt" if self is ExportFormat.TEXT else self.value


_MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.TEXT: "text/plain",
    ExportFormat.CSV: "text/csv",
}


def _attachment_note(names: list[str]) -> str:
    return f"[attachments: {', '.join(names)}]" if names else ""


def export_conversation(conversation: Conversation, export_format: ExportFormat) -> str:
    if export_format is ExportFormat.JSON:
        return conversation.model_dump_json(by_alias=True, indent=2)

    rows = []
    for message in conversation.messages:
        names = [attachment.name for attachment in message.attachments or []]
        content = "\n".join(filter(None, [message.content, _attachment_note(names)]))
        rows.append((message.timestamp.isoformat(), message.sender.value, content))

    if export_format is ExportFormat.TEXT:
        return "\n\n".join(f"{sender.upper()}: {content}" for _, sender, content in rows)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Timestamp", "Role", "Content"])
    writer.writerows(rows)
    return buffer.getvalue()


def export_filename(conversation: Conversation, export_format: ExportFormat) -> str:
    return f"conversation-{conversation.created_at.date().isoformat()}.{export_format.extension}"
