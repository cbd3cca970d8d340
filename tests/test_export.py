from __future__ import annotations

import csv
import io
import json
from datetime import datetime, timezone

import pytest

from it_support_chat.conversation_database.data_models.attachment import Attachment, AttachmentType
from it_support_chat.conversation_database.data_models.conversation import Conversation
from it_support_chat.conversation_database.data_models.message import Message, Sender
from it_support_chat.conversation_database.export import ExportFormat, export_conversation, export_filename

CREATED = datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def conversation() -> Conversation:
    return Conversation(
        id="c1",
        title="Monitor",
        created_at=CREATED,
        messages=[
            Message(id="m1", content="Hello!", sender=Sender.ASSISTANT, timestamp=CREATED),
            Message(
                id="m2",
                content='Screen says "no signal", see photo',
                sender=Sender.USER,
                timestamp=CREATED,
                attachments=[Attachment(id="a1", name="monitor.jpg", type=AttachmentType.IMAGE, url="/uploads/a1")],
            ),
        ],
    )


def test_json_uses_wire_field_names(conversation):
    payload = json.loads(export_conversation(conversation, ExportFormat.JSON))
    assert payload["createdAt"].startswith("2024-03-05T09:30:00")
    assert [m["id"] for m in payload["messages"]] == ["m1", "m2"]
    assert payload["messages"][1]["attachments"][0]["name"] == "monitor.jpg"


def test_text_transcript(conversation):
    assert export_conversation(conversation, ExportFormat.TEXT) == (
        "ASSISTANT: Hello!\n\n"
        'USER: Screen says "no signal", see photo\n[attachments: monitor.jpg]'
    )


def test_csv_quotes_content(conversation):
    rows = list(csv.reader(io.StringIO(export_conversation(conversation, ExportFormat.CSV))))
    assert rows[0] == ["Timestamp", "Role", "Content"]
    assert rows[1] == [CREATED.isoformat(), "assistant", "Hello!"]
    assert rows[2][2] == 'Screen says "no signal", see photo\n[attachments: monitor.jpg]'


@pytest.mark.parametrize(
    ("export_format", "filename", "media_type"),
    [
        (ExportFormat.JSON, "conversation-2024-03-05.json", "application/json"),
        (ExportFormat.TEXT, "conversation-2024-03-05.txt", "text/plain"),
        (ExportFormat.CSV, "conversation-2024-03-05.csv", "text/csv"),
    ],
)
def test_filename_and_media_type(conversation, export_format, filename, media_type):
    assert export_filename(conversation, export_format) == filename
    assert export_format.media_type == media_type
