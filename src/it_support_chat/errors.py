"""
Error taxonomy shared by the store, the gateway, the controller and the API.

The API layer maps each family to one HTTP status: 'ValidationError' to 400,
'ConversationNotFoundError' to 404, everything else to 500 with a generic
message. The 'message' attribute is what the client sees, so it must never
carry upstream details.
"""


class SupportChatError(Exception):
    """Base class for all errors raised by this package."""

    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(SupportChatError):
    """Caller-supplied input failed a required-field or shape check."""

    message = "Invalid request"


class InvalidInputError(ValidationError):
    """Input was present but could not be used, e.g. bytes that are not an image."""

    message = "Invalid input"


class ConversationNotFoundError(SupportChatError):
    message = "Conversation not found"

    def __init__(self, conversation_id: str) -> None:
        self.conversation_id = conversation_id
        super().__init__()


class UpstreamError(SupportChatError):
    """The generative-AI backend failed or returned nothing usable."""

    message = "Failed to process input"


class InternalError(SupportChatError):
    pass
