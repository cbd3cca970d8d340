from it_support_chat.gateway.ai_gateway import AIGateway
from it_support_chat.gateway.media import GatewayPart
from it_support_chat.gateway.transcription import Transcriber, UnavailableTranscriber

__all__ = [
    "AIGateway",
    "GatewayPart",
    "Transcriber",
    "UnavailableTranscriber",
]
