"""
Boundary to the generative-AI backend.

'AIGateway' exposes the four operations the chat service needs: text, image,
audio and multi-modal processing. It owns no state of its own; each call builds
an 'LLMMessage' conversation, dispatches it to a backend and translates the
outcome:

    empty or unusable input           -> 'ValidationError' / 'InvalidInputError'
    backend exception or empty reply  -> 'UpstreamError' (cause logged only)

Text and audio go to the text model, image and multi-modal requests to the
vision model. Both default to the same backend.
"""

from loguru import logger

from it_support_chat.errors import InvalidInputError, UpstreamError, ValidationError
from it_support_chat.gateway.media import GatewayPart, detect_image_mime_type
from it_support_chat.gateway.transcription import Transcriber, UnavailableTranscriber
from it_support_chat.llms.base import LLM, ContentPart, LLMMessage, Roles

SYSTEM_PROMPT = (
    "You are an IT support agent helping end users troubleshoot technical problems.\n\n"
    "Rules:\n"
    "- Ask for missing details (device, operating system, error message) before guessing.\n"
    "- Give short, numbered steps the user can follow without admin tools where possible.\n"
    "- When the request includes an image analysis or attachment list, use it as context.\n"
    "- If a problem needs hands-on help or elevated access, say so and suggest escalating to IT staff."
)
DEFAULT_IMAGE_PROMPT = "Please analyze this image"
DEFAULT_AUDIO_PROMPT = "Please analyze this audio"


class AIGateway:
    """
    Translates chat-service requests into LLM calls.

    Attributes:
        llm: Backend used for text and audio requests.
        vision_llm: Backend used for image and multi-modal requests. Defaults
            to 'llm' when the text model is itself vision-capable.
        transcriber: Speech-to-text capability for audio input. The default
            'UnavailableTranscriber' never yields a transcript.
        system_prompt: Instructions prepended to every request.
    """

    def __init__(
        self,
        llm: LLM,
        vision_llm: LLM | None = None,
        transcriber: Transcriber | None = None,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self.llm = llm
        self.vision_llm = vision_llm or llm
        self.transcriber = transcriber or UnavailableTranscriber()
        self.system_prompt = system_prompt

    async def process_text(self, text: str) -> str:
        if not text or not text.strip():
            raise ValidationError("Text input is required")
        return await self._generate(self.llm, text, "text input")

    async def process_image(self, data: bytes, prompt: str | None = None) -> str:
        if not data:
            raise ValidationError("Image file is required")
        content = [ContentPart.from_text(prompt or DEFAULT_IMAGE_PROMPT), self._image_part(data)]
        return await self._generate(self.vision_llm, content, "image")

    async def process_audio(self, data: bytes, prompt: str | None = None, mime_type: str | None = None) -> str:
        if not data:
            raise ValidationError("Audio file is required")
        prompt = prompt or DEFAULT_AUDIO_PROMPT
        transcript = await self._transcribe(data, mime_type)
        if transcript:
            text = f"{prompt}\n\nAudio transcript:\n{transcript}"
        else:
            text = f"{prompt}\n\n(An audio clip of {len(data)} bytes was attached, but no transcript is available for it.)"
        return await self._generate(self.llm, text, "audio")

    async def process_multimodal(self, parts: list[GatewayPart]) -> str:
        """
        Send an ordered mix of text, image and audio inputs as one message.

        Audio parts are included as transcript text when the transcriber
        produces one and are skipped otherwise.
        """
        if not parts:
            raise ValidationError("Invalid input format")

        content: list[ContentPart] = []
        for index, part in enumerate(parts):
            match part.type:
                case "text":
                    if part.text:
                        content.append(ContentPart.from_text(part.text))
                case "image":
                    if not part.data:
                        raise ValidationError(f"Image data is required for input {index}")
                    content.append(self._image_part(part.data))
                case "audio":
                    if not part.data:
                        raise ValidationError(f"Audio data is required for input {index}")
                    transcript = await self._transcribe(part.data, part.mime_type)
                    if transcript:
                        content.append(ContentPart.from_text(f"Audio transcript:\n{transcript}"))
                    else:
                        logger.warning(f"Skipping audio input {index}: no transcript available")

        if not content:
            raise ValidationError("No usable input was provided")
        return await self._generate(self.vision_llm, content, "multi-modal input")

    def _image_part(self, data: bytes) -> ContentPart:
        mime_type = detect_image_mime_type(data)
        if mime_type is None:
            raise InvalidInputError("Invalid image format")
        return ContentPart.from_image(data, mime_type)

    async def _transcribe(self, data: bytes, mime_type: str | None) -> str | None:
        try:
            return await self.transcriber.transcribe(data, mime_type)
        except Exception as exc:
            logger.exception("Audio transcription failed")
            raise UpstreamError("Failed to process audio") from exc

    async def _generate(self, llm: LLM, content: str | list[ContentPart], operation: str) -> str:
        conversation = [
            LLMMessage(role=Roles.SYSTEM, content=self.system_prompt),
            LLMMessage(role=Roles.USER, content=content),
        ]
        logger.debug(f"Dispatching {operation} to {llm.model_name!r}")
        try:
            response = await llm.generate(conversation)
        except Exception as exc:
            logger.exception(f"Error processing {operation} with {llm.model_name!r}")
            raise UpstreamError(f"Failed to process {operation}") from exc

        text = response.text()
        if not text.strip():
            logger.error(f"Empty response from {llm.model_name!r} for {operation}")
            raise UpstreamError(f"Failed to process {operation}")
        return text
