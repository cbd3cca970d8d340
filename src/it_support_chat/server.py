"""
Application wiring and entry point.

'create_app' builds every long-lived object exactly once (conversation store,
LLM backends, gateway, upload store, controller) and hands them to the FastAPI
app through 'app.state'. Tests pass their own controller to get an isolated
store per case.

LLM backends (LLM_BACKEND, default 'fake'):
    gemini  requires GEMINI_API_KEY (env var or /secrets/GEMINI_API_KEY file)
    openai  requires OPENAI_API_KEY (env var or /secrets/OPENAI_API_KEY file)
    fake    offline canned replies, for UI work without an API key

Usage:
    LLM_BACKEND=gemini python -m it_support_chat.server
    it-support-chat
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger

from it_support_chat import __version__
from it_support_chat.api import api_router
from it_support_chat.api.errors import register_exception_handlers
from it_support_chat.api.health import router as health_router
from it_support_chat.config import Settings, get_secret, load_settings
from it_support_chat.conversation_database.controller import SupportChatController
from it_support_chat.conversation_database.in_memory import InMemoryConversationDatabase
from it_support_chat.gateway.ai_gateway import AIGateway
from it_support_chat.llms.base import LLM
from it_support_chat.uploads import UploadStore
from it_support_chat.utils.log_setup import configure_logging

SEED = 42


def build_llm(backend: str, model_name: str | None = None, temperature: float = 0.3) -> LLM:
    """Instantiate the LLM for the requested backend.

    Args:
        backend:     One of 'gemini', 'openai' or 'fake'.
        model_name:  Model to use. Falls back to the per-backend default when None.
        temperature: Sampling temperature.
    """
    backend = backend.lower().strip()
    match backend:
        case "gemini":
            from it_support_chat.llms.gemini import GeminiLLM

            name = model_name or "gemini-2.0-flash"
            logger.info(f"LLM backend: Gemini ({name})")
            return GeminiLLM(model_name=name, temperature=temperature, google_api_key=get_secret("GEMINI_API_KEY"))
        case "openai":
            from it_support_chat.llms.openai import OpenAILLM

            name = model_name or "gpt-4o-mini"
            logger.info(f"LLM backend: OpenAI ({name})")
            return OpenAILLM(
                model_name=name,
                temperature=temperature,
                seed=SEED,
                openai_api_key=get_secret("OPENAI_API_KEY"),
            )
        case "fake":
            from it_support_chat.llms.fake import FakeLLM

            logger.warning("LLM backend: fake (canned replies, no model is called)")
            return FakeLLM()
        case _:
            raise ValueError(f"Unsupported backend {backend!r}. Choose 'gemini', 'openai', or 'fake'.")


def build_controller(settings: Settings) -> SupportChatController:
    llm = build_llm(settings.llm_backend, settings.llm_model, settings.llm_temperature)
    vision_llm = (
        build_llm(settings.llm_backend, settings.vision_model, settings.llm_temperature)
        if settings.vision_model
        else llm
    )
    return SupportChatController(
        conversation_db=InMemoryConversationDatabase(),
        gateway=AIGateway(llm=llm, vision_llm=vision_llm),
        upload_store=UploadStore(settings.upload_dir, max_bytes=settings.max_upload_bytes),
    )


def create_app(settings: Settings | None = None, controller: SupportChatController | None = None) -> FastAPI:
    settings = settings or load_settings()
    controller = controller or build_controller(settings)

    app = FastAPI(title="IT Support Chat API", version=__version__)
    app.state.settings = settings
    app.state.controller = controller

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router)
    app.mount("/uploads", StaticFiles(directory=controller.upload_store.directory), name="uploads")
    return app


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting IT Support Chat API {__version__} on {settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
