import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from openai import AsyncOpenAI

from routes.chat_route import router as chat_router
from routes.chat_ws import router as chat_ws_router
from routes.course_route import router as course_router
from routes.hole_route import router as hole_router
from routes.shot_route import router as shot_router
from services.chat.personas import build_personas
from services.chat.session_registry import SessionRegistry
from services.chat.view_store import ViewStore
from services.courses.course_finder import CourseFinder
from services.designer.hole_designer import HoleDesigner
from services.openai.openai_provider import OpenAIProvider
from services.provider import GenAIProvider
from services.shots.shot_log import ShotLog, sample_shots
from utils.settings import Settings

LOGGER = logging.getLogger(__name__)


def wire_services(app: FastAPI, provider: GenAIProvider, settings: Settings) -> None:
    """Attach the provider-backed services and in-memory stores to `app.state`."""
    registry = SessionRegistry(provider, build_personas(settings.chat_model))
    app.state.provider = provider
    app.state.session_registry = registry
    app.state.view_store = ViewStore(registry, analysis_model=settings.analysis_model)
    app.state.hole_designer = HoleDesigner(provider, settings.image_model)
    app.state.course_finder = CourseFinder(provider, settings.chat_model)
    app.state.shot_log = ShotLog(sample_shots() if settings.seed_sample_shots else ())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - settings from the environment (and `.env`)
      - the OpenAI async client wrapped in the provider boundary
      - the session registry, chat views, designer, course finder and shot log
    and attach them to `app.state`.
    """
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    try:
        openai_client = AsyncOpenAI(api_key=settings.openai_api_key)
    except Exception as exc:
        raise RuntimeError("Failed to initialize OpenAI Async client") from exc

    app.state.openai_client = openai_client
    wire_services(app, OpenAIProvider(openai_client), settings)
    LOGGER.info("Caddy services ready (chat model %s)", settings.chat_model)

    try:
        yield
    finally:
        try:
            await openai_client.close()
        except Exception as exc:
            LOGGER.warning("Error while closing OpenAI client: %s", exc)


def create_app(lifespan_handler=lifespan) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    `lifespan_handler` wires `app.state`; tests swap in one that uses a fake provider.
    """
    app = FastAPI(title="Pro AI Caddy", lifespan=lifespan_handler)

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check reporting provider presence and cached conversations.
        """
        state = request.app.state
        registry = getattr(state, "session_registry", None)
        view_store = getattr(state, "view_store", None)
        return {
            "ok": True,
            "provider_available": getattr(state, "provider", None) is not None,
            "conversations": [persona.value for persona in registry.active()] if registry else [],
            "mounted_views": len(view_store) if view_store is not None else 0,
        }

    # Register application routers
    app.include_router(chat_router)
    app.include_router(chat_ws_router)
    app.include_router(course_router)
    app.include_router(hole_router)
    app.include_router(shot_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
