import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from openai import AsyncOpenAI
from starlette.exceptions import HTTPException as StarletteHTTPException

from japan_travel.ai.openai_client import build_client
from japan_travel.api.routers import meta, travel
from japan_travel.core.config import Settings, get_settings
from japan_travel.core.errors import GENERIC_ERROR_MESSAGE, APIError, error_content
from japan_travel.core.logging import setup_logging
from japan_travel.domain.repositories import PlanStore
from japan_travel.domain.services.prompt_engine import PromptEngine
from japan_travel.external.blob_storage import BlobBackend, build_blob_backend

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[AsyncOpenAI] = None,
    backend: Optional[BlobBackend] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned_client = client is None
        provider = client if client is not None else build_client(settings)
        app.state.plan_store = PlanStore(backend or build_blob_backend(settings), prefix=settings.plans_prefix)
        app.state.prompt_engine = PromptEngine(
            provider,
            plan_model=settings.openai_model_plan,
            search_model=settings.openai_model_search,
            mode=settings.plan_generation_mode,
        )
        yield
        if owned_client and provider is not None:
            await provider.close()

    app = FastAPI(title=settings.project_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(travel.router, prefix=settings.api_prefix)
    app.include_router(meta.router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc, APIError):
            logger.warning("%s on %s: %s", exc.code, request.url.path, exc.detail)
        return JSONResponse(status_code=exc.status_code, content=error_content(str(exc.detail)))

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        first_error = exc.errors()[0] if exc.errors() else {}
        path = ".".join(str(item) for item in first_error.get("loc", []) if item != "body")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_content(f"요청이 유효하지 않습니다: {path} - {first_error.get('msg')}"),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled server error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_content(GENERIC_ERROR_MESSAGE),
        )

    return app


app = create_app()
