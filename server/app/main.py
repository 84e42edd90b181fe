import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.config import Settings
from app.middleware.rate_limit import FixedWindowLimiter
from app.routers import chat, daily, nutrition, program, system_prompt

logger = logging.getLogger(__name__)


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    # every error body is {"error": "..."}
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected malformed payload on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request payload"})


def _build_limiters(settings: Settings):
    return {
        "chat": FixedWindowLimiter(
            "chat",
            settings.chat_rate_limit,
            settings.rate_limit_window_seconds,
            f"Too many chat requests. Limit: {settings.chat_rate_limit} per hour.",
        ),
        "api": FixedWindowLimiter(
            "api",
            settings.api_rate_limit,
            settings.rate_limit_window_seconds,
            "Too many requests. Please try again later.",
        ),
    }


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    app = FastAPI(title="Reforge Coach API", version="1.0.0")
    app.state.settings = settings
    app.state.limiters = _build_limiters(settings)

    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # CORS for the deployed web app and the Replit / Expo clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_origin_regex=settings.allowed_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat.router)
    app.include_router(system_prompt.router)
    app.include_router(program.router)
    app.include_router(nutrition.router)
    app.include_router(daily.router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    logger.info("[Security] CORS enabled for approved origins only")
    logger.info(
        f"[Security] Rate limiting: {settings.chat_rate_limit} chat requests/window, "
        f"{settings.api_rate_limit} API requests/window"
    )
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; /api/chat will answer 500")
    return app


app = create_app()
