# trainify/app.py

"""
FastAPI application for Trainify AI.

Routers are mounted under `/api`; the Gradio UI is mounted at `/` by
`app_launcher.py`. Every `TrainifyError` that escapes a route becomes a JSON
body `{"error": message}` with the error's HTTP status.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from trainify.config import get_settings
from trainify.errors import RateLimitError, TrainifyError
from trainify.logger import setup_logger
from trainify.routers import media_router, plan_router


async def trainify_error_handler(request: Request, exc: TrainifyError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc.message}")
    headers = {}
    if isinstance(exc, RateLimitError) and exc.retry_after_seconds:
        headers["Retry-After"] = str(int(exc.retry_after_seconds))
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logger(level=settings.log_level, log_file=settings.log_file)

    app = FastAPI(
        title="Trainify AI",
        description="Personalized workout, diet and motivation plans generated with AI.",
    )
    app.include_router(plan_router.router, prefix="/api", tags=["plans"])
    app.include_router(media_router.router, prefix="/api", tags=["media"])
    app.add_exception_handler(TrainifyError, trainify_error_handler)
    return app


app = create_app()
