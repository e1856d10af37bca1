import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cinebook.api.v1 import (
    routes_booking,
    routes_food_item,
    routes_health,
    routes_movie,
    routes_seat,
    routes_showtime,
)
from cinebook.core.config import settings
from cinebook.db import session
from cinebook.exceptions import CineBookError
from cinebook.redis import close_redis

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    if (settings.ENV == 'development'):
        await session.init_db()
    logger.info("CineBook API started in %s mode", settings.ENV)
    yield
    await close_redis()
    logger.info("CineBook API stopped")


def _error_body(message: str, code: str) -> dict:
    return {"error": message, "code": code}


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.PROJECT_DESCRIPTION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for module in (routes_health, routes_movie, routes_showtime, routes_seat, routes_food_item, routes_booking):
        app.include_router(
            module.router,
            prefix=settings.API_V1_PREFIX
        )

    @app.exception_handler(CineBookError)
    async def cinebook_error_handler(request: Request, ex: CineBookError):
        if ex.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {ex.message}")
        return JSONResponse(status_code=ex.status_code, content=_error_body(ex.message, ex.code))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, ex: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in ex.errors())
        return JSONResponse(status_code=400, content=_error_body(f"Invalid input: {details}", "INVALID_INPUT"))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, ex: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {ex}", exc_info=ex)
        return JSONResponse(
            status_code=500,
            content=_error_body(f"Internal server error: {ex}", "INTERNAL_SERVER_ERROR"))

    @app.get("/")
    async def root():
        return {"message": "CineBook backend is running"}

    return app


app = create_app()
