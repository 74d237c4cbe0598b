# File: gallery/main.py
import time
import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from gallery.api.v1.api import api_router
from gallery.core.config import settings
from gallery.core.exceptions import GalleryError
from gallery.db.database import Base, engine
from gallery.services.feedback_service import FeedbackService
import gallery.models  # noqa: F401  (register tables on Base.metadata)

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        logger.info("Creating database tables if missing")
        Base.metadata.create_all(bind=engine)
    yield


async def handle_gallery_error(request: Request, exc: GalleryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.error_code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} - {exc.error_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_code": exc.error_code, "details": exc.details},
    )


def create_app(feedback_service: Optional[FeedbackService] = None) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # One service for the whole process, handed to routes through deps.get_feedback_service
    app.state.feedback_service = feedback_service or FeedbackService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"],
        allow_headers=["*"],
        expose_headers=["X-Process-Time"],
        max_age=3600,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable) -> Response:
        """Log all requests with timing"""
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"{request.method} {request.url.path} - "
                f"Error: {str(e)} - "
                f"Time: {process_time:.4f}s"
            )
            logger.exception("Full error traceback:")
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "path": request.url.path,
                    "method": request.method,
                },
            )

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response

    app.add_exception_handler(GalleryError, handle_gallery_error)
    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "environment": settings.ENVIRONMENT}

    return app


app = create_app()
