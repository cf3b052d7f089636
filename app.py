import logging

from dotenv import load_dotenv
load_dotenv()  # Load .env file before importing settings

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from core.rate_limiter import limiter, rate_limit_exceeded_handler, RateLimits
from src.framework.domain.errors import FieldValidationError, NotFoundError, OperationFailedError

logger = logging.getLogger(__name__)


async def field_validation_error_handler(request: Request, exc: FieldValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=exc.to_dict())


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": str(exc)})


async def operation_failed_error_handler(request: Request, exc: OperationFailedError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=409, content={"message": "Operation failed", "detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    # Settings validation is done automatically in core/config.py on import
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Routing Inventory API",
        description="Pathways, pathway options and their toll booths",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Domain errors
    app.add_exception_handler(FieldValidationError, field_validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(OperationFailedError, operation_failed_error_handler)

    # Register routers
    from adapters.http.api.routing.routers import pathway_router
    app.include_router(pathway_router, prefix="/api/v1")

    @app.get("/health")
    @limiter.limit(RateLimits.HEALTH)
    def health_check(request: Request, db: Session = Depends(get_db)):
        """Health check endpoint.

        Returns 503 while the database is unreachable.
        """
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "database": "unreachable"},
            )

        return {"status": "healthy", "database": "ok", "environment": settings.ENVIRONMENT}

    return app


app = create_app()
