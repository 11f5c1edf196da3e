"""Main FastAPI application."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import user_routes
from config.settings import settings
from models.database import close_mongo_connection, get_users_collection, init_mongo
from models.store import InMemoryUserStore, MongoUserStore, UserStore
from utils.errors import TrackerError
from utils.logger import setup_logger

logger = setup_logger(__name__)


def create_app(store: Optional[UserStore] = None) -> FastAPI:
    """Build the application.

    Args:
        store: Store to serve from. When None, one is created at startup
            according to ``settings.store_backend``.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown events."""
        # Startup
        logger.info("Starting application...")
        owns_connection = False
        if app.state.store is None:
            if settings.store_backend == "memory":
                app.state.store = InMemoryUserStore()
            else:
                await init_mongo()
                app.state.store = MongoUserStore(get_users_collection())
                owns_connection = True
        logger.info(f"Application started successfully ({type(app.state.store).__name__})")

        yield

        # Shutdown
        logger.info("Shutting down application...")
        if owns_connection:
            await close_mongo_connection()
        logger.info("Application shut down")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Exercise tracking API: users and their exercise logs",
        lifespan=lifespan,
    )
    app.state.store = store

    logger.info(f"CORS configured with origins: {settings.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    app.include_router(user_routes.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": f"{settings.app_name} API",
            "version": settings.app_version,
            "status": "running"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.app_name
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
