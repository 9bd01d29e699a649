"""
FastAPI entrypoint for BudgetWise backend application.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from budgetwise.core.config import Settings, get_settings
from budgetwise.db.session import create_db_engine, create_session_factory, init_db
from budgetwise.api.errors import register_error_handlers
from budgetwise.api.router import api_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; the database engine lives for the app's lifespan."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_db_engine(settings)
        init_db(engine)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        logger.info(f"{settings.APP_NAME} started")
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Backend API for shared cash books",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"message": f"{settings.APP_NAME} API is running"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
