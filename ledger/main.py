"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ledger.api import health, products, transactions, users
from ledger.api.errors import install_error_handlers
from ledger.config import Settings, get_settings
from ledger.context import AppContext
from ledger.database import create_db_engine, create_session_factory
from ledger.logging_config import configure_logging
from ledger.services.auth import CredentialManager


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and the context its requests share."""
    settings = settings or get_settings()
    logger = configure_logging(settings)
    context = AppContext(
        settings=settings,
        logger=logger,
        credentials=CredentialManager(settings),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the connection pool on startup and release it on shutdown."""
        context.engine = create_db_engine(settings.database_url)
        context.session_factory = create_session_factory(context.engine)
        logger.info(
            f"Started in {settings.environment} mode, log level {settings.log_level.upper()}"
        )
        yield
        context.engine.dispose()
        logger.info("Goodbye")

    app = FastAPI(
        title="Ledger API",
        description="Users, products and the monetary transactions between them",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/swagger",
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Accept", "Content-Type", "Authorization"],
        max_age=settings.cors_max_age,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_logger = context.child_logger("http")
        request_logger.info(f"{request.method} {request.url.path}")
        response = await call_next(request)
        request_logger.info(f"{request.method} {response.status_code} {request.url.path}")
        return response

    install_error_handlers(app)

    # Register routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(transactions.router)

    return app


app = create_app()
