from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from rollbook.app import App
from rollbook.config import Config
from rollbook.errors import UserError
from rollbook.web.error_handlers import general_exception_handler, request_validation_error_handler, user_error_handler
from rollbook.web.openapi import set_custom_openapi
from rollbook.web.routers import auth_router, protected_router, students_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Rollbook API",
        lifespan=lifespan,
    )
    # Set eagerly so handlers work even when the lifespan is not run
    app.state.app = app_instance
    app.state.config = config

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials="*" not in config.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health check endpoint (at root level, outside the API prefix)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router, prefix="/api")
    app.include_router(protected_router, prefix="/api")
    app.include_router(students_router, prefix="/api")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
