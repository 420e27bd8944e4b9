"""FastAPI application initialization and configuration module.

``create_app`` builds a fully wired application: logging, exception
handlers, middleware, the user routes, and a fresh ``UserRegistry`` stored
on ``app.state``. Each call yields an independent registry unless one is
passed in.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI
from loguru import logger

from src.api.dependencies import Registry
from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.routes.users import router as users_router
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging
from src.domain.registry import UserRegistry


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Log application startup and shutdown.

    Args:
        app_instance: The FastAPI application instance.

    Yields:
        None: Nothing is yielded, this is just a lifespan context.
    """
    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )

    yield

    # Records live only for the process lifetime
    logger.info(
        "Application shutdown, discarding {} user records",
        len(app_instance.state.registry),
    )


def create_app(
    settings: Settings | None = None, registry: UserRegistry | None = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().
        registry: Optional registry to serve. A new empty one is created from
            ``settings.registry_config`` if not provided.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    if registry is None:
        registry = UserRegistry(
            exclude_self_on_update=settings.registry_config.exclude_self_on_update
        )
    application.state.registry = registry

    # Register exception handlers BEFORE middleware
    register_exception_handlers(application)

    # Middleware are executed in reverse order of registration
    # 2. Request logging middleware (logs requests/responses)
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)

    # 1. Request context middleware (creates correlation and request IDs)
    application.add_middleware(RequestContextMiddleware)

    application.include_router(users_router)

    @application.get("/health")
    async def health(registry: Registry) -> dict[str, object]:
        """Health check endpoint for monitoring and container orchestration.

        Returns:
            dict[str, object]: Status and the number of live user records.
        """
        return {"status": "healthy", "users": len(registry)}

    @application.get("/info")
    async def info(
        app_settings: Annotated[Settings, Depends(get_settings)],
    ) -> dict[str, Any]:
        """Get application information.

        Args:
            app_settings: Application settings injected via dependency.

        Returns:
            dict[str, Any]: Application name, version, environment and debug flag.
        """
        return {
            "app_name": app_settings.app_name,
            "version": app_settings.app_version,
            "environment": app_settings.environment,
            "debug": app_settings.debug,
        }

    return application


app = create_app()
