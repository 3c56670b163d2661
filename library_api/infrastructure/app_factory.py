from asyncio import Event
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, FastAPI, Request, Response

from ..modules.common.utils.error_handler import register_exception_handlers
from .config.settings import (
    DatabaseSettings,
    EnvironmentOption,
    EnvironmentSettings,
    Settings,
    get_settings,
)
from .database.session import create_tables, dispose_engine, ensure_database
from .logging import (
    generate_correlation_id,
    get_logger,
    reset_correlation_id,
    set_correlation_id,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def lifespan_factory(
    settings: Settings,
    create_tables_on_startup: bool = True,
    create_database_on_startup: bool = True,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Factory to create a lifespan async context manager for a FastAPI app.

    On startup the configured database is created if missing and the tables
    are created if missing. On shutdown the connection pool is closed.

    Args:
        settings: Application settings
        create_tables_on_startup: Whether to create database tables on startup
        create_database_on_startup: Whether to create the database itself on startup

    Returns:
        An async context manager for FastAPI's lifespan
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        initialization_complete = Event()
        app.state.initialization_complete = initialization_complete

        try:
            if isinstance(settings, DatabaseSettings):
                if create_database_on_startup:
                    await ensure_database()
                if create_tables_on_startup:
                    await create_tables()

            initialization_complete.set()
            logger.info(f"{app.title} started")
            yield

        finally:
            await dispose_engine()

    return lifespan


def add_correlation_id_middleware(application: FastAPI) -> None:
    """Tag every request's log records with a correlation id.

    The id is taken from the X-Request-ID header when the client sends one,
    generated otherwise, and echoed back on the response.
    """

    @application.middleware("http")
    async def correlation_id_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or generate_correlation_id()
        token = set_correlation_id(correlation_id)
        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response


def _setting(explicit: Optional[Any], settings: Settings, name: str, default: Any) -> Any:
    """Prefer an explicit argument, then the settings attribute, then a default."""
    if explicit is not None:
        return explicit
    return getattr(settings, name, default)


def create_application(
    router: APIRouter,
    settings: Optional[Settings] = None,
    lifespan: Optional[Callable[[FastAPI], AbstractAsyncContextManager[None]]] = None,
    create_tables_on_startup: Optional[bool] = None,
    create_database_on_startup: Optional[bool] = None,
    enable_docs_in_production: Optional[bool] = None,
    title: Optional[str] = None,
    summary: Optional[str] = None,
    description: Optional[str] = None,
    version: Optional[str] = None,
    openapi_tags: Optional[List[Dict[str, Any]]] = None,
    **kwargs: Any,
) -> FastAPI:
    """Build the FastAPI application.

    Arguments left as None fall back to the matching settings attribute
    (APP_NAME, APP_DESCRIPTION, VERSION, CREATE_TABLES_ON_STARTUP,
    CREATE_DATABASE_ON_STARTUP, ENABLE_DOCS_IN_PRODUCTION, DOCS_URL,
    REDOC_URL, OPENAPI_URL). In production the documentation routes are
    disabled unless docs are explicitly enabled there.

    The returned app has the router mounted, the domain and validation
    exception handlers registered and the correlation id middleware
    installed.

    Args:
        router: Routes to serve
        settings: Application settings (uses get_settings() if None)
        lifespan: Custom lifespan; defaults to lifespan_factory()
        **kwargs: Passed through to the FastAPI constructor
    """
    if settings is None:
        settings = get_settings()

    metadata: Dict[str, Any] = {
        "title": _setting(title, settings, "APP_NAME", "FastAPI"),
        "description": _setting(description, settings, "APP_DESCRIPTION", ""),
        "version": _setting(version, settings, "VERSION", "0.1.0"),
        "debug": getattr(settings, "DEBUG", False),
        "docs_url": getattr(settings, "DOCS_URL", "/docs"),
        "redoc_url": getattr(settings, "REDOC_URL", "/redoc"),
        "openapi_url": getattr(settings, "OPENAPI_URL", "/openapi.json"),
    }
    if summary is not None:
        metadata["summary"] = summary
    if openapi_tags is not None:
        metadata["openapi_tags"] = openapi_tags

    hide_docs = (
        isinstance(settings, EnvironmentSettings)
        and settings.ENVIRONMENT == EnvironmentOption.PRODUCTION
        and not _setting(enable_docs_in_production, settings, "ENABLE_DOCS_IN_PRODUCTION", False)
    )
    if hide_docs:
        metadata.update({"docs_url": None, "redoc_url": None, "openapi_url": None})

    if lifespan is None:
        lifespan = lifespan_factory(
            settings,
            create_tables_on_startup=_setting(create_tables_on_startup, settings, "CREATE_TABLES_ON_STARTUP", True),
            create_database_on_startup=_setting(
                create_database_on_startup, settings, "CREATE_DATABASE_ON_STARTUP", True
            ),
        )

    application = FastAPI(lifespan=lifespan, **{**metadata, **kwargs})

    application.include_router(router)
    register_exception_handlers(application)
    add_correlation_id_middleware(application)

    return application
