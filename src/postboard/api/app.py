"""
Main FastAPI application for the Postboard API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from .. import __version__
from ..auth.adapters.base import AuthAdapter
from ..auth.factory import get_auth_adapter
from ..auth.middleware import IdentityMiddleware
from ..config import Settings, settings
from ..database.store import DocumentStore
from ..errors import StoreUnavailable
from ..graphql.engine import QueryEngine
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)

DEFAULT_SESSION_SECRET = "change-me"


async def open_store(config: Settings) -> DocumentStore:
    """Connect to the document store, failing startup if it is unreachable."""
    store = DocumentStore.from_url(config.database_url)

    ok, error = await store.ping()
    if not ok:
        await store.close()
        logger.error("Document store unreachable, aborting startup", error=error)
        raise StoreUnavailable(error)

    if config.create_schema_on_startup:
        try:
            await store.create_schema()
        except StoreUnavailable:
            await store.close()
            raise

    return store


def attach_store(app: FastAPI, store: DocumentStore) -> None:
    app.state.store = store
    app.state.query_engine = QueryEngine(store)


def create_app(
    store: DocumentStore | None = None,
    auth_adapter: AuthAdapter | None = None,
    config: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    A store passed in is used as-is and left open on shutdown; otherwise one
    is opened from the configured database URL when the app starts.
    """
    config = config or settings

    if config.is_production and config.session_secret == DEFAULT_SESSION_SECRET:
        raise RuntimeError("POSTBOARD_SESSION_SECRET must be set in production")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Postboard API...")
        owned_store = None
        if getattr(app.state, "store", None) is None:
            owned_store = await open_store(config)
            attach_store(app, owned_store)
            logger.info("Document store connected")

        yield

        logger.info("Shutting down Postboard API...")
        if owned_store is not None:
            await owned_store.close()

    app = FastAPI(
        title="Postboard API",
        description="Posts and comments over a typed GraphQL endpoint",
        version=__version__,
        lifespan=lifespan,
        debug=config.debug,
    )

    app.state.store = None
    if store is not None:
        attach_store(app, store)

    adapter = auth_adapter or get_auth_adapter(config)
    app.state.auth_adapter = adapter

    # Identity resolution needs the decoded session, so it sits inside it
    app.add_middleware(IdentityMiddleware, adapter=adapter)
    app.add_middleware(
        SessionMiddleware,
        secret_key=config.session_secret,
        session_cookie=config.session_cookie_name,
        max_age=config.session_max_age,
        same_site="lax",
        https_only=config.is_production,
    )
    app.add_middleware(LoggingContextMiddleware)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check(request: Request):  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        app_store: DocumentStore | None = request.app.state.store
        if app_store is None:
            ok, error = False, "Document store not initialized"
        else:
            ok, error = await app_store.ping()

        if not ok:
            return JSONResponse({"status": "unhealthy", "error": error}, status_code=503)
        return {"status": "healthy", "version": __version__}

    try:
        from ..graphql.router import create_graphql_router
        from ..graphql.schema import validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        graphql_ide = not config.is_production
        app.include_router(create_graphql_router(graphql_ide=graphql_ide), prefix="")
        logger.info(
            "GraphQL endpoint initialized successfully",
            endpoint="/graphql",
            graphql_ide=graphql_ide,
        )

        if graphql_ide:

            @app.get("/graphiql", include_in_schema=False)
            async def graphiql():  # pyright: ignore [reportUnusedFunction]
                """GraphiQL is served from the GraphQL endpoint itself."""
                return RedirectResponse(url="/graphql")

    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    from .endpoints import session

    app.include_router(session.router, prefix="/auth", tags=["Session"])

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "postboard.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
