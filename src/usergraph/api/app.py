"""
Main FastAPI application for the usergraph server
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import get_graphql_url, settings
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..seed_data import create_default_store
from ..store import UserStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "GraphQL server running",
        url=get_graphql_url(),
        user_count=len(app.state.store),
    )

    yield

    logger.info("Shutting down usergraph API...")


def create_app(store: UserStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: User store to serve. A seeded default store is created when omitted.
    """
    configure_logging(debug=settings.debug, level=settings.log_level)

    app = FastAPI(
        title="usergraph API",
        description="In-memory GraphQL API for user records",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    if store is None:
        store = create_default_store(include_sample_data=settings.seed_default_users)
    app.state.store = store

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check(request: Request):  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "users": len(request.app.state.store),
        }

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        graphql_router = create_graphql_router()
        app.include_router(graphql_router, prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint=settings.graphql_path)
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "usergraph.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
