"""
Configuration management for the usergraph server
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="USERGRAPH_",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # GraphQL
    graphql_path: str = "/graphql"
    graphql_ide: str = "graphiql"  # 'graphiql', 'apollo-sandbox', 'pathfinder'

    # Store
    seed_default_users: bool = True

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"


# Global settings instance
settings = Settings()


def get_graphql_url(host: str | None = None, port: int | None = None) -> str:
    """Build the URL the GraphQL endpoint is reachable at, for startup messages."""
    host = host or settings.api_host
    port = port or settings.api_port
    # 0.0.0.0 binds every interface; point humans at localhost
    display_host = "localhost" if host in ("0.0.0.0", "::") else host
    return f"http://{display_host}:{port}{settings.graphql_path}"
