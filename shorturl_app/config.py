from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False  # True makes Starlette return tracebacks to clients
    log_level: str = "INFO"

    # Application
    app_name: str = "Short URL"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Database
    database_url: str = "sqlite:///./url_shortener.db"

    # Short code generation
    short_code_strategy: str = "random"  # Options: "random", "base62"
    short_code_length: int = 7
    short_code_salt: int = 1256  # Salt for Base62 strategy
    max_retries: int = 5

    # Sessions
    session_backend: str = "redis"  # Options: "redis", "memory"
    redis_url: str = "redis://localhost:6379/0"
    session_cookie_name: str = "session_id"
    session_ttl: int = 60 * 60 * 24  # Seconds
    session_cookie_secure: bool = False
    session_save_uninitialized: bool = True

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
