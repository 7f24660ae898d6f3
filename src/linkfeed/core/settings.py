"""Runtime configuration for LinkFeed.

Every option is read from the environment (or a local ``.env`` file) under
the upper-case name given as its alias. Only ``SECRET_KEY`` is required.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the API process."""

    app_name: str = Field(default="LinkFeed", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Signing key for bearer tokens; the process refuses to start without it.
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    database_url: str = Field(default="sqlite:///./linkfeed.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    api_prefix: str = Field(default="/api", alias="API_PREFIX")

    upload_dir: str = Field(default="./uploads", alias="UPLOAD_DIR")
    upload_url_path: str = Field(default="/uploads", alias="UPLOAD_URL_PATH")
    allowed_image_extensions: list[str] = Field(
        default=["png", "jpg", "jpeg", "gif", "webp"],
        alias="ALLOWED_IMAGE_EXTENSIONS",
    )
    max_image_bytes: int = Field(default=5 * 1024 * 1024, alias="MAX_IMAGE_BYTES")

    # List values are JSON in the environment, e.g. CORS_ORIGINS='["http://localhost:5173"]'
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )


settings = Settings()  # type: ignore[call-arg]
