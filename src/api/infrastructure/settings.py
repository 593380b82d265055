"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        LETTERBOX_DB_HOST: Database host (default: localhost)
        LETTERBOX_DB_PORT: Database port (default: 5432)
        LETTERBOX_DB_DATABASE: Database name (default: letterbox)
        LETTERBOX_DB_USERNAME: Database user (default: letterbox)
        LETTERBOX_DB_PASSWORD: Database password (required in production)
        LETTERBOX_DB_POOL_SIZE: Connections kept in the engine pool (default: 10)
        LETTERBOX_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="LETTERBOX_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="letterbox", description="Database name")
    username: str = Field(default="letterbox", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_size: int = Field(
        default=10,
        description="Connections kept in the engine pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL")

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class KakaoOAuthSettings(BaseSettings):
    """Kakao OAuth client settings.

    Environment variables:
        LETTERBOX_KAKAO_CLIENT_ID: REST API key of the Kakao application
        LETTERBOX_KAKAO_CLIENT_SECRET: Optional client secret
        LETTERBOX_KAKAO_REDIRECT_URI: Redirect URI registered with Kakao
        LETTERBOX_KAKAO_TOKEN_URL: Token endpoint
        LETTERBOX_KAKAO_PROFILE_URL: User profile endpoint
        LETTERBOX_KAKAO_TIMEOUT_SECONDS: HTTP timeout (default: 5)
    """

    model_config = SettingsConfigDict(
        env_prefix="LETTERBOX_KAKAO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    client_id: str = Field(default="", description="Kakao REST API key")
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Kakao client secret (empty when disabled)",
        json_schema_extra={"optional": True},
    )
    redirect_uri: str = Field(
        default="http://localhost:8000/api/v1/auth/kakao/callback",
        description="Redirect URI registered with Kakao",
    )
    token_url: str = Field(
        default="https://kauth.kakao.com/oauth/token",
        description="Kakao token endpoint",
    )
    profile_url: str = Field(
        default="https://kapi.kakao.com/v2/user/me",
        description="Kakao user profile endpoint",
    )
    timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for calls to Kakao",
        gt=0,
    )


class LetterSettings(BaseSettings):
    """Letter routing settings.

    Environment variables:
        LETTERBOX_LETTERS_DEFAULT_QUOTA: Letters a new user may send (default: 3)
        LETTERBOX_LETTERS_PAGE_SIZE: Letters per listing page (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="LETTERBOX_LETTERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_quota: int = Field(
        default=3,
        description="Quota granted to a user on sign-up",
        ge=0,
    )
    page_size: int = Field(
        default=10,
        description="Letters per listing page",
        ge=1,
        le=100,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="LETTERBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Letterbox API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def kakao(self) -> KakaoOAuthSettings:
        """Get Kakao OAuth settings."""
        return get_kakao_settings()

    @property
    def letters(self) -> LetterSettings:
        """Get letter routing settings."""
        return get_letter_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_kakao_settings() -> KakaoOAuthSettings:
    """Get cached Kakao OAuth settings."""
    return KakaoOAuthSettings()


@lru_cache
def get_letter_settings() -> LetterSettings:
    """Get cached letter routing settings."""
    return LetterSettings()
