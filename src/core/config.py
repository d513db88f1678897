"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Portfolio API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_json: bool | None = Field(
        default=None,
        description="Render logs as JSON (defaults to True in production)",
    )

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    forwarded_allow_ips: str = Field(
        default="127.0.0.1",
        description="Proxies trusted to set X-Forwarded-For (uvicorn --forwarded-allow-ips)",
    )

    # Firebase project
    firebase_project_id: str = Field(default="")
    firebase_credentials_path: str = Field(
        default="",
        description="Path to a service account JSON (falls back to GOOGLE_APPLICATION_CREDENTIALS)",
    )
    firebase_web_api_key: str = Field(
        default="",
        description="Web API key used for Identity Toolkit password sign-in",
    )
    firebase_storage_bucket: str = Field(
        default="",
        description="Storage bucket name (defaults to <project>.appspot.com)",
    )

    # Firestore layout
    firestore_database: str = Field(default="(default)")
    profiles_collection: str = Field(default="profiles")
    users_collection: str = Field(default="users")

    # Media
    avatar_path_prefix: str = Field(default="avatars")
    max_image_bytes: int = Field(default=5 * 1024 * 1024)

    # Authentication
    identity_toolkit_url: str = Field(
        default="https://identitytoolkit.googleapis.com/v1",
    )
    firebase_jwks_url: str = Field(
        default=(
            "https://www.googleapis.com/service_accounts/v1/jwk/"
            "securetoken@system.gserviceaccount.com"
        ),
        description="JWKS endpoint for Firebase ID token (RS256) verification",
    )
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Secret key for locally signed HS256 tokens (tests and local dev)",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=60)
    allow_local_tokens: bool = Field(
        default=False,
        description="Accept HS256 tokens signed with jwt_secret_key (tests and local dev only)",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def token_issuer(self) -> str:
        """Expected ``iss`` claim of Firebase ID tokens."""
        if self.firebase_project_id:
            return f"https://securetoken.google.com/{self.firebase_project_id}"
        return ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def storage_bucket_name(self) -> str:
        """Resolve the storage bucket, defaulting to the project's appspot bucket."""
        if self.firebase_storage_bucket:
            return self.firebase_storage_bucket
        if self.firebase_project_id:
            return f"{self.firebase_project_id}.appspot.com"
        return ""

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @model_validator(mode="after")
    def reject_local_tokens_in_production(self) -> "Settings":
        if self.allow_local_tokens and self.is_production:
            raise ValueError("ALLOW_LOCAL_TOKENS must be false in production")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
