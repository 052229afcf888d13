"""Application settings and configuration.

This module defines all configuration options for the Duk scoring engine.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every threshold used by the moderation, voting, ranking and trending
    services lives here so deployments can tune them without code changes.
    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Duk Scoring", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./duk.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Profanity filter
    profanity_denylist: list[str] = Field(
        default=["spam", "scam", "fake", "fraud", "cheat", "hack", "illegal"],
        alias="PROFANITY_DENYLIST",
    )

    # Heuristic toxicity scorer
    toxicity_pattern_weight: float = Field(default=0.2, alias="TOXICITY_PATTERN_WEIGHT")
    toxicity_length_weight: float = Field(default=0.1, alias="TOXICITY_LENGTH_WEIGHT")
    toxicity_min_length: int = Field(default=10, alias="TOXICITY_MIN_LENGTH")
    toxicity_max_length: int = Field(default=2000, alias="TOXICITY_MAX_LENGTH")
    toxicity_toxic_threshold: float = Field(default=0.7, alias="TOXICITY_TOXIC_THRESHOLD")

    # Moderation decision policy (strict greater-than comparisons)
    moderation_reject_threshold: float = Field(
        default=0.8,
        alias="MODERATION_REJECT_THRESHOLD",
    )
    moderation_flag_threshold: float = Field(default=0.5, alias="MODERATION_FLAG_THRESHOLD")
    max_body_length: int = Field(default=10_000, alias="MAX_BODY_LENGTH")

    # Hot score ranking
    hot_score_gravity: float = Field(default=1.8, alias="HOT_SCORE_GRAVITY")
    hot_score_engagement_weight: float = Field(
        default=0.5,
        alias="HOT_SCORE_ENGAGEMENT_WEIGHT",
    )
    hot_score_min_age_hours: float = Field(default=0.1, alias="HOT_SCORE_MIN_AGE_HOURS")

    # Trending topic extraction
    trending_min_token_length: int = Field(default=3, alias="TRENDING_MIN_TOKEN_LENGTH")
    trending_max_token_length: int = Field(default=20, alias="TRENDING_MAX_TOKEN_LENGTH")
    trending_query_limit: int = Field(default=3, alias="TRENDING_QUERY_LIMIT")
    trending_submission_limit: int = Field(default=5, alias="TRENDING_SUBMISSION_LIMIT")

    # Search
    search_default_limit: int = Field(default=20, alias="SEARCH_DEFAULT_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for Alembic."""
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


settings = Settings()
