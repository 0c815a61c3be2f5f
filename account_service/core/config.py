from datetime import timedelta

from dotenv import find_dotenv, load_dotenv
from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Same .env the settings read, exported for anything that looks at os.environ
load_dotenv(find_dotenv(usecwd=True))

DEFAULT_JWT_SECRET = "dev-secret-change-me"


def _split_csv(val: str | None) -> list[str]:
    return [v.strip() for v in (val or "").split(",") if v.strip()]


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Account Service"
    ENV: str = "development"  # "production" refuses the default signing secret
    LOG_LEVEL: str = "INFO"

    # CORS (schemed origins like https://app.example.com)
    ALLOW_ORIGINS: list[str] = Field(default_factory=list)
    ALLOWED_ORIGINS: str = ""  # CSV override for ALLOW_ORIGINS
    ALLOW_METHODS: list[str] = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    ALLOW_HEADERS: list[str] = ["*"]
    ALLOW_CREDENTIALS: bool = True

    # DB
    DATABASE_URL: str = "sqlite:///./accounts.db"

    # Auth / JWT
    JWT_SECRET: str = Field(
        default=DEFAULT_JWT_SECRET,
        validation_alias=AliasChoices("SECRET_KEY", "JWT_SECRET"),
    )
    JWT_ALG: str = "HS256"
    BCRYPT_ROUNDS: int = 10

    # Session lifetimes per issuance path
    REGISTER_TOKEN_TTL_MINUTES: int = 300  # 5 hours
    LOGIN_TOKEN_TTL_MINUTES: int = 43200  # 30 days
    OAUTH_TOKEN_TTL_MINUTES: int = 60

    # Cookies
    SESSION_COOKIE_NAME: str = "token"
    SESSION_COOKIE_DOMAIN: str | None = None
    SESSION_COOKIE_SECURE: bool = True
    SESSION_COOKIE_SAMESITE: str = "lax"  # 'lax', 'strict' or 'none'

    # Load .env file
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _no_default_secret_in_production(self) -> "Settings":
        if self.ENV.lower() == "production" and self.JWT_SECRET == DEFAULT_JWT_SECRET:
            raise ValueError("Set SECRET_KEY (or JWT_SECRET) before running with ENV=production")
        return self

    @field_validator("JWT_SECRET")
    @classmethod
    def _secret_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("JWT_SECRET must not be empty")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def _rounds_in_range(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("SESSION_COOKIE_SAMESITE")
    @classmethod
    def _known_samesite(cls, v: str) -> str:
        v = v.lower()
        if v not in ("lax", "strict", "none"):
            raise ValueError("SESSION_COOKIE_SAMESITE must be 'lax', 'strict' or 'none'")
        return v

    # ---------- Helpers ----------

    def register_token_ttl(self) -> timedelta:
        return timedelta(minutes=self.REGISTER_TOKEN_TTL_MINUTES)

    def login_token_ttl(self) -> timedelta:
        return timedelta(minutes=self.LOGIN_TOKEN_TTL_MINUTES)

    def oauth_token_ttl(self) -> timedelta:
        return timedelta(minutes=self.OAUTH_TOKEN_TTL_MINUTES)


def build_settings(**overrides) -> Settings:
    s = Settings(**overrides)

    # SQLAlchemy dropped the bare postgres:// scheme
    if s.DATABASE_URL.startswith("postgres://"):
        s.DATABASE_URL = s.DATABASE_URL.replace("postgres://", "postgresql://", 1)

    # Load CORS overrides
    env_origins = _split_csv(s.ALLOWED_ORIGINS)
    if env_origins:
        s.ALLOW_ORIGINS = env_origins

    return s


settings = build_settings()
