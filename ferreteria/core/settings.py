from typing import Literal, List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr, field_validator, model_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_NAME: str = "Ferreteria API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["local", "dev", "staging", "prod", "test"] = "local"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    CORS_ORIGINS: str = "*"      # CSV o '*'
    LOG_LEVEL: str = "INFO"

    # DB
    DATABASE_URL: SecretStr = SecretStr("")
    DB_SSL: bool = False
    DB_CREATE_ALL: bool = True

    # Historial (servicio externo de inventario)
    HISTORY_API_URL: str = "http://localhost:5000/api"
    HISTORY_TIMEOUT_SEC: float = 10.0
    HISTORY_FETCH_LIMIT: int = 1000     # registros por petición
    HISTORY_MAX_PAGES: int = 50         # tope de peticiones por carga
    HISTORY_PAGE_SIZE: int = 10
    SEARCH_DEBOUNCE_MS: int = 300
    DISPLAY_TZ: str = "America/Caracas"

    # Sesion
    SESSION_SECRET: SecretStr = SecretStr("")
    SESSION_TTL_SEC: int = 28800     # 8 horas
    SESSION_COOKIE: str = "session"
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: SecretStr = SecretStr("")

    # -------- validators (presencia, formato) --------
    @field_validator("DATABASE_URL", "SESSION_SECRET", "ADMIN_PASSWORD")
    @classmethod
    def _required_secret(cls, v, info):
        if v is None or (hasattr(v, "get_secret_value") and v.get_secret_value() == ""):
            raise ValueError(f"{info.field_name} is required (set it in .env)")
        return v

    @field_validator("HISTORY_API_URL")
    @classmethod
    def _normalize_base(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        if not v:
            raise ValueError("HISTORY_API_URL is required (set it in .env)")
        return v

    @field_validator("HISTORY_FETCH_LIMIT", "HISTORY_MAX_PAGES", "HISTORY_PAGE_SIZE", "SESSION_TTL_SEC")
    @classmethod
    def _positive(cls, v: int, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("SEARCH_DEBOUNCE_MS")
    @classmethod
    def _non_negative(cls, v: int, info):
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    # -------- cross-field checks --------
    @model_validator(mode="after")
    def _cross_checks(self):
        if self.HISTORY_PAGE_SIZE > self.HISTORY_FETCH_LIMIT:
            raise ValueError("HISTORY_PAGE_SIZE cannot exceed HISTORY_FETCH_LIMIT")
        return self

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        return ["*"] if self.CORS_ORIGINS.strip() == "*" else [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def DEBOUNCE_SECONDS(self) -> float:
        return self.SEARCH_DEBOUNCE_MS / 1000.0

settings = Settings()
