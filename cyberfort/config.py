"""Project configuration loaded from environment variables."""

from typing import Any, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(case_sensitive=False)

    virustotal_api_key: str = ""
    abstractapi_api_key: str = ""
    virustotal_base_url: str = "https://www.virustotal.com/api/v3"
    abstractapi_base_url: str = "https://phonevalidation.abstractapi.com/v1/"
    request_timeout: float = 15.0
    history_limit: int = 10
    history_backend: str = "memory"  # 'memory', 'sqlite', 'sql'
    history_db_path: str = "history.sqlite"
    pg_host: str = ""
    pg_port: str = "5432"
    pg_db: str = "cyberfort"
    pg_user: str = "postgres"
    pg_password: str = "postgres"
    environment: str = "development"
    random_seed: Optional[int] = None
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    log_file: str | None = None
    log_json: bool = False
    log_max_bytes: int = 1048576
    log_backup_count: int = 3
    metrics_port: int = 0
    cors_origins: str = "http://localhost:5173"  # comma separated

    @field_validator("history_backend", mode="before")
    @classmethod
    def _lower_backend(cls, v: Any) -> str:
        value = str(v or "memory").strip().lower()
        if value not in {"memory", "sqlite", "sql"}:
            raise ValueError(f"Unknown history backend: {v}")
        return value

    @field_validator("random_seed", mode="before")
    @classmethod
    def _empty_seed(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def pg_dsn(self) -> str:
        return (
            f"postgresql+psycopg2://{self.pg_user}:{self.pg_password}"
            f"@{self.pg_host}:{self.pg_port}/{self.pg_db}"
        )

    @property
    def cors_origin_list(self) -> List[str]:
        return [item.strip() for item in self.cors_origins.split(",") if item.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


try:
    settings = Settings()
except Exception as exc:  # ValidationError or others
    raise RuntimeError(f"Invalid configuration: {exc}") from exc
