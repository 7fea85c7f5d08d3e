"""
Configuration management using Pydantic BaseSettings.
All values can be overridden via environment variables or a .env file.
"""
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── TiDB (MySQL-protocol compatible) ───────────────────────────────────
    tidb_host: str = "tidb"
    tidb_port: int = 4000
    tidb_user: str = "root"
    tidb_password: str = ""
    tidb_database: str = "concept_social"

    # Any SQLAlchemy async URL; takes precedence over the TiDB fields.
    # e.g. sqlite+aiosqlite:///./concept_social.db for local runs
    database_url: Optional[str] = None
    database_echo: bool = False

    @property
    def tidb_url(self) -> str:
        return (
            f"mysql+aiomysql://{self.tidb_user}:{self.tidb_password}"
            f"@{self.tidb_host}:{self.tidb_port}/{self.tidb_database}"
        )

    @property
    def effective_database_url(self) -> str:
        return self.database_url or self.tidb_url

    # ── Sessions ───────────────────────────────────────────────────────────
    session_secret_key: str = "change-me"
    session_cookie: str = "concept_session"
    session_max_age: int = 14 * 24 * 3600   # two weeks

    # ── Observability ──────────────────────────────────────────────────────
    tracing_enabled: bool = True
    otel_exporter_otlp_endpoint: str = "http://jaeger:4317"
    service_name: str = "concept-social-api"
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
