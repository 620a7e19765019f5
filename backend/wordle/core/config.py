from pathlib import Path

from pydantic_settings import BaseSettings

STATIC_DIR = Path(__file__).resolve().parents[1] / "static"
DEFAULT_SESSION_SECRET = "your-secret-key-change-this"


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "wordle_db"
    database_url: str | None = None

    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_statement_timeout_ms: int = 5000
    db_init_strict: bool = False

    host: str = "0.0.0.0"
    port: int = 3000

    session_secret: str = DEFAULT_SESSION_SECRET
    session_max_age_seconds: int = 60 * 60 * 24
    session_cookie_name: str = "wordle_session"
    session_cookie_secure: bool = False
    session_purge_interval_seconds: int = 600

    cors_origins: str = "http://localhost:3000"
    static_dir: Path = STATIC_DIR
    log_level: str = "INFO"

    class Config:
        env_prefix = ""
        case_sensitive = False
        env_file = ".env"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


settings = Settings()
