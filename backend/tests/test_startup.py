import io
import logging
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from wordle.core.config import DEFAULT_SESSION_SECRET, Settings
from wordle.db.session import build_engine, init_db
from wordle.main import create_app

UNREACHABLE = "sqlite+pysqlite:////nonexistent-dir/wordle/test.db"


def test_settings_build_postgres_url_from_parts():
    cfg = Settings(db_user="u", db_password="p", db_host="db", db_port=6543, db_name="games", database_url=None)

    assert cfg.sqlalchemy_url == "postgresql+psycopg://u:p@db:6543/games"
    assert Settings(database_url="sqlite://").sqlalchemy_url == "sqlite://"


def test_init_db_is_idempotent():
    eng = build_engine(Settings(database_url="sqlite+pysqlite:///:memory:"))

    assert init_db(eng) is True
    assert init_db(eng) is True
    eng.dispose()


def test_init_db_failure_is_logged_not_raised(caplog):
    eng = build_engine(Settings(database_url=UNREACHABLE))

    assert init_db(eng) is False
    assert "database init failed" in caplog.text

    with pytest.raises(OperationalError):
        init_db(eng, strict=True)


def test_app_starts_without_database():
    app = create_app(Settings(database_url=UNREACHABLE, log_level="WARNING"))

    with TestClient(app) as c:
        assert c.get("/api/session").json() == {"userId": None}

        res = c.post("/api/login", json={"email": "a@example.com", "password": "pw"})
        assert res.status_code == 500
        assert res.json() == {"error": "Login failed"}

        res = c.post("/api/register", json={"username": "a", "email": "a@example.com", "password": "pw"})
        assert res.status_code == 500
        assert res.json() == {"error": "Registration failed"}


def test_create_app_sets_package_log_level_only():
    root_handlers = list(logging.getLogger().handlers)

    create_app(Settings(database_url="sqlite+pysqlite:///:memory:", log_level="WARNING"))
    assert logging.getLogger("wordle").level == logging.WARNING

    create_app(Settings(database_url="sqlite+pysqlite:///:memory:", log_level="DEBUG"))
    assert logging.getLogger("wordle").level == logging.DEBUG
    assert logging.getLogger("wordle.services.sessions").getEffectiveLevel() == logging.DEBUG

    assert logging.getLogger().handlers == root_handlers


def test_default_session_secret_is_reported(caplog):
    with caplog.at_level(logging.WARNING, logger="wordle"):
        create_app(Settings(database_url="sqlite+pysqlite:///:memory:", session_secret=DEFAULT_SESSION_SECRET))
    assert "SESSION_SECRET is not set" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="wordle"):
        create_app(Settings(database_url="sqlite+pysqlite:///:memory:", session_secret="x" * 48))
    assert "SESSION_SECRET" not in caplog.text


def test_migration_env_imports_installed_package(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://u:p@localhost:5432/wordle_db")
    buf = io.StringIO()
    cfg = Config(output_buffer=buf)
    cfg.set_main_option("script_location", str(Path(__file__).resolve().parents[1] / "alembic"))

    command.upgrade(cfg, "head", sql=True)

    sql = buf.getvalue()
    assert "CREATE TABLE users" in sql
    assert "CREATE TABLE game_history" in sql
    assert "ON DELETE CASCADE" in sql
