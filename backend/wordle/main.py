import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from wordle.core.config import DEFAULT_SESSION_SECRET, Settings, settings as default_settings
from wordle.core.errors import register_error_handlers
from wordle.api.deps import RedirectToHome
from wordle.api.routes.auth import router as auth_router
from wordle.api.routes.games import router as games_router
from wordle.api.routes.pages import router as pages_router
from wordle.db.session import build_engine, build_sessionmaker, init_db
from wordle.services.sessions import SessionStore, session_purge_loop

log = logging.getLogger(__name__)


def create_app(cfg: Settings | None = None) -> FastAPI:
    cfg = cfg or default_settings
    # root handlers belong to whoever runs the process (run(), uvicorn, pytest)
    logging.getLogger("wordle").setLevel(cfg.log_level.upper())
    if cfg.session_secret == DEFAULT_SESSION_SECRET:
        log.warning("SESSION_SECRET is not set; session cookies are signed with the built-in default key")

    app = FastAPI(title="Wordle backend")

    engine = build_engine(cfg)
    app.state.settings = cfg
    app.state.engine = engine
    app.state.db_sessionmaker = build_sessionmaker(engine)
    app.state.session_store = SessionStore(max_age_seconds=cfg.session_max_age_seconds)

    origins = [o.strip() for o in (cfg.cors_origins or "").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    @app.exception_handler(RedirectToHome)
    async def _to_home(request: Request, exc: RedirectToHome):
        return RedirectResponse("/", status_code=302)

    @app.get("/health")
    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(games_router)
    app.include_router(pages_router)

    if cfg.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(cfg.static_dir)), name="static")

    @app.on_event("startup")
    async def _startup():
        init_db(engine, strict=cfg.db_init_strict)
        app.state.purge_task = asyncio.create_task(
            session_purge_loop(app.state.session_store, cfg.session_purge_interval_seconds)
        )

    @app.on_event("shutdown")
    async def _shutdown():
        task = getattr(app.state, "purge_task", None)
        if task is not None:
            task.cancel()
        engine.dispose()

    return app


app = create_app()


def run():
    import uvicorn

    cfg = app.state.settings
    logging.basicConfig(level=cfg.log_level.upper())
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_level=cfg.log_level.lower())


if __name__ == "__main__":
    run()
