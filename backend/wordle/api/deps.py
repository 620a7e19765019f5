from fastapi import Depends, Request
from sqlalchemy.orm import Session

from wordle.core.config import Settings
from wordle.core.errors import NotAuthenticatedError
from wordle.core.security import decode_session_token
from wordle.services.sessions import SessionData, SessionStore


class RedirectToHome(Exception):
    """Raised by page routes when the visitor has no session."""


def app_settings(request: Request) -> Settings:
    return request.app.state.settings


def session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def db(request: Request):
    s: Session = request.app.state.db_sessionmaker()
    try:
        yield s
    finally:
        s.close()


def session_id(request: Request) -> str | None:
    cfg: Settings = request.app.state.settings
    token = request.cookies.get(cfg.session_cookie_name)
    if not token:
        return None
    return decode_session_token(token, cfg.session_secret)


def current_session(request: Request) -> SessionData | None:
    sess = request.app.state.session_store.get(session_id(request))
    if sess is None or not sess.user_id:
        return None
    return sess


def is_authenticated(request: Request) -> bool:
    return current_session(request) is not None


def require_session(sess: SessionData | None = Depends(current_session)) -> SessionData:
    if sess is None:
        raise NotAuthenticatedError()
    return sess


def page_session(sess: SessionData | None = Depends(current_session)) -> SessionData:
    if sess is None:
        raise RedirectToHome()
    return sess
