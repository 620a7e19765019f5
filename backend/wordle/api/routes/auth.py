import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wordle.api.deps import app_settings, current_session, db, session_id, session_store
from wordle.core.config import Settings
from wordle.core.errors import StoreError, ValidationError
from wordle.core.security import create_session_token
from wordle.models.user import User
from wordle.schemas.auth import LoginIn, RegisterIn
from wordle.services.auth import authenticate, register_user
from wordle.services.sessions import SessionData, SessionStore

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def _start_session(request: Request, response: Response, user: User, store: SessionStore, cfg: Settings) -> None:
    # a fresh login replaces whatever session the browser already had
    store.destroy(session_id(request))
    sid = store.create(user.id, user.username)
    token = create_session_token(sid, cfg.session_secret, cfg.session_max_age_seconds)
    response.set_cookie(
        cfg.session_cookie_name,
        token,
        max_age=cfg.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=cfg.session_cookie_secure,
    )


@router.post("/register")
def register(
    body: RegisterIn,
    request: Request,
    response: Response,
    s: Session = Depends(db),
    store: SessionStore = Depends(session_store),
    cfg: Settings = Depends(app_settings),
):
    if not body.username or not body.email or not body.password:
        raise ValidationError("All fields required")
    try:
        user = register_user(s, body.username, body.email, body.password)
    except SQLAlchemyError as e:
        log.exception("register failed", exc_info=e)
        raise StoreError("Registration failed")
    _start_session(request, response, user, store, cfg)
    return {"success": True, "redirect": "/game"}


@router.post("/login")
def login(
    body: LoginIn,
    request: Request,
    response: Response,
    s: Session = Depends(db),
    store: SessionStore = Depends(session_store),
    cfg: Settings = Depends(app_settings),
):
    if not body.email or not body.password:
        raise ValidationError("Email and password required")
    try:
        user = authenticate(s, body.email, body.password)
    except SQLAlchemyError as e:
        log.exception("login failed", exc_info=e)
        raise StoreError("Login failed")
    _start_session(request, response, user, store, cfg)
    return {"success": True, "redirect": "/game"}


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    store: SessionStore = Depends(session_store),
    cfg: Settings = Depends(app_settings),
):
    store.destroy(session_id(request))
    response.delete_cookie(cfg.session_cookie_name, httponly=True, samesite="lax")
    return {"success": True}


@router.get("/session")
def session_info(sess: SessionData | None = Depends(current_session)):
    if sess is None:
        return {"userId": None}
    return {"userId": sess.user_id, "username": sess.username}
