from sqlalchemy.orm import Session

from wordle.core.errors import AuthError, ConflictError
from wordle.core.security import hash_password, verify_password
from wordle.models.user import User
from wordle.services.users import create_user, find_by_email


def register_user(s: Session, username: str, email: str, password: str) -> User:
    # early exit for the common case; create_user still catches the race
    if find_by_email(s, email) is not None:
        raise ConflictError("Email already registered")
    return create_user(s, username=username, email=email, password_hash=hash_password(password))


def authenticate(s: Session, email: str, password: str) -> User:
    u = find_by_email(s, email)
    if not u or not verify_password(password, u.password_hash):
        raise AuthError()
    return u
