from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wordle.core.errors import ConflictError
from wordle.models.user import User


def find_by_email(s: Session, email: str) -> User | None:
    return s.execute(select(User).where(User.email == email)).scalar_one_or_none()


def create_user(s: Session, username: str, email: str, password_hash: str) -> User:
    user = User(username=username, email=email, password_hash=password_hash)
    s.add(user)
    try:
        s.commit()
    except IntegrityError:
        # uq_users_email is what actually keeps emails unique
        s.rollback()
        raise ConflictError("Email already registered")
    s.refresh(user)
    return user
