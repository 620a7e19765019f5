from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

pwd = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

JWT_ALG = "HS256"


def _clip(p: str) -> str:
    # bcrypt only looks at the first 72 bytes
    b = p.encode("utf-8")
    if len(b) > 72:
        p = b[:72].decode("utf-8", errors="ignore")
    return p


def hash_password(p: str) -> str:
    if p is None:
        raise ValueError("password is required")
    return pwd.hash(_clip(str(p)))


def verify_password(p: str, hashed: str) -> bool:
    if p is None or hashed is None:
        return False
    return pwd.verify(_clip(str(p)), hashed)


def create_session_token(sid: str, secret: str, max_age_seconds: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sid": sid,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=max_age_seconds)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALG)


def decode_session_token(token: str, secret: str) -> str | None:
    """Return the session id carried by a cookie token, or None if it is
    malformed, tampered with or expired."""
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALG])
    except jwt.PyJWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) else None
