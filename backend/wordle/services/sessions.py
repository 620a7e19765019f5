import asyncio
import logging
import secrets
import threading
import time
from dataclasses import dataclass

log = logging.getLogger(__name__)

DEFAULT_MAX_AGE_SECONDS = 60 * 60 * 24


@dataclass(frozen=True)
class SessionData:
    sid: str
    user_id: int
    username: str
    expires_at: float

    def expired(self, now: float | None = None) -> bool:
        return (now if now is not None else time.time()) >= self.expires_at


class SessionStore:
    """
    In-process session table keyed by an opaque id.

    Sessions expire a fixed ``max_age_seconds`` after creation (no sliding
    renewal). Nothing survives a restart.
    """

    def __init__(self, max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS, clock=time.time):
        self.max_age_seconds = int(max_age_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: dict[str, SessionData] = {}

    def create(self, user_id: int, username: str) -> str:
        sid = secrets.token_urlsafe(32)
        data = SessionData(
            sid=sid,
            user_id=int(user_id),
            username=username,
            expires_at=self._clock() + self.max_age_seconds,
        )
        with self._lock:
            self._sessions[sid] = data
        log.debug("session created for user %s", user_id)
        return sid

    def get(self, sid: str | None) -> SessionData | None:
        if not sid:
            return None
        with self._lock:
            data = self._sessions.get(sid)
            if data is None:
                return None
            if data.expired(self._clock()):
                del self._sessions[sid]
                return None
            return data

    def destroy(self, sid: str | None) -> bool:
        if not sid:
            return False
        with self._lock:
            data = self._sessions.pop(sid, None)
        if data is not None:
            log.debug("session destroyed for user %s", data.user_id)
        return data is not None

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            dead = [sid for sid, d in self._sessions.items() if d.expired(now)]
            for sid in dead:
                del self._sessions[sid]
        return len(dead)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


async def session_purge_loop(store: SessionStore, interval_seconds: float) -> None:
    interval = float(interval_seconds or 600)

    while True:
        await asyncio.sleep(interval)
        try:
            n = store.purge_expired()
            if n:
                log.debug("purged %s expired sessions", n)
        except Exception as e:
            log.exception("session purge failed", exc_info=e)
