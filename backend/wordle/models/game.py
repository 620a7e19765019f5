from sqlalchemy import Integer, DateTime, func, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column
from wordle.db.base import Base

class GameRecord(Base):
    __tablename__ = "game_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    word: Mapped[str] = mapped_column(String(5))
    score: Mapped[int] = mapped_column(Integer)
    time_taken: Mapped[int] = mapped_column(Integer)
    attempts: Mapped[int] = mapped_column(Integer)
    result: Mapped[str] = mapped_column(String(10))

    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now(), index=True)
