from sqlalchemy import select, func, case
from sqlalchemy.orm import Session

from wordle.models.game import GameRecord
from wordle.models.user import User

HISTORY_LIMIT = 100
LEADERBOARD_LIMIT = 10


def insert_game(
    s: Session,
    user_id: int,
    word: str,
    score: int,
    time_taken: int,
    attempts: int,
    result: str,
) -> int:
    row = GameRecord(
        user_id=user_id,
        word=word,
        score=score,
        time_taken=time_taken,
        attempts=attempts,
        result=result,
    )
    s.add(row)
    s.commit()
    return row.id


def list_by_user(s: Session, user_id: int, limit: int = HISTORY_LIMIT) -> list[GameRecord]:
    q = (
        select(GameRecord)
        .where(GameRecord.user_id == user_id)
        .order_by(GameRecord.created_at.desc(), GameRecord.id.desc())
        .limit(limit)
    )
    return list(s.execute(q).scalars().all())


def aggregate_by_user(s: Session, user_id: int) -> dict:
    """Per-user totals. With no games the averages and best score are None."""
    row = s.execute(
        select(
            func.count(GameRecord.id).label("total_games"),
            func.coalesce(func.sum(case((GameRecord.result == "won", 1), else_=0)), 0).label("wins"),
            func.avg(GameRecord.score).label("avg_score"),
            func.max(GameRecord.score).label("best_score"),
            func.avg(GameRecord.time_taken).label("avg_time"),
        ).where(GameRecord.user_id == user_id)
    ).one()

    return {
        "total_games": int(row.total_games or 0),
        "wins": int(row.wins or 0),
        "avg_score": float(row.avg_score) if row.avg_score is not None else None,
        "best_score": int(row.best_score) if row.best_score is not None else None,
        "avg_time": float(row.avg_time) if row.avg_time is not None else None,
    }


def top_scores_global(s: Session, limit: int = LEADERBOARD_LIMIT) -> list[dict]:
    q = (
        select(User.username, GameRecord.score, GameRecord.created_at, GameRecord.time_taken)
        .join(User, GameRecord.user_id == User.id)
        .order_by(GameRecord.score.desc(), GameRecord.id.asc())
        .limit(limit)
    )
    return [
        {
            "username": r.username,
            "score": r.score,
            "created_at": r.created_at,
            "time_taken": r.time_taken,
        }
        for r in s.execute(q).all()
    ]
