import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wordle.api.deps import db, require_session
from wordle.core.errors import StoreError
from wordle.schemas.game import GameResultIn, StatsResponse
from wordle.services.games import aggregate_by_user, insert_game, list_by_user, top_scores_global
from wordle.services.sessions import SessionData

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["games"])


@router.post("/game-result")
def save_game_result(
    body: GameResultIn,
    s: Session = Depends(db),
    sess: SessionData = Depends(require_session),
):
    try:
        game_id = insert_game(
            s,
            user_id=sess.user_id,
            word=body.word,
            score=body.score,
            time_taken=body.time,
            attempts=body.attempts,
            result=body.result,
        )
    except SQLAlchemyError as e:
        log.exception("save game failed", exc_info=e)
        raise StoreError("Failed to save game")
    return {"success": True, "gameId": game_id}


@router.get("/stats", response_model=StatsResponse)
def stats(s: Session = Depends(db), sess: SessionData = Depends(require_session)):
    try:
        history = list_by_user(s, sess.user_id)
        totals = aggregate_by_user(s, sess.user_id)
        top = top_scores_global(s)
    except SQLAlchemyError as e:
        log.exception("stats failed", exc_info=e)
        raise StoreError("Failed to fetch stats")
    return {"history": history, "stats": totals, "topScores": top}
