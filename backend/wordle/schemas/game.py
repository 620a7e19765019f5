from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Literal

GameResult = Literal["won", "lost"]

# game_history counters are 32-bit INTEGER columns
MAX_INT32 = 2**31 - 1


class GameResultIn(BaseModel):
    word: str
    score: int = Field(ge=0, le=MAX_INT32)
    time: int = Field(ge=0, le=MAX_INT32)
    attempts: int = Field(ge=0, le=MAX_INT32)
    result: GameResult

    @field_validator("word")
    @classmethod
    def word_five_letters(cls, v: str):
        w = str(v).strip().lower()
        if len(w) != 5 or not w.isalpha():
            raise ValueError("word must be 5 letters")
        return w

    @field_validator("result", mode="before")
    @classmethod
    def result_normalize(cls, v):
        return str(v).strip().lower() if v is not None else v


class GameOut(BaseModel):
    id: int
    user_id: int
    word: str
    score: int
    time_taken: int
    attempts: int
    result: str
    created_at: datetime

    class Config:
        from_attributes = True


class StatsOut(BaseModel):
    total_games: int
    wins: int
    avg_score: float | None = None
    best_score: int | None = None
    avg_time: float | None = None


class TopScoreOut(BaseModel):
    username: str
    score: int
    created_at: datetime
    time_taken: int


class StatsResponse(BaseModel):
    history: list[GameOut]
    stats: StatsOut
    topScores: list[TopScoreOut]
