from pydantic import BaseModel, field_validator
from datetime import date, datetime
from decimal import Decimal
from app.schemas.common import Money

class PokerSessionCreate(BaseModel):
    session_name: str
    session_date: date | None = None

    @field_validator("session_name")
    @classmethod
    def name_not_blank(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("Session name is required")
        return v

class PokerSessionOut(BaseModel):
    id: int
    session_name: str
    session_date: date
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class PokerSessionSummary(PokerSessionOut):
    player_count: int
    total_buyins: Money

class PokerPlayerCreate(BaseModel):
    user_id: int
    buy_in_amount: Decimal

    @field_validator("buy_in_amount")
    @classmethod
    def buy_in_positive(cls, v: Decimal):
        if not v.is_finite() or v <= 0:
            raise ValueError("Buy-in must be a positive number")
        return v

class FinalChipsUpdate(BaseModel):
    final_chips: Decimal

    @field_validator("final_chips")
    @classmethod
    def chips_not_negative(cls, v: Decimal):
        if not v.is_finite() or v < 0:
            raise ValueError("Final chips cannot be negative")
        return v

class PokerPlayerOut(BaseModel):
    id: int
    session_id: int
    user_id: int
    user_name: str | None = None
    buy_in_amount: Money
    final_chips: Money | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class PokerSessionDetail(PokerSessionOut):
    players: list[PokerPlayerOut]
