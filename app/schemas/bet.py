from pydantic import BaseModel, field_validator, model_validator
from typing import Literal
from datetime import date, datetime
from decimal import Decimal
from app.schemas.common import Money

Outcome = Literal["won", "lost", "pending"]

class BetCreate(BaseModel):
    user_id: int
    opponent_id: int
    wager_type: str
    amount: Decimal
    bet_date: date
    outcome: Outcome = "pending"

    @field_validator("wager_type")
    @classmethod
    def wager_type_not_blank(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("Wager type is required")
        return v

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, v: Decimal):
        if not v.is_finite() or v <= 0:
            raise ValueError("Amount must be a positive number")
        return v

    @model_validator(mode="after")
    def distinct_users(self):
        if self.user_id == self.opponent_id:
            raise ValueError("Bettor and opponent cannot be the same person")
        return self

class BetOut(BaseModel):
    id: int
    user_id: int
    opponent_id: int
    user_name: str | None = None
    opponent_name: str | None = None
    wager_type: str
    amount: Money
    bet_date: date
    outcome: Outcome
    created_at: datetime | None = None

    class Config:
        from_attributes = True
