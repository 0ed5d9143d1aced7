from pydantic import BaseModel
from app.schemas.common import Money

class Settlement(BaseModel):
    from_user_id: int
    from_name: str | None
    to_user_id: int
    to_name: str | None
    amount: Money

class NetBalance(BaseModel):
    user_id: int
    user_name: str | None
    net_amount: Money

class MonthlySettlementOut(BaseModel):
    month: int
    year: int
    balances: list[NetBalance]
    settlements: list[Settlement]
    unsettled: list[NetBalance]

class PokerRecommendationsOut(BaseModel):
    session_id: int
    settlements: list[Settlement]
    unsettled: list[NetBalance]
    chip_discrepancy: Money
