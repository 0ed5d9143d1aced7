from pydantic import BaseModel, field_validator
from datetime import datetime
from app.schemas.common import Money

class UserCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("Valid name is required")
        return v

class UserOut(BaseModel):
    id: int
    name: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class UserBalanceOut(BaseModel):
    id: int
    name: str
    balance: Money
