from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Numeric, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.session import Base

class Bet(Base):
    __tablename__ = "bets"
    __table_args__ = (
        CheckConstraint("user_id <> opponent_id", name="ck_bets_distinct_users"),
        CheckConstraint("amount > 0", name="ck_bets_positive_amount"),
        CheckConstraint("outcome IN ('won', 'lost', 'pending')", name="ck_bets_outcome"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    opponent_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    wager_type = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    bet_date = Column(Date, nullable=False, index=True)
    outcome = Column(String, nullable=False, server_default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", foreign_keys=[user_id])
    opponent = relationship("User", foreign_keys=[opponent_id])
