from sqlalchemy import Column, ForeignKey, Integer, Numeric, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.db.session import Base

class PokerPlayer(Base):
    __tablename__ = "poker_players"
    __table_args__ = (
        UniqueConstraint("session_id", "user_id", name="uq_poker_player_session_user"),
    )

    id = Column(Integer, primary_key=True, index=True)

    session_id = Column(Integer, ForeignKey("poker_sessions.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    buy_in_amount = Column(Numeric(12, 2), nullable=False)
    final_chips = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    session = relationship("PokerSession", back_populates="players")
    user = relationship("User")
