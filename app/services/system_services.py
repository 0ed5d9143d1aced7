from app.db.session import engine
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.user import User
from app.models.bet import Bet
from app.models.poker_session import PokerSession

async def check_db_service():
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return {"db": True, "message":"Database is connected"}
    except Exception as e:
        return {"db": False, "error": str(e)}
    
async def system_health():
    return {
        "status": "ok"
    }

async def system_metrics(db: AsyncSession):
    users_q = select(func.count(User.id))
    bets_q = select(func.count(Bet.id))
    pending_q = select(func.count(Bet.id)).where(Bet.outcome == "pending")
    sessions_q = select(func.count(PokerSession.id))

    return {
        "users": await db.scalar(users_q),
        "bets": await db.scalar(bets_q),
        "pending_bets": await db.scalar(pending_q),
        "poker_sessions": await db.scalar(sessions_q)
    }
