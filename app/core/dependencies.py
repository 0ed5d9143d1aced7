from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import async_session
from app.services.poker_service import get_session_or_404

async def get_db():
    async with async_session() as session:
        yield session

async def valid_session(session_id: int, db: AsyncSession = Depends(get_db)):
    return await get_session_or_404(db, session_id)

def month_query(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900, le=9999),
):
    return month, year
