from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.dependencies import get_db
from app.schemas.bet import BetCreate, BetOut
from app.services.bet_service import list_bets, create_bet, get_bet_with_names, delete_bet

router = APIRouter()

@router.get("", response_model=list[BetOut])
async def all_bets(db: AsyncSession = Depends(get_db)):
    return await list_bets(db)

@router.post("", response_model=BetOut, status_code=201)
async def add_bet(data: BetCreate, db: AsyncSession = Depends(get_db)):
    bet = await create_bet(db, data)
    return await get_bet_with_names(db, bet.id)

@router.delete("/{bet_id}")
async def del_bet(bet_id: int, db: AsyncSession = Depends(get_db)):
    return await delete_bet(db, bet_id)
