from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.dependencies import get_db, valid_session
from app.models.poker_session import PokerSession
from app.schemas.bet import BetOut
from app.schemas.poker import (
    PokerSessionCreate,
    PokerSessionOut,
    PokerSessionSummary,
    PokerSessionDetail,
    PokerPlayerCreate,
    PokerPlayerOut,
    FinalChipsUpdate,
)
from app.schemas.settlements import PokerRecommendationsOut
from app.services.poker_service import (
    create_session,
    list_sessions,
    get_session_detail,
    add_player,
    update_final_chips,
)
from app.services.settlement_service import poker_recommendations, record_poker_settlements

router = APIRouter()


@router.post("/sessions", response_model=PokerSessionOut, status_code=201)
async def new_session(data: PokerSessionCreate, db: AsyncSession = Depends(get_db)):
    return await create_session(db, data)


@router.get("/sessions", response_model=list[PokerSessionSummary])
async def all_sessions(db: AsyncSession = Depends(get_db)):
    return await list_sessions(db)


@router.get("/sessions/{session_id}", response_model=PokerSessionDetail)
async def session_detail(
    session: PokerSession = Depends(valid_session),
    db: AsyncSession = Depends(get_db),
):
    return await get_session_detail(db, session)


@router.post("/sessions/{session_id}/players", response_model=PokerPlayerOut, status_code=201)
async def add_session_player(session_id: int, data: PokerPlayerCreate, db: AsyncSession = Depends(get_db)):
    return await add_player(db, session_id, data)


@router.put("/sessions/{session_id}/players/{player_id}", response_model=PokerPlayerOut)
async def set_final_chips(
    session_id: int,
    player_id: int,
    data: FinalChipsUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await update_final_chips(db, session_id, player_id, data)


@router.get("/sessions/{session_id}/recommendations", response_model=PokerRecommendationsOut)
async def recommendations(session_id: int, db: AsyncSession = Depends(get_db)):
    return await poker_recommendations(db, session_id)


@router.post("/sessions/{session_id}/recommendations/record", response_model=list[BetOut], status_code=201)
async def record_recommendations(session_id: int, db: AsyncSession = Depends(get_db)):
    return await record_poker_settlements(db, session_id)
