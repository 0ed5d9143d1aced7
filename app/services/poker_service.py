import logging
from datetime import date
from decimal import Decimal
from typing import List, Tuple

from fastapi import HTTPException
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.settlement import ParticipantBalance
from app.core.utils import ZERO, qround, to_decimal
from app.models.poker_player import PokerPlayer
from app.models.poker_session import PokerSession
from app.models.user import User
from app.schemas.poker import PokerSessionCreate, PokerPlayerCreate, FinalChipsUpdate
from app.services.user_queries import get_user_by_id

logger = logging.getLogger("wager_ledger.services.poker")


async def get_session_or_404(db: AsyncSession, session_id: int) -> PokerSession:
    session = await db.get(PokerSession, session_id)

    if not session:
        raise HTTPException(404, "Session not found")

    return session


async def create_session(db: AsyncSession, data: PokerSessionCreate):
    session = PokerSession(
        session_name=data.session_name,
        session_date=data.session_date or date.today(),
    )

    db.add(session)
    await db.commit()
    await db.refresh(session)

    logger.info("Created poker session %s (%s)", session.id, session.session_name)
    return session


async def list_sessions(db: AsyncSession):
    q = (
        select(
            PokerSession,
            func.count(PokerPlayer.id).label("player_count"),
            func.coalesce(func.sum(PokerPlayer.buy_in_amount), 0).label("total_buyins"),
        )
        .outerjoin(PokerPlayer, PokerPlayer.session_id == PokerSession.id)
        .group_by(PokerSession.id)
        .order_by(PokerSession.session_date.desc(), PokerSession.created_at.desc(), PokerSession.id.desc())
    )

    res = await db.execute(q)

    return [
        {
            "id": s.id,
            "session_name": s.session_name,
            "session_date": s.session_date,
            "created_at": s.created_at,
            "player_count": player_count,
            "total_buyins": qround(to_decimal(total_buyins)),
        }
        for s, player_count, total_buyins in res.all()
    ]


async def _players_with_names(db: AsyncSession, session_id: int, *criteria):
    q = (
        select(PokerPlayer, User.name.label("user_name"))
        .join(User, User.id == PokerPlayer.user_id)
        .where(PokerPlayer.session_id == session_id, *criteria)
        .order_by(PokerPlayer.created_at, PokerPlayer.id)
    )

    res = await db.execute(q)
    return res.all()


def _serialize_player(player: PokerPlayer, user_name: str):
    return {
        "id": player.id,
        "session_id": player.session_id,
        "user_id": player.user_id,
        "user_name": user_name,
        "buy_in_amount": player.buy_in_amount,
        "final_chips": player.final_chips,
        "created_at": player.created_at,
    }


async def get_session_detail(db: AsyncSession, session: PokerSession):
    rows = await _players_with_names(db, session.id)

    return {
        "id": session.id,
        "session_name": session.session_name,
        "session_date": session.session_date,
        "created_at": session.created_at,
        "players": [_serialize_player(p, name) for p, name in rows],
    }


async def add_player(db: AsyncSession, session_id: int, data: PokerPlayerCreate):
    await get_session_or_404(db, session_id)

    user = await get_user_by_id(db, data.user_id)
    if not user:
        raise HTTPException(404, "User not found")

    player = PokerPlayer(
        session_id=session_id,
        user_id=data.user_id,
        buy_in_amount=data.buy_in_amount,
    )

    db.add(player)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(409, "User is already a player in this session")

    await db.refresh(player)

    logger.info("Added user %s to session %s with buy-in %s", user.id, session_id, player.buy_in_amount)
    return _serialize_player(player, user.name)


async def update_final_chips(db: AsyncSession, session_id: int, player_id: int, data: FinalChipsUpdate):
    q = select(PokerPlayer).where(
        PokerPlayer.session_id == session_id,
        PokerPlayer.id == player_id,
    )
    player = await db.scalar(q)

    if not player:
        raise HTTPException(404, "Player not found in session")

    player.final_chips = data.final_chips
    await db.commit()
    await db.refresh(player)

    user = await get_user_by_id(db, player.user_id)
    return _serialize_player(player, user.name if user else None)


async def get_session_net_balances(
    db: AsyncSession,
    session_id: int,
) -> Tuple[List[ParticipantBalance], Decimal]:
    """
    net = final_chips - buy_in, for players whose final count is recorded.
    Players still at the table are left out entirely rather than counted as
    zero. Also returns the chip discrepancy (final chips minus buy-ins over
    the counted players); anything but zero means chips went missing.
    """
    rows = await _players_with_names(db, session_id, PokerPlayer.final_chips.is_not(None))

    balances = []
    discrepancy = ZERO

    for player, user_name in rows:
        net = qround(to_decimal(player.final_chips) - to_decimal(player.buy_in_amount))
        discrepancy += net
        balances.append(ParticipantBalance(player.user_id, user_name, net))

    return balances, qround(discrepancy)
