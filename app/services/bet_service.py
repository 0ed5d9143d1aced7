import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import aliased
from app.models.bet import Bet
from app.models.user import User
from app.schemas.bet import BetCreate
from fastapi import HTTPException

logger = logging.getLogger("wager_ledger.services.bets")

bettor = aliased(User)
opponent = aliased(User)


def _bets_with_names():
    return (
        select(
            Bet,
            bettor.name.label("user_name"),
            opponent.name.label("opponent_name"),
        )
        .join(bettor, bettor.id == Bet.user_id)
        .join(opponent, opponent.id == Bet.opponent_id)
    )


def _serialize(bet: Bet, user_name: str, opponent_name: str):
    return {
        "id": bet.id,
        "user_id": bet.user_id,
        "opponent_id": bet.opponent_id,
        "user_name": user_name,
        "opponent_name": opponent_name,
        "wager_type": bet.wager_type,
        "amount": bet.amount,
        "bet_date": bet.bet_date,
        "outcome": bet.outcome,
        "created_at": bet.created_at,
    }


async def list_bets(db: AsyncSession):
    q = _bets_with_names().order_by(Bet.bet_date.desc(), Bet.id.desc())
    res = await db.execute(q)
    return [_serialize(*row) for row in res.all()]


async def get_bet_with_names(db: AsyncSession, bet_id: int):
    q = _bets_with_names().where(Bet.id == bet_id).execution_options(populate_existing=True)
    res = await db.execute(q)
    row = res.first()

    if not row:
        raise HTTPException(404, "Bet not found")

    return _serialize(*row)


async def create_bet(db: AsyncSession, data: BetCreate, commit: bool = True):
    # -----------------------------------
    # 1. Both users must exist
    # -----------------------------------
    q = select(func.count(User.id)).where(User.id.in_([data.user_id, data.opponent_id]))
    found = await db.scalar(q)

    if found < 2:
        raise HTTPException(404, "One or both users not found")

    # -----------------------------------
    # 2. Create bet
    # -----------------------------------
    bet = Bet(
        user_id=data.user_id,
        opponent_id=data.opponent_id,
        wager_type=data.wager_type,
        amount=data.amount,
        bet_date=data.bet_date,
        outcome=data.outcome,
    )

    db.add(bet)
    await db.flush()  # generates bet.id

    if commit:
        await db.commit()
        logger.info(
            "Recorded bet %s: user %s vs %s for %s (%s)",
            bet.id, bet.user_id, bet.opponent_id, bet.amount, bet.outcome,
        )

    return bet


async def delete_bet(db: AsyncSession, bet_id: int):
    bet = await db.get(Bet, bet_id)

    if not bet:
        raise HTTPException(404, "Bet not found")

    await db.delete(bet)
    await db.commit()

    logger.info("Deleted bet %s", bet_id)
    return {"message": "Bet deleted successfully"}
