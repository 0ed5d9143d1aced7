from datetime import date
from decimal import Decimal
from typing import Dict, List

from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.settlement import ParticipantBalance
from app.core.utils import ZERO, qround, to_decimal
from app.models.bet import Bet
from app.models.user import User


def month_bounds(month: int, year: int):
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


async def _net_by_user(db: AsyncSession, *criteria) -> Dict[int, Decimal]:
    """
    Net result per user over settled bets.

        bettor   won  -> +amount     opponent of won  -> -amount
        bettor   lost -> -amount     opponent of lost -> +amount

    Pending bets never count.
    """
    signed = case(
        (Bet.outcome == "won", Bet.amount),
        (Bet.outcome == "lost", -Bet.amount),
        else_=0,
    )

    bettor_q = (
        select(Bet.user_id.label("uid"), func.coalesce(func.sum(signed), 0).label("net"))
        .where(Bet.outcome != "pending", *criteria)
        .group_by(Bet.user_id)
    )

    opponent_q = (
        select(Bet.opponent_id.label("uid"), func.coalesce(func.sum(signed), 0).label("net"))
        .where(Bet.outcome != "pending", *criteria)
        .group_by(Bet.opponent_id)
    )

    net: Dict[int, Decimal] = {}

    for row in (await db.execute(bettor_q)):
        net[row.uid] = net.get(row.uid, ZERO) + to_decimal(row.net)

    for row in (await db.execute(opponent_q)):
        net[row.uid] = net.get(row.uid, ZERO) - to_decimal(row.net)

    # amounts are stored in cents; sums coming back as floats carry noise
    return {uid: qround(amount) for uid, amount in net.items()}


async def get_user_balances(db: AsyncSession):
    """All-time balance for every user, including users with no bets."""
    net = await _net_by_user(db)

    users = (await db.execute(select(User).order_by(User.name))).scalars().all()

    return [
        {"id": u.id, "name": u.name, "balance": net.get(u.id, qround(ZERO))}
        for u in users
    ]


async def get_monthly_net_balances(
    db: AsyncSession,
    month: int,
    year: int,
) -> List[ParticipantBalance]:
    start, end = month_bounds(month, year)
    net = await _net_by_user(db, Bet.bet_date >= start, Bet.bet_date < end)

    ids = [uid for uid, amount in net.items() if amount != 0]
    if not ids:
        return []

    res = await db.execute(select(User.id, User.name).where(User.id.in_(ids)))
    names = {row.id: row.name for row in res}

    balances = [ParticipantBalance(uid, names.get(uid), net[uid]) for uid in ids]
    balances.sort(key=lambda b: (-b.net_amount, b.display_name or "", b.participant_id))

    return balances
