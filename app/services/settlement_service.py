import logging
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.settlement import ParticipantBalance, SettlementInstruction, settle
from app.core.utils import qround
from app.schemas.bet import BetCreate
from app.services.balance_service import get_monthly_net_balances
from app.services.bet_service import create_bet, get_bet_with_names
from app.services.poker_service import get_session_or_404, get_session_net_balances

logger = logging.getLogger("wager_ledger.services.settlement")


def _instruction_out(ins: SettlementInstruction):
    return {
        "from_user_id": ins.from_id,
        "from_name": ins.from_name,
        "to_user_id": ins.to_id,
        "to_name": ins.to_name,
        "amount": ins.amount,
    }


def _balance_out(b: ParticipantBalance):
    return {
        "user_id": b.participant_id,
        "user_name": b.display_name,
        "net_amount": qround(b.net_amount),
    }


async def monthly_settlement(db: AsyncSession, month: int, year: int):
    balances = await get_monthly_net_balances(db, month, year)
    result = settle(balances, settings.SETTLEMENT_EPSILON)

    if not result.balanced:
        logger.warning(
            "Monthly ledger %02d/%d does not net to zero; %d user(s) left unsettled",
            month, year, len(result.residuals),
        )

    return {
        "month": month,
        "year": year,
        "balances": [_balance_out(b) for b in balances],
        "settlements": [_instruction_out(i) for i in result.instructions],
        "unsettled": [_balance_out(r) for r in result.residuals],
    }


async def _poker_result(db: AsyncSession, session_id: int):
    await get_session_or_404(db, session_id)

    balances, discrepancy = await get_session_net_balances(db, session_id)
    if not balances:
        raise HTTPException(400, "No players with final chips found")

    result = settle(balances, settings.SETTLEMENT_EPSILON)

    if discrepancy != 0 or not result.balanced:
        logger.warning(
            "Poker session %s chip count off by %s; %d player(s) left unsettled",
            session_id, discrepancy, len(result.residuals),
        )

    return result, discrepancy


async def poker_recommendations(db: AsyncSession, session_id: int):
    result, discrepancy = await _poker_result(db, session_id)

    return {
        "session_id": session_id,
        "settlements": [_instruction_out(i) for i in result.instructions],
        "unsettled": [_balance_out(r) for r in result.residuals],
        "chip_discrepancy": discrepancy,
    }


async def record_poker_settlements(db: AsyncSession, session_id: int):
    """
    Books each recommended payment as a lost bet by the payer against the
    payee, dated on the session, so it shows up in the running balances.
    """
    session = await get_session_or_404(db, session_id)
    result, _ = await _poker_result(db, session_id)

    bets = []
    for ins in result.instructions:
        data = BetCreate(
            user_id=ins.from_id,
            opponent_id=ins.to_id,
            wager_type=f"Poker Session: {session.session_name}",
            amount=ins.amount,
            bet_date=session.session_date,
            outcome="lost",
        )
        bets.append(await create_bet(db, data, commit=False))

    await db.commit()

    logger.info("Recorded %d settlement bet(s) for poker session %s", len(bets), session_id)
    return [await get_bet_with_names(db, bet.id) for bet in bets]
