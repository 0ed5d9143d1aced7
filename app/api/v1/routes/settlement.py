from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.dependencies import get_db, month_query
from app.schemas.settlements import MonthlySettlementOut
from app.services.settlement_service import monthly_settlement

router = APIRouter()


@router.get("/monthly", response_model=MonthlySettlementOut)
async def get_monthly_settlement(
    period: tuple[int, int] = Depends(month_query),
    db: AsyncSession = Depends(get_db),
):
    month, year = period
    return await monthly_settlement(db, month, year)
