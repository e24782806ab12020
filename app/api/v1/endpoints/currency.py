import logging
from typing import List

from fastapi import APIRouter, Depends

from app.api.v1.deps import get_currency_service, get_current_user
from app.schemas.currency_schema import CurrencyDataOut
from app.services.currency_service import CurrencyDataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/currency-data", tags=["currency"], dependencies=[Depends(get_current_user)])


@router.get("/", response_model=List[CurrencyDataOut])
async def update_and_fetch_all(currency_service: CurrencyDataService = Depends(get_currency_service)):
    logger.info("Updating currency data ...")
    await currency_service.refresh()
    return await currency_service.find_all()


@router.get("/{currency}", response_model=CurrencyDataOut)
async def find_by_currency(currency: str, currency_service: CurrencyDataService = Depends(get_currency_service)):
    logger.info(f"Getting currency {currency} ...")
    return await currency_service.find(currency)
