import logging
from typing import List, Dict, Any

from fastapi import APIRouter, Depends, Query, status

from app.api.v1.deps import get_card_service, get_current_user, require_roles, STAFF
from app.schemas.card_schema import CardOut, CardCreate, CardRefill, CardTypeUpdate
from app.schemas.user_schema import Page
from app.services.card_service import CardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cards", tags=["cards"])


@router.get("/", response_model=List[CardOut], dependencies=[Depends(require_roles(*STAFF))])
async def get_cards(card_service: CardService = Depends(get_card_service)):
    logger.info("Getting all cards ...")
    return await card_service.get_all()


@router.get("/filter", response_model=Page[CardOut], dependencies=[Depends(require_roles(*STAFF))])
async def filter_cards(
    page: int = Query(0, ge=0),
    size: int = Query(10, gt=0, le=100),
    sort: str = Query("asc"),
    card_service: CardService = Depends(get_card_service),
):
    logger.info("Filtering cards ...")
    return await card_service.filter(page, size, sort)


@router.get("/my", response_model=List[CardOut])
async def list_user_cards(
    current_user: Dict[str, Any] = Depends(get_current_user),
    card_service: CardService = Depends(get_card_service),
):
    return await card_service.list_for_user(current_user["id"])


@router.get("/number/{card_number}", response_model=CardOut, dependencies=[Depends(require_roles(*STAFF))])
async def get_card_by_number(card_number: str, card_service: CardService = Depends(get_card_service)):
    logger.info("Getting card by number ...")
    return await card_service.get_by_number(card_number)


@router.get("/{card_id}", response_model=CardOut, dependencies=[Depends(get_current_user)])
async def get_card_by_id(card_id: int, card_service: CardService = Depends(get_card_service)):
    logger.info(f"Getting card id: {card_id} ...")
    return await card_service.get_by_id(card_id)


@router.post("/", response_model=CardOut, status_code=status.HTTP_201_CREATED)
async def create_card(
    body: CardCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    card_service: CardService = Depends(get_card_service),
):
    logger.info(f"Creating card for user id: {current_user['id']} ...")
    return await card_service.create_card(current_user["id"], body.currency, body.type)


@router.patch("/{card_id}/refill", response_model=CardOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(get_current_user)])
async def refill_card(card_id: int, body: CardRefill, card_service: CardService = Depends(get_card_service)):
    logger.info(f"Refilling card id: {card_id} ...")
    return await card_service.refill(card_id, body.pin, body.amount)


@router.patch("/{card_id}/status", response_model=CardOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(get_current_user)])
async def update_card_status(card_id: int, card_service: CardService = Depends(get_card_service)):
    logger.info(f"Updating card status id: {card_id} ...")
    return await card_service.toggle_status(card_id)


@router.patch("/{card_id}/type", response_model=CardOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(get_current_user)])
async def update_card_type(card_id: int, body: CardTypeUpdate,
                           card_service: CardService = Depends(get_card_service)):
    logger.info(f"Updating card type id: {card_id} ...")
    return await card_service.change_type(card_id, body.type)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(
    card_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    card_service: CardService = Depends(get_card_service),
):
    logger.info(f"Deleting card id: {card_id} ...")
    await card_service.delete(card_id, current_user["id"])
