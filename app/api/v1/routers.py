# app/api/v1/routers.py
from fastapi import APIRouter
from app.api.v1.endpoints import auth, cards, currency, messages, transfers, users

router = APIRouter()

router.include_router(auth.router)
router.include_router(users.router)
router.include_router(cards.router)
router.include_router(currency.router)
router.include_router(messages.router)
router.include_router(transfers.router)
