import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from fastapi.security import OAuth2PasswordRequestForm

from app.api.v1.deps import get_auth_service, get_current_user
from app.core.security import token_lifetime
from app.schemas.auth_schema import Token
from app.schemas.user_schema import UserOut
from app.services.auth_services import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/auth/token", response_model=Token)
async def login(form_data: OAuth2PasswordRequestForm = Depends(),
                auth_svc: AuthService = Depends(get_auth_service)):
    user = await auth_svc.login(form_data.username, form_data.password)
    logger.info(f"User {user['id']} logged in")
    token = auth_svc.create_token_for_user(user)
    return Token(
        access_token=token,
        token_type="bearer",
        expires_in=int(token_lifetime().total_seconds()),
    )


@router.get("/auth/me", response_model=UserOut)
async def read_current_user(current_user: dict = Depends(get_current_user)):
    return current_user


@router.api_route("/logout", methods=["GET", "POST"])
async def logout(current_user: dict = Depends(get_current_user),
                 auth_svc: AuthService = Depends(get_auth_service)):
    await auth_svc.logout(current_user)
    logger.info(f"User {current_user['id']} logged out")
    return RedirectResponse(url="/login", status_code=status.HTTP_302_FOUND)
