import logging
from typing import List

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from app.api.v1.deps import get_user_service, require_roles, ANY_ROLE, STAFF
from app.db.models.user_model import UserRole
from app.schemas.user_schema import (
    UserCreate,
    UserUpdate,
    UserOut,
    EmailUpdate,
    PasswordUpdate,
    PhoneNumberUpdate,
    RoleUpdate,
    Page,
)
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])

EDITORS = (UserRole.ROLE_MODERATOR, UserRole.ROLE_USER)


@router.get("/", response_model=List[UserOut], dependencies=[Depends(require_roles(*STAFF))])
async def get_users(user_service: UserService = Depends(get_user_service)):
    logger.info("Getting all users ...")
    return await user_service.get_all()


@router.get("/filter", response_model=Page[UserOut], dependencies=[Depends(require_roles(*STAFF))])
async def filter_users(
        page: int = Query(0, ge=0),
        size: int = Query(10, gt=0, le=100),
        sort: str = Query("asc"),
        user_service: UserService = Depends(get_user_service),
):
    logger.info("Filtering users ...")
    return await user_service.filter(page, size, sort)


@router.get("/{user_id}", response_model=UserOut, dependencies=[Depends(require_roles(*ANY_ROLE))])
async def get_user_by_id(user_id: int, user_service: UserService = Depends(get_user_service)):
    logger.info(f"Getting user id: {user_id} ...")
    return await user_service.get_by_id(user_id)


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(user_in: UserCreate, user_service: UserService = Depends(get_user_service)):
    logger.info(f"Creating user: {user_in.name} ...")
    return await user_service.create(user_in)


@router.patch("/{user_id}", response_model=UserOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(require_roles(*EDITORS))])
async def update_user(user_id: int, body: UserUpdate, user_service: UserService = Depends(get_user_service)):
    logger.info(f"Updating user id: {user_id} ...")
    return await user_service.update(user_id, body.email, body.password, body.phone_number)


@router.patch("/{user_id}/avatar", response_model=UserOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(require_roles(*EDITORS))])
async def upload_avatar(
        user_id: int,
        avatar: UploadFile = File(...),
        user_service: UserService = Depends(get_user_service),
):
    logger.info(f"Uploading user avatar id: {user_id} ...")
    data = await avatar.read()
    return await user_service.upload_avatar(user_id, avatar.filename, avatar.content_type, data)


@router.patch("/{user_id}/email", response_model=UserOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(require_roles(*EDITORS))])
async def update_email(user_id: int, body: EmailUpdate, user_service: UserService = Depends(get_user_service)):
    logger.info(f"Updating user email id: {user_id} ...")
    return await user_service.update_email(user_id, body.email)


@router.patch("/{user_id}/password", response_model=UserOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(require_roles(*EDITORS))])
async def update_password(user_id: int, body: PasswordUpdate,
                          user_service: UserService = Depends(get_user_service)):
    logger.info(f"Updating user password id: {user_id} ...")
    return await user_service.update_password(user_id, body.password)


@router.patch("/{user_id}/role", response_model=UserOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(require_roles(UserRole.ROLE_ADMIN))])
async def update_role(user_id: int, body: RoleUpdate, user_service: UserService = Depends(get_user_service)):
    logger.info(f"Updating user role id: {user_id} ...")
    return await user_service.update_role(user_id, body.user_role)


@router.patch("/{user_id}/status", response_model=UserOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(require_roles(*STAFF))])
async def update_status(user_id: int, user_service: UserService = Depends(get_user_service)):
    logger.info(f"Updating user state id: {user_id} ...")
    return await user_service.toggle_status(user_id)


@router.patch("/{user_id}/visibility", response_model=UserOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(require_roles(*ANY_ROLE))])
async def update_visibility(user_id: int, user_service: UserService = Depends(get_user_service)):
    logger.info(f"Updating user visibility id: {user_id} ...")
    return await user_service.toggle_visibility(user_id)


@router.patch("/{user_id}/phone-number", response_model=UserOut, status_code=status.HTTP_202_ACCEPTED,
              dependencies=[Depends(require_roles(*EDITORS))])
async def update_phone_number(user_id: int, body: PhoneNumberUpdate,
                              user_service: UserService = Depends(get_user_service)):
    logger.info(f"Updating user phone number id: {user_id} ...")
    return await user_service.update_phone_number(user_id, body.phone_number)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_roles(UserRole.ROLE_ADMIN))])
async def delete_user(user_id: int, user_service: UserService = Depends(get_user_service)):
    logger.info(f"Deleting user by id: {user_id} ...")
    await user_service.delete(user_id)
