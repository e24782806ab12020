import logging

from fastapi import APIRouter, Depends

from app.api.v1.deps import get_transfer_repo, require_roles, STAFF
from app.core.exceptions import NotFoundException
from app.repositories.transfer_repo import TransferRepository
from app.schemas.transfer_schema import TransferOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/transfers", tags=["transfers"], dependencies=[Depends(require_roles(*STAFF))])


@router.get("/{reference_number}", response_model=TransferOut)
async def get_transfer(reference_number: str, transfer_repo: TransferRepository = Depends(get_transfer_repo)):
    logger.info(f"Getting transfer {reference_number} ...")
    transfer = await transfer_repo.get_by_reference_number(reference_number)
    if transfer is None:
        raise NotFoundException(f"Transfer with reference number: {reference_number} not found.")
    return transfer
