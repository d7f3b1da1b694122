"""REST controller for manufacturers."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_manufacturer_service
from src.services import ManufacturerService

router = APIRouter(prefix="/manufacturers", tags=["manufacturers"])


@router.get("")
async def get_all_manufacturers(
    service: ManufacturerService = Depends(get_manufacturer_service),
) -> list:
    manufacturers = await service.list_manufacturers()
    return [manufacturer.to_dict() for manufacturer in manufacturers]
