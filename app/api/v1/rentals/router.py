from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.rentals.schemas import ActiveRentalResponse, CancelRentalRequest, CreateRentalRequest
from app.api.v1.rentals.service import RentalService
from app.api.v1.schemas import ErrorResponse, SuccessResponse
from app.core.deps import get_db

router = APIRouter()


@router.post(
    "/locacoes",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    summary="Create a rental",
    description="Create an active rental and mark its vehicle unavailable. An unknown plate is accepted with placeholder brand/model.",
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def create_rental(
    rental_data: CreateRentalRequest,
    db: AsyncSession = Depends(get_db),
):
    await RentalService(db).create_rental(rental_data)
    return SuccessResponse()


@router.post(
    "/cancelar-locacao",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    summary="Cancel a rental",
    description="Mark a rental cancelled and make its vehicle available again.",
)
async def cancel_rental(
    cancel_data: CancelRentalRequest,
    db: AsyncSession = Depends(get_db),
):
    await RentalService(db).cancel_rental(cancel_data.rental_id)
    return SuccessResponse()


@router.get(
    "/veiculos/alugados",
    response_model=List[ActiveRentalResponse],
    summary="List active rentals",
    description="Active rentals with the current data of their vehicle and client (null when missing).",
)
async def get_rented_vehicles(db: AsyncSession = Depends(get_db)):
    return await RentalService(db).get_active_rentals()
