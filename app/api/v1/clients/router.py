from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.clients.schemas import ClientRecord, CreateClientRequest, UpdateClientRequest
from app.api.v1.clients.service import ClientService
from app.api.v1.schemas import ErrorResponse, SuccessResponse
from app.core.deps import get_db

router = APIRouter()


@router.post(
    "",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    summary="Register a client",
)
async def create_client(
    client_data: CreateClientRequest,
    db: AsyncSession = Depends(get_db),
):
    await ClientService(db).create_client(client_data)
    return SuccessResponse()


@router.get(
    "",
    response_model=List[ClientRecord],
    summary="List all clients",
    description="Return every client record as stored, including its partition and row keys.",
)
async def get_clients(db: AsyncSession = Depends(get_db)):
    clients = await ClientService(db).get_all_clients()
    return [ClientRecord.model_validate(c) for c in clients]


@router.put(
    "/{client_id}",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    summary="Update a client",
    description="Merge the given fields into an existing client; fields not sent are left untouched.",
)
async def update_client(
    client_id: str,
    client_data: UpdateClientRequest,
    db: AsyncSession = Depends(get_db),
):
    await ClientService(db).update_client(client_id, client_data)
    return SuccessResponse()


@router.delete(
    "/{client_id}",
    response_model=SuccessResponse,
    summary="Delete a client",
    description="Delete a client. Refused while the client has an active rental.",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
async def delete_client(client_id: str, db: AsyncSession = Depends(get_db)):
    await ClientService(db).delete_client(client_id)
    return SuccessResponse(mensagem="Cliente excluído com sucesso")
