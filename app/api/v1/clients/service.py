import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.clients.schemas import CreateClientRequest, UpdateClientRequest
from app.core.exceptions import ConflictError, EntityNotFoundError, NotFoundError
from app.core.table_store import TableClient, UpdateMode
from app.core.utils import new_row_key
from app.models.client import Client
from app.models.enums import PartitionKey, RentalStatus
from app.models.rental import Rental

logger = logging.getLogger(__name__)


class ClientService:
    def __init__(self, db: AsyncSession):
        self.clients = TableClient(db, Client)
        self.rentals = TableClient(db, Rental)

    async def create_client(self, data: CreateClientRequest) -> Client:
        client = Client(
            partition_key=PartitionKey.client.value,
            row_key=new_row_key(),
            name=data.name,
            email=data.email,
            phone=data.phone,
        )
        await self.clients.create_entity(client)
        logger.info("Client registered: %s", client.row_key)
        return client

    async def get_all_clients(self) -> List[Client]:
        return [c async for c in self.clients.list_entities()]

    async def update_client(self, client_id: str, data: UpdateClientRequest) -> Client:
        # A missing client surfaces as a store failure, like any other store error
        client = await self.clients.get_entity(PartitionKey.client.value, client_id)
        changes = data.model_dump(exclude_unset=True)
        return await self.clients.update_entity(
            {"partition_key": client.partition_key, "row_key": client.row_key, **changes},
            UpdateMode.merge,
        )

    async def has_active_rentals(self, client_id: str) -> bool:
        """Scan every rental; stops at the first active one for this client."""
        async for rental in self.rentals.list_entities():
            if rental.client_id == client_id and rental.status == RentalStatus.active.value:
                return True
        return False

    async def delete_client(self, client_id: str) -> None:
        try:
            await self.clients.get_entity(PartitionKey.client.value, client_id)
        except EntityNotFoundError as e:
            raise NotFoundError("Cliente não encontrado") from e

        if await self.has_active_rentals(client_id):
            raise ConflictError("Não é possível excluir cliente com locações ativas")

        await self.clients.delete_entity(PartitionKey.client.value, client_id)
        logger.info("Client deleted: %s", client_id)
