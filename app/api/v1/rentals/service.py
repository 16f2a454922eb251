"""
Rental lifecycle: creating and cancelling rentals, and the joined view of
active rentals.

Vehicle availability follows the rentals that reference it. The rental and
the vehicle live in different tables and are written one after the other,
so a failure between the two writes leaves them out of step; nothing rolls
the first write back.
"""
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.rentals.schemas import (
    ActiveRentalResponse,
    CreateRentalRequest,
    RentalClient,
    RentedVehicle,
)
from app.core.exceptions import EntityNotFoundError, ValidationError
from app.core.table_store import TableClient, UpdateMode
from app.core.utils import new_row_key
from app.models.client import Client
from app.models.enums import MISSING_VEHICLE_PLACEHOLDER, PartitionKey, RentalStatus
from app.models.rental import Rental
from app.models.vehicle import Vehicle

logger = logging.getLogger(__name__)


class RentalService:
    def __init__(self, db: AsyncSession):
        self.vehicles = TableClient(db, Vehicle)
        self.clients = TableClient(db, Client)
        self.rentals = TableClient(db, Rental)

    async def _find_vehicle(self, plate: Optional[str]) -> Optional[Vehicle]:
        if not plate:
            return None
        try:
            return await self.vehicles.get_entity(PartitionKey.vehicle.value, plate)
        except EntityNotFoundError as e:
            logger.info("Vehicle not found: %s (%s)", plate, e.message)
            return None

    async def _find_client(self, client_id: Optional[str]) -> Optional[Client]:
        if not client_id:
            return None
        try:
            return await self.clients.get_entity(PartitionKey.client.value, client_id)
        except EntityNotFoundError:
            logger.info("Client not found: %s", client_id)
            return None

    async def _set_vehicle_available(self, vehicle: Vehicle, available: bool) -> None:
        await self.vehicles.update_entity(
            {
                "partition_key": vehicle.partition_key,
                "row_key": vehicle.row_key,
                "available": available,
            },
            UpdateMode.merge,
        )

    async def create_rental(self, data: CreateRentalRequest) -> Rental:
        if not data.vehicle_plate or not data.client_id:
            raise ValidationError("Campos obrigatórios ausentes.")

        # An unknown plate does not block the rental; it is stored with placeholders
        vehicle = await self._find_vehicle(data.vehicle_plate)

        rental = Rental(
            partition_key=PartitionKey.rental.value,
            row_key=new_row_key(),
            vehicle_plate=data.vehicle_plate,
            brand=(vehicle.brand if vehicle else None) or MISSING_VEHICLE_PLACEHOLDER,
            model=(vehicle.model if vehicle else None) or MISSING_VEHICLE_PLACEHOLDER,
            client_id=data.client_id,
            start_date=data.start_date,
            end_date=data.end_date,
            total_value=data.value,
            status=RentalStatus.active.value,
        )
        await self.rentals.create_entity(rental)
        logger.info("Rental %s created for vehicle %s", rental.row_key, data.vehicle_plate)

        if vehicle is not None:
            await self._set_vehicle_available(vehicle, False)
        return rental

    async def cancel_rental(self, rental_id: Optional[str]) -> Rental:
        """
        Mark a rental cancelled and release its vehicle.

        Cancelling an already cancelled rental is accepted and releases the
        vehicle again. A rental whose vehicle no longer exists is still
        cancelled.
        """
        rental = await self.rentals.get_entity(PartitionKey.rental.value, rental_id)
        rental = await self.rentals.update_entity(
            {
                "partition_key": rental.partition_key,
                "row_key": rental.row_key,
                "status": RentalStatus.cancelled.value,
            },
            UpdateMode.merge,
        )

        if rental.vehicle_plate:
            vehicle = await self._find_vehicle(rental.vehicle_plate)
            if vehicle is None:
                logger.warning("Vehicle %s of rental %s not found on cancellation", rental.vehicle_plate, rental_id)
            else:
                await self._set_vehicle_available(vehicle, True)
        return rental

    async def get_active_rentals(self) -> List[ActiveRentalResponse]:
        active = []
        async for rental in self.rentals.list_entities():
            if rental.status != RentalStatus.active.value:
                continue
            vehicle = await self._find_vehicle(rental.vehicle_plate)
            client = await self._find_client(rental.client_id)
            active.append(
                ActiveRentalResponse(
                    id=rental.row_key,
                    start_date=rental.start_date,
                    end_date=rental.end_date,
                    status=rental.status,
                    total_value=rental.total_value,
                    vehicle=RentedVehicle(
                        brand=vehicle.brand,
                        model=vehicle.model,
                        year=vehicle.year,
                        daily_rate=vehicle.daily_rate,
                        image_url=vehicle.image_url,
                        plate=vehicle.row_key,
                    ) if vehicle else None,
                    client=RentalClient(
                        name=client.name,
                        email=client.email,
                        phone=client.phone,
                        id=client.row_key,
                    ) if client else None,
                )
            )
        return active
