import logging
from typing import List, NamedTuple, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.vehicles.schemas import CreateVehicleRequest, VehicleSummary
from app.core.blob_store import S3BlobStore
from app.core.table_store import TableClient
from app.core.utils import normalize_filename
from app.models.enums import PartitionKey
from app.models.vehicle import Vehicle

logger = logging.getLogger(__name__)


class VehicleImage(NamedTuple):
    filename: str
    content: bytes
    content_type: Optional[str] = None


class VehicleService:
    def __init__(self, db: AsyncSession, blob_store: Optional[S3BlobStore] = None):
        self.vehicles = TableClient(db, Vehicle)
        self.blob_store = blob_store

    async def upload_image(self, image: VehicleImage) -> str:
        """Store the image under its normalized file name and return its URL."""
        name = normalize_filename(image.filename)
        url = await self.blob_store.upload(name, image.content, image.content_type)
        logger.info("Vehicle image uploaded: %s", name)
        return url

    async def register_vehicle(self, data: CreateVehicleRequest, image: Optional[VehicleImage] = None) -> Vehicle:
        image_url = ""
        if image is not None:
            image_url = await self.upload_image(image)

        vehicle = Vehicle(
            partition_key=PartitionKey.vehicle.value,
            row_key=data.plate,
            brand=data.brand,
            model=data.model,
            year=data.year,
            daily_rate=data.daily_rate,
            image_url=image_url,
            available=data.available,
        )
        await self.vehicles.create_entity(vehicle)
        logger.info("Vehicle registered: %s", data.plate)
        return vehicle

    async def list_available_vehicles(
        self,
        brand: Optional[str] = None,
        model: Optional[str] = None,
    ) -> List[VehicleSummary]:
        vehicles = []
        async for v in self.vehicles.list_entities(available=True):
            if brand and v.brand != brand:
                continue
            if model and v.model != model:
                continue
            vehicles.append(
                VehicleSummary(
                    brand=v.brand,
                    model=v.model,
                    year=v.year,
                    image_url=v.image_url,
                    plate=v.row_key,
                    daily_rate=v.daily_rate,
                    available=v.available,
                )
            )
        return vehicles

    async def list_brands(self) -> List[str]:
        # dict keeps first-seen order while dropping duplicates
        brands = {}
        async for v in self.vehicles.list_entities():
            if v.brand:
                brands[v.brand] = None
        return list(brands)

    async def list_models(self, brand: str) -> List[str]:
        models = {}
        async for v in self.vehicles.list_entities():
            if v.brand == brand and v.model:
                models[v.model] = None
        return list(models)
