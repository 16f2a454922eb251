from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.schemas import SuccessResponse
from app.api.v1.vehicles.schemas import CreateVehicleRequest, ImageUploadResponse, VehicleSummary
from app.api.v1.vehicles.service import VehicleImage, VehicleService
from app.core.blob_store import S3BlobStore
from app.core.deps import get_blob_store, get_db
from app.core.exceptions import StoreFailure

router = APIRouter()


async def _read_image(image: Optional[UploadFile]) -> Optional[VehicleImage]:
    if image is None or not image.filename:
        return None
    content = await image.read()
    return VehicleImage(filename=image.filename, content=content, content_type=image.content_type)


@router.post(
    "/upload-veiculo",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Upload a vehicle image",
    description="Upload an image file to the blob store and return its URL. The file name is normalized before upload.",
)
async def upload_vehicle_image(
    image_file: Optional[UploadFile] = File(None, alias="imagem", description="Vehicle image"),
    db: AsyncSession = Depends(get_db),
    blob_store: S3BlobStore = Depends(get_blob_store),
):
    image = await _read_image(image_file)
    if image is None:
        raise StoreFailure("Nenhuma imagem enviada.")
    url = await VehicleService(db, blob_store).upload_image(image)
    return ImageUploadResponse(url=url)


@router.post(
    "/veiculos",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    summary="Register a vehicle",
    description="Register a vehicle from multipart form data, with an optional image uploaded to the blob store.",
)
async def create_vehicle(
    brand: str = Form(..., alias="marca"),
    model: str = Form(..., alias="modelo"),
    year: int = Form(..., alias="ano"),
    plate: str = Form(..., alias="placa"),
    daily_rate: float = Form(..., alias="precoDiaria"),
    available: Optional[str] = Form(None, alias="disponivel", description="'true' marks the vehicle as available"),
    image_file: Optional[UploadFile] = File(None, alias="imagem", description="Vehicle image"),
    db: AsyncSession = Depends(get_db),
    blob_store: S3BlobStore = Depends(get_blob_store),
):
    vehicle_data = CreateVehicleRequest(
        plate=plate,
        brand=brand,
        model=model,
        year=year,
        daily_rate=daily_rate,
        available=available == "true",
    )
    image = await _read_image(image_file)
    await VehicleService(db, blob_store).register_vehicle(vehicle_data, image)
    return SuccessResponse()


@router.get(
    "/veiculos/disponiveis",
    response_model=List[VehicleSummary],
    summary="List available vehicles",
    description="List vehicles marked available, optionally narrowed to a brand and/or model.",
)
async def get_available_vehicles(
    brand: Optional[str] = Query(None, alias="marca", description="Filter by brand"),
    model: Optional[str] = Query(None, alias="modelo", description="Filter by model"),
    db: AsyncSession = Depends(get_db),
):
    return await VehicleService(db).list_available_vehicles(brand=brand, model=model)


@router.get("/modelos/{brand}", response_model=List[str], summary="Distinct models of a brand")
async def get_models(brand: str, db: AsyncSession = Depends(get_db)):
    return await VehicleService(db).list_models(brand)


@router.get("/marcas", response_model=List[str], summary="Distinct vehicle brands")
async def get_brands(db: AsyncSession = Depends(get_db)):
    return await VehicleService(db).list_brands()
