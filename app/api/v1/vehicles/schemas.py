from typing import Optional

from pydantic import BaseModel, Field


class CreateVehicleRequest(BaseModel):
    plate: str = Field(..., alias="placa", min_length=1, description="License plate, unique per vehicle")
    brand: str = Field(..., alias="marca", description="Vehicle manufacturer")
    model: str = Field(..., alias="modelo", description="Vehicle model")
    year: int = Field(..., alias="ano", description="Vehicle year")
    daily_rate: float = Field(..., alias="precoDiaria", description="Price per rental day")
    available: bool = Field(False, alias="disponivel", description="Whether the vehicle can be rented")

    class Config:
        populate_by_name = True


class VehicleSummary(BaseModel):
    brand: Optional[str] = Field(None, alias="marca")
    model: Optional[str] = Field(None, alias="modelo")
    year: Optional[int] = Field(None, alias="ano")
    image_url: Optional[str] = Field(None, alias="urlImagem")
    plate: str = Field(..., alias="placa")
    daily_rate: Optional[float] = Field(None, alias="precoDiaria")
    available: bool = Field(..., alias="disponivel")

    class Config:
        populate_by_name = True


class ImageUploadResponse(BaseModel):
    url: str
