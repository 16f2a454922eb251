from typing import Optional

from pydantic import BaseModel, Field


class CreateRentalRequest(BaseModel):
    vehicle_plate: Optional[str] = Field(None, alias="placaVeiculo")
    client_id: Optional[str] = Field(None, alias="clienteId")
    start_date: Optional[str] = Field(None, alias="dataInicio")
    end_date: Optional[str] = Field(None, alias="dataFim")
    value: Optional[float] = Field(None, alias="valor", description="Total value of the rental")

    class Config:
        populate_by_name = True


class CancelRentalRequest(BaseModel):
    rental_id: Optional[str] = Field(None, alias="locacaoId")

    class Config:
        populate_by_name = True


class RentedVehicle(BaseModel):
    brand: Optional[str] = Field(None, alias="marca")
    model: Optional[str] = Field(None, alias="modelo")
    year: Optional[int] = Field(None, alias="ano")
    daily_rate: Optional[float] = Field(None, alias="precoDiaria")
    image_url: Optional[str] = Field(None, alias="urlImagem")
    plate: str = Field(..., alias="placa")

    class Config:
        populate_by_name = True


class RentalClient(BaseModel):
    name: Optional[str] = Field(None, alias="nome")
    email: Optional[str] = None
    phone: Optional[str] = Field(None, alias="telefone")
    id: str

    class Config:
        populate_by_name = True


class ActiveRentalResponse(BaseModel):
    """An active rental joined with the current state of its vehicle and client."""
    id: str
    start_date: Optional[str] = Field(None, alias="dataInicio")
    end_date: Optional[str] = Field(None, alias="dataFim")
    status: str
    total_value: Optional[float] = Field(None, alias="valorTotal")
    vehicle: Optional[RentedVehicle] = Field(None, alias="veiculo")
    client: Optional[RentalClient] = Field(None, alias="cliente")

    class Config:
        populate_by_name = True
