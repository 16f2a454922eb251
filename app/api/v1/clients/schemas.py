from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field


class CreateClientRequest(BaseModel):
    name: Optional[str] = Field(None, alias="nome")
    email: Optional[str] = Field(None, alias="email")
    phone: Optional[str] = Field(None, alias="telefone")

    class Config:
        populate_by_name = True


class UpdateClientRequest(BaseModel):
    """Only the fields present in the request body are written."""
    name: Optional[str] = Field(None, alias="nome")
    email: Optional[str] = Field(None, alias="email")
    phone: Optional[str] = Field(None, alias="telefone")

    class Config:
        populate_by_name = True


class ClientRecord(BaseModel):
    partition_key: str = Field(..., alias="partitionKey")
    row_key: str = Field(..., alias="rowKey")
    name: Optional[str] = Field(None, alias="nome")
    email: Optional[str] = None
    phone: Optional[str] = Field(None, alias="telefone")
    timestamp: Optional[datetime] = None

    class Config:
        populate_by_name = True
        from_attributes = True
