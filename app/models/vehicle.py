from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String

from app.core.database import Base
from app.models.enums import PartitionKey


class Vehicle(Base):
    __tablename__ = "vehicles"

    partition_key = Column(String(64), primary_key=True, default=PartitionKey.vehicle.value)
    # license plate
    row_key = Column(String(64), primary_key=True)
    brand = Column(String, nullable=True, index=True)
    model = Column(String, nullable=True)
    year = Column(Integer, nullable=True)
    daily_rate = Column(Float, nullable=True)
    image_url = Column(String, nullable=True, default="")
    available = Column(Boolean, nullable=False, default=False, index=True)
    timestamp = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
