from datetime import datetime

from sqlalchemy import Column, DateTime, Float, String

from app.core.database import Base
from app.models.enums import PartitionKey, RentalStatus


class Rental(Base):
    __tablename__ = "rentals"

    partition_key = Column(String(64), primary_key=True, default=PartitionKey.rental.value)
    row_key = Column(String(64), primary_key=True)
    # Weak references: the vehicle or client may no longer exist
    vehicle_plate = Column(String(64), nullable=True)
    client_id = Column(String(64), nullable=True)
    # Snapshot of the vehicle taken when the rental was created
    brand = Column(String, nullable=True)
    model = Column(String, nullable=True)
    start_date = Column(String, nullable=True)
    end_date = Column(String, nullable=True)
    total_value = Column(Float, nullable=True)
    status = Column(String, nullable=False, default=RentalStatus.active.value)
    timestamp = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
