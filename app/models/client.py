from datetime import datetime

from sqlalchemy import Column, DateTime, String

from app.core.database import Base
from app.models.enums import PartitionKey


class Client(Base):
    __tablename__ = "clients"

    partition_key = Column(String(64), primary_key=True, default=PartitionKey.client.value)
    row_key = Column(String(64), primary_key=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    timestamp = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
