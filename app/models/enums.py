from enum import Enum


class RentalStatus(str, Enum):
    active = "ativa"
    cancelled = "cancelada"


class PartitionKey(str, Enum):
    """Fixed partition group of each collection."""
    vehicle = "Veiculo"
    client = "Cliente"
    rental = "Locacao"


# Stored on a rental when its vehicle could not be found at creation time
MISSING_VEHICLE_PLACEHOLDER = "---"
