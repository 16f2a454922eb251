from fastapi import APIRouter

from app.api.v1.health import router as health_router
from app.api.v1.vehicles.router import router as vehicles_router
from app.api.v1.clients.router import router as clients_router
from app.api.v1.rentals.router import router as rentals_router

api_router = APIRouter()
api_router.include_router(health_router, prefix="/health", tags=["health"])
# Vehicle routes span /veiculos, /marcas, /modelos and /upload-veiculo, so they carry full paths
api_router.include_router(vehicles_router, tags=["vehicles"])
api_router.include_router(clients_router, prefix="/clientes", tags=["clients"])
api_router.include_router(rentals_router, tags=["rentals"])
