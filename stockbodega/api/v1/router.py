# stockbodega/api/v1/router.py
from fastapi import APIRouter
from stockbodega.modules.catalog.router import router as catalog_router
from stockbodega.modules.inventory.router import router as inventory_router
from stockbodega.modules.kardex.router import router as kardex_router
from stockbodega.modules.transfers.router import router as transfers_router


# Crear router principal de la API v1
api_router = APIRouter()

api_router.include_router(
    catalog_router,
    prefix="/catalog",
    tags=["Catalog"]
)

api_router.include_router(
    inventory_router,
    prefix="/inventory",
    tags=["Inventory"]
)

api_router.include_router(
    kardex_router,
    prefix="/kardex",
    tags=["Kardex"]
)

api_router.include_router(
    transfers_router,
    prefix="/transfers",
    tags=["Transfers"]
)

@api_router.get("/")
async def api_info():
    """Información de la API v1"""
    return {
        "message": "StockBodega API v1",
        "modules": {
            "catalog": "/api/v1/catalog",
            "inventory": "/api/v1/inventory",
            "kardex": "/api/v1/kardex",
            "transfers": "/api/v1/transfers"
        }
    }
