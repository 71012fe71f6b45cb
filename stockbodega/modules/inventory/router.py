# stockbodega/modules/inventory/router.py
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from stockbodega.config.database import get_db
from stockbodega.shared.database.record_store import RecordStore
from .service import InventoryService
from .schemas import BalanceResponse, WarehouseInventoryResponse, ProductDistributionResponse

router = APIRouter()

@router.get("/warehouses/{warehouse_id}", response_model=WarehouseInventoryResponse)
def get_warehouse_inventory(
    warehouse_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    """
    Inventario de una bodega

    **Incluye por producto:**
    - Cantidad en unidades completas
    - Cantidad fraccionada (solo relevante en productos fraccionables)
    - Unidades por empaque
    """
    service = InventoryService(RecordStore(db))
    return service.get_warehouse_inventory(warehouse_id)

@router.get("/warehouses/{warehouse_id}/products/{product_id}", response_model=BalanceResponse)
def get_balance(
    warehouse_id: int = Path(..., gt=0),
    product_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    """Saldo de un producto en una bodega; sin movimientos se reporta en cero"""
    service = InventoryService(RecordStore(db))
    return service.get_balance(warehouse_id, product_id)

@router.get("/products/{product_id}", response_model=ProductDistributionResponse)
def get_product_distribution(
    product_id: int = Path(..., gt=0),
    db: Session = Depends(get_db)
):
    """Saldos de un producto en todas las bodegas con el total consolidado"""
    service = InventoryService(RecordStore(db))
    return service.get_product_distribution(product_id)

@router.get("/health")
def inventory_health():
    """Health check del módulo de inventario"""
    return {
        "service": "inventory",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "Saldos por bodega",
            "Saldos fraccionados",
            "Distribución por producto"
        ]
    }
