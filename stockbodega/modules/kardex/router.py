# stockbodega/modules/kardex/router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stockbodega.config.database import get_db
from stockbodega.shared.database.record_store import RecordStore
from .service import KardexService
from .schemas import MovementCreate, MovementResponse, MovementListResponse

router = APIRouter()

@router.post("/movements", response_model=MovementResponse, status_code=201)
def create_movement(
    movement_data: MovementCreate,
    db: Session = Depends(get_db)
):
    """
    Registrar movimiento de kardex (entrada o salida)

    **Proceso:**
    - Valida producto, bodega y empleado
    - Valida cantidad fraccionada solo para productos fraccionables
    - Registra el movimiento y actualiza el saldo en una sola transacción
    - Una salida sin stock suficiente no deja rastro
    """
    service = KardexService(RecordStore(db))
    return service.record_movement(movement_data)

@router.get("/movements", response_model=MovementListResponse)
def list_movements(
    warehouse_id: Optional[int] = Query(None, gt=0, description="Filtrar por bodega"),
    db: Session = Depends(get_db)
):
    """Movimientos ordenados por fecha descendente"""
    service = KardexService(RecordStore(db))
    return service.list_movements(warehouse_id)

@router.get("/health")
def kardex_health():
    """Health check del módulo de kardex"""
    return {
        "service": "kardex",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "Entradas y salidas por bodega",
            "Cantidades fraccionadas",
            "Validación de stock",
            "Transacción única movimiento + saldo"
        ]
    }
