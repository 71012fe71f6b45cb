# stockbodega/modules/transfers/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockbodega.config.database import get_db
from stockbodega.shared.database.record_store import RecordStore
from .service import TransfersService
from .schemas import TransferCreate, TransferResponse, TransferListResponse

router = APIRouter()

@router.post("", response_model=TransferResponse, status_code=201)
def create_transfer(
    transfer_data: TransferCreate,
    db: Session = Depends(get_db)
):
    """
    Transferir stock de una bodega a otra

    **Proceso:**
    - Valida producto y bodegas
    - Descuenta en la bodega origen (valida stock)
    - Suma en la bodega destino
    - Registro y saldos se confirman juntos o no se confirma nada
    """
    service = TransfersService(RecordStore(db))
    return service.record_transfer(transfer_data)

@router.get("", response_model=TransferListResponse)
def list_transfers(db: Session = Depends(get_db)):
    """Transferencias ordenadas por fecha descendente"""
    service = TransfersService(RecordStore(db))
    return service.list_transfers()

@router.get("/health")
def transfers_health():
    """Health check del módulo de transferencias"""
    return {
        "service": "transfers",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "Transferencias entre bodegas",
            "Débito en origen y crédito en destino atómicos",
            "Cantidades fraccionadas"
        ]
    }
