# stockbodega/modules/transfers/schemas.py
from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import date as date_type, datetime

from stockbodega.shared.schemas.common import BaseResponse
from stockbodega.modules.inventory.schemas import BalanceItem

class TransferCreate(BaseModel):
    product_id: int = Field(..., gt=0, description="ID del producto")
    origin_warehouse_id: int = Field(..., gt=0, description="Bodega de origen")
    destination_warehouse_id: int = Field(..., gt=0, description="Bodega de destino")
    quantity: int = Field(..., gt=0, description="Cantidad a transferir")
    fractional_quantity: Optional[int] = Field(None, ge=0, description="Cantidad fraccionada (solo productos fraccionables)")
    date: date_type = Field(default_factory=date_type.today, description="Fecha de la transferencia")
    notes: Optional[str] = Field(None, max_length=500, description="Notas adicionales")

    @validator('destination_warehouse_id')
    def validate_destination(cls, v, values):
        """Origen y destino deben ser bodegas distintas"""
        if v == values.get('origin_warehouse_id'):
            raise ValueError('La bodega destino debe ser distinta a la bodega origen')
        return v

    @validator('notes')
    def validate_notes(cls, v):
        if v is None:
            return v
        return v.strip() or None

class TransferRecord(BaseModel):
    id: int
    product_id: int
    origin_warehouse_id: int
    destination_warehouse_id: int
    quantity: int
    fractional_quantity: Optional[int] = None
    date: date_type
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    product_name: Optional[str] = None
    origin_warehouse_name: Optional[str] = None
    destination_warehouse_name: Optional[str] = None

class TransferResponse(BaseResponse):
    transfer: TransferRecord
    origin_balance: BalanceItem
    destination_balance: BalanceItem

class TransferListResponse(BaseResponse):
    transfers: List[TransferRecord]
    total: int
