# stockbodega/modules/kardex/schemas.py
from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import date as date_type, datetime
from enum import Enum

from stockbodega.shared.schemas.common import BaseResponse
from stockbodega.modules.inventory.schemas import BalanceItem

class MovementType(str, Enum):
    ENTRADA = "entrada"
    SALIDA = "salida"

class MovementCreate(BaseModel):
    product_id: int = Field(..., gt=0, description="ID del producto")
    warehouse_id: int = Field(..., gt=0, description="ID de la bodega")
    type: MovementType = Field(..., description="Tipo: entrada o salida")
    quantity: int = Field(..., gt=0, description="Cantidad en unidades completas")
    fractional_quantity: Optional[int] = Field(None, ge=0, description="Cantidad fraccionada (solo productos fraccionables)")
    date: date_type = Field(default_factory=date_type.today, description="Fecha del movimiento")
    employee_id: int = Field(..., gt=0, description="Empleado que registra")
    notes: Optional[str] = Field(None, max_length=500, description="Notas adicionales")

    @validator('notes')
    def validate_notes(cls, v):
        if v is None:
            return v
        return v.strip() or None

class MovementRecord(BaseModel):
    id: int
    product_id: int
    warehouse_id: int
    type: MovementType
    quantity: int
    fractional_quantity: Optional[int] = None
    date: date_type
    employee_id: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    product_name: Optional[str] = None
    warehouse_name: Optional[str] = None
    employee_name: Optional[str] = None

class MovementResponse(BaseResponse):
    movement: MovementRecord
    balance: BalanceItem

class MovementListResponse(BaseResponse):
    movements: List[MovementRecord]
    total: int
    warehouse_id: Optional[int] = None
