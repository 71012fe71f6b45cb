# stockbodega/modules/inventory/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from stockbodega.shared.schemas.common import BaseResponse, ProductInfo, WarehouseInfo

class BalanceItem(BaseModel):
    warehouse_id: int
    product_id: int
    quantity: int = Field(..., ge=0)
    fractional_quantity: int = Field(0, ge=0)
    updated_at: Optional[datetime] = None

class WarehouseInventoryItem(BalanceItem):
    product: ProductInfo

class BalanceResponse(BaseResponse):
    balance: BalanceItem
    exists: bool = Field(..., description="False si el par aún no tiene movimientos (saldo cero)")

class WarehouseInventoryResponse(BaseResponse):
    warehouse: WarehouseInfo
    items: List[WarehouseInventoryItem]
    total_items: int

class ProductDistributionResponse(BaseResponse):
    product: ProductInfo
    balances: List[BalanceItem]
    total_quantity: int
    total_fractional_quantity: int
