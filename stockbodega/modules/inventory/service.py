# stockbodega/modules/inventory/service.py
from typing import Optional
import logging

from stockbodega.shared.database.models import Product, Warehouse, WarehouseBalance
from stockbodega.shared.database.record_store import RecordStore
from stockbodega.shared.schemas.common import ProductInfo, WarehouseInfo

from .adjustment import AdjustmentDirection, BalanceKey, BalanceValues, compute_adjustment
from .repository import BalanceRepository
from .schemas import (
    BalanceItem, BalanceResponse, WarehouseInventoryItem,
    WarehouseInventoryResponse, ProductDistributionResponse
)

logger = logging.getLogger(__name__)


def product_info(product: Product) -> ProductInfo:
    return ProductInfo(
        product_id=product.id,
        name=product.name,
        fractionable=bool(product.fractionable),
        units_per_package=product.units_per_package
    )


def warehouse_info(warehouse: Warehouse) -> WarehouseInfo:
    return WarehouseInfo(warehouse_id=warehouse.id, name=warehouse.name, city=warehouse.city)


def balance_item(balance: WarehouseBalance) -> BalanceItem:
    return BalanceItem(
        warehouse_id=balance.warehouse_id,
        product_id=balance.product_id,
        quantity=balance.quantity,
        fractional_quantity=balance.fractional_quantity or 0,
        updated_at=balance.updated_at
    )


class StockAdjustmentService:
    """
    Leer-validar-escribir de un saldo.

    No hace commit ni toma locks: el orquestador (kardex o transferencias)
    mantiene el lock de la clave y el límite de la transacción.
    """

    def __init__(self, store: RecordStore):
        self.store = store
        self.balances = BalanceRepository(store)

    def adjust(
        self,
        warehouse_id: int,
        product_id: int,
        direction: AdjustmentDirection,
        amount: int,
        fractional_amount: Optional[int] = None,
        fractionable: bool = False
    ) -> WarehouseBalance:
        key = BalanceKey(warehouse_id, product_id)
        current_record = self.balances.get_balance(warehouse_id, product_id, for_update=True)
        current = BalanceValues.from_record(current_record)

        # Lanza InsufficientStockError antes de cualquier escritura
        new_values = compute_adjustment(
            key, current, direction, amount,
            fractional_amount=fractional_amount,
            fractionable=fractionable
        )

        logger.info(
            f"Saldo bodega={warehouse_id} producto={product_id} {direction.value}: "
            f"{current.quantity}/{current.fractional_quantity} -> "
            f"{new_values.quantity}/{new_values.fractional_quantity}"
        )
        return self.balances.upsert_balance(
            warehouse_id, product_id,
            new_values.quantity, new_values.fractional_quantity
        )

    def credit(self, warehouse_id: int, product_id: int, amount: int,
               fractional_amount: Optional[int] = None, fractionable: bool = False) -> WarehouseBalance:
        return self.adjust(warehouse_id, product_id, AdjustmentDirection.CREDIT,
                           amount, fractional_amount, fractionable)

    def debit(self, warehouse_id: int, product_id: int, amount: int,
              fractional_amount: Optional[int] = None, fractionable: bool = False) -> WarehouseBalance:
        return self.adjust(warehouse_id, product_id, AdjustmentDirection.DEBIT,
                           amount, fractional_amount, fractionable)


class InventoryService:
    """Consultas de saldos por bodega y por producto"""

    def __init__(self, store: RecordStore):
        self.store = store
        self.balances = BalanceRepository(store)

    def get_balance(self, warehouse_id: int, product_id: int) -> BalanceResponse:
        self.store.get("warehouses", warehouse_id)
        self.store.get("products", product_id)

        balance = self.balances.get_balance(warehouse_id, product_id)
        if balance is None:
            item = BalanceItem(warehouse_id=warehouse_id, product_id=product_id, quantity=0)
        else:
            item = balance_item(balance)

        return BalanceResponse(
            success=True,
            message="Saldo consultado",
            balance=item,
            exists=balance is not None
        )

    def get_warehouse_inventory(self, warehouse_id: int) -> WarehouseInventoryResponse:
        warehouse = self.store.get("warehouses", warehouse_id)
        balances = self.balances.get_balances_by_warehouse(warehouse_id)

        items = [
            WarehouseInventoryItem(
                **balance_item(balance).model_dump(),
                product=product_info(balance.product)
            )
            for balance in balances
        ]

        return WarehouseInventoryResponse(
            success=True,
            message=f"Inventario de bodega '{warehouse.name}'",
            warehouse=warehouse_info(warehouse),
            items=items,
            total_items=len(items)
        )

    def get_product_distribution(self, product_id: int) -> ProductDistributionResponse:
        product = self.store.get("products", product_id)
        balances = [balance_item(b) for b in self.balances.get_balances_by_product(product_id)]

        return ProductDistributionResponse(
            success=True,
            message=f"Distribución de '{product.name}' por bodega",
            product=product_info(product),
            balances=balances,
            total_quantity=sum(b.quantity for b in balances),
            total_fractional_quantity=sum(b.fractional_quantity for b in balances)
        )
