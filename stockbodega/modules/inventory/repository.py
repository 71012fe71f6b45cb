# stockbodega/modules/inventory/repository.py
from typing import List, Optional
import logging

from stockbodega.shared.database.models import WarehouseBalance
from stockbodega.shared.database.record_store import RecordStore

logger = logging.getLogger(__name__)

class BalanceRepository:
    """Lectura y escritura del saldo de una bodega x producto, sin validaciones"""

    TABLE = "warehouse_balances"

    def __init__(self, store: RecordStore):
        self.store = store

    def get_balance(
        self,
        warehouse_id: int,
        product_id: int,
        for_update: bool = False
    ) -> Optional[WarehouseBalance]:
        """None significa saldo cero, no es un error"""
        return self.store.find_one(
            self.TABLE,
            {"warehouse_id": warehouse_id, "product_id": product_id},
            for_update=for_update
        )

    def upsert_balance(
        self,
        warehouse_id: int,
        product_id: int,
        quantity: int,
        fractional_quantity: int
    ) -> WarehouseBalance:
        """Actualizar el saldo o crearlo si es el primer movimiento del par"""
        balance = self.get_balance(warehouse_id, product_id)
        values = {"quantity": quantity, "fractional_quantity": fractional_quantity}

        if balance is None:
            logger.info(f"Creando saldo bodega={warehouse_id} producto={product_id}")
            return self.store.insert(self.TABLE, {
                "warehouse_id": warehouse_id,
                "product_id": product_id,
                **values
            })

        return self.store.update(self.TABLE, balance.id, values)

    def get_balances_by_warehouse(self, warehouse_id: int) -> List[WarehouseBalance]:
        return self.store.find(self.TABLE, {"warehouse_id": warehouse_id}, order_by="product_id")

    def get_balances_by_product(self, product_id: int) -> List[WarehouseBalance]:
        return self.store.find(self.TABLE, {"product_id": product_id}, order_by="warehouse_id")
