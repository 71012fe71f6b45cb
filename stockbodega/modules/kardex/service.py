# stockbodega/modules/kardex/service.py
from typing import Optional
import logging

from stockbodega.core.exceptions import (
    InsufficientStockError, InvalidOperationError, StoreError
)
from stockbodega.shared.database.models import InventoryMovement
from stockbodega.shared.database.record_store import RecordStore
from stockbodega.modules.inventory.adjustment import AdjustmentDirection, BalanceKey
from stockbodega.modules.inventory.locks import BalanceLockRegistry, balance_locks
from stockbodega.modules.inventory.service import StockAdjustmentService, balance_item

from .repository import KardexRepository
from .schemas import (
    MovementCreate, MovementType, MovementRecord, MovementResponse, MovementListResponse
)

logger = logging.getLogger(__name__)

DIRECTION_BY_TYPE = {
    MovementType.ENTRADA: AdjustmentDirection.CREDIT,
    MovementType.SALIDA: AdjustmentDirection.DEBIT,
}


def movement_record(movement: InventoryMovement) -> MovementRecord:
    return MovementRecord(
        id=movement.id,
        product_id=movement.product_id,
        warehouse_id=movement.warehouse_id,
        type=movement.type,
        quantity=movement.quantity,
        fractional_quantity=movement.fractional_quantity,
        date=movement.date,
        employee_id=movement.employee_id,
        notes=movement.notes,
        created_at=movement.created_at,
        product_name=movement.product.name if movement.product else None,
        warehouse_name=movement.warehouse.name if movement.warehouse else None,
        employee_name=movement.employee.name if movement.employee else None
    )


class KardexService:
    def __init__(self, store: RecordStore, locks: Optional[BalanceLockRegistry] = None):
        self.store = store
        self.repository = KardexRepository(store)
        self.adjuster = StockAdjustmentService(store)
        self.locks = locks or balance_locks

    def record_movement(self, movement_data: MovementCreate) -> MovementResponse:
        """
        Registrar entrada o salida y actualizar el saldo de la bodega.

        Registro de auditoría y saldo se escriben en una sola transacción
        bajo el lock de (bodega, producto): si la salida no tiene stock no
        queda ni movimiento ni saldo modificado.

        Raises:
            NotFoundError: producto, bodega o empleado inexistente
            InvalidOperationError: cantidad fraccionada en producto no fraccionable
            InsufficientStockError: salida mayor al saldo
            StoreError: fallo de base de datos
        """
        logger.info(
            f"📦 Movimiento {movement_data.type.value} - Bodega: {movement_data.warehouse_id}, "
            f"Producto: {movement_data.product_id}, Cantidad: {movement_data.quantity}, "
            f"Fraccionada: {movement_data.fractional_quantity}"
        )

        product = self.store.get("products", movement_data.product_id)
        self.store.get("warehouses", movement_data.warehouse_id)
        self.store.get("employees", movement_data.employee_id)

        if movement_data.fractional_quantity and not product.fractionable:
            raise InvalidOperationError(
                f"El producto '{product.name}' no es fraccionable",
                details={"product_id": product.id, "fractional_quantity": movement_data.fractional_quantity}
            )

        key = BalanceKey(movement_data.warehouse_id, movement_data.product_id)

        with self.locks.hold(key):
            try:
                with self.store.transaction():
                    movement = self.repository.create_movement(movement_data.dict())
                    balance = self.adjuster.adjust(
                        key.warehouse_id,
                        key.product_id,
                        DIRECTION_BY_TYPE[movement_data.type],
                        movement_data.quantity,
                        fractional_amount=movement_data.fractional_quantity,
                        fractionable=bool(product.fractionable)
                    )
            except InsufficientStockError as e:
                logger.warning(f"❌ Movimiento rechazado: {e.message}")
                raise
            except StoreError:
                logger.exception("❌ Error de base de datos registrando movimiento")
                raise

        logger.info(f"✅ Movimiento #{movement.id} registrado - Saldo: {balance.quantity}/{balance.fractional_quantity}")

        return MovementResponse(
            success=True,
            message=f"Movimiento de {movement_data.type.value} registrado",
            movement=movement_record(movement),
            balance=balance_item(balance)
        )

    def list_movements(self, warehouse_id: Optional[int] = None) -> MovementListResponse:
        if warehouse_id:
            self.store.get("warehouses", warehouse_id)

        movements = [movement_record(m) for m in self.repository.get_movements(warehouse_id)]

        return MovementListResponse(
            success=True,
            message="Movimientos del kardex",
            movements=movements,
            total=len(movements),
            warehouse_id=warehouse_id
        )
