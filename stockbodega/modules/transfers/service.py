# stockbodega/modules/transfers/service.py
from typing import Optional
import logging

from stockbodega.core.exceptions import (
    InsufficientStockError, InvalidOperationError, StoreError
)
from stockbodega.shared.database.models import WarehouseTransfer
from stockbodega.shared.database.record_store import RecordStore
from stockbodega.modules.inventory.adjustment import AdjustmentDirection, BalanceKey
from stockbodega.modules.inventory.locks import BalanceLockRegistry, balance_locks
from stockbodega.modules.inventory.service import StockAdjustmentService, balance_item

from .repository import TransfersRepository
from .schemas import TransferCreate, TransferRecord, TransferResponse, TransferListResponse

logger = logging.getLogger(__name__)


def transfer_record(transfer: WarehouseTransfer) -> TransferRecord:
    return TransferRecord(
        id=transfer.id,
        product_id=transfer.product_id,
        origin_warehouse_id=transfer.origin_warehouse_id,
        destination_warehouse_id=transfer.destination_warehouse_id,
        quantity=transfer.quantity,
        fractional_quantity=transfer.fractional_quantity,
        date=transfer.date,
        notes=transfer.notes,
        created_at=transfer.created_at,
        product_name=transfer.product.name if transfer.product else None,
        origin_warehouse_name=transfer.origin_warehouse.name if transfer.origin_warehouse else None,
        destination_warehouse_name=transfer.destination_warehouse.name if transfer.destination_warehouse else None
    )


class TransfersService:
    def __init__(self, store: RecordStore, locks: Optional[BalanceLockRegistry] = None):
        self.store = store
        self.repository = TransfersRepository(store)
        self.adjuster = StockAdjustmentService(store)
        self.locks = locks or balance_locks

    def record_transfer(self, transfer_data: TransferCreate) -> TransferResponse:
        """
        Transferir stock entre bodegas.

        Una sola unidad lógica: registro de transferencia, débito en origen
        y crédito en destino (en ese orden) se confirman con un único
        commit mientras se mantienen los locks de ambas claves. Si el
        origen no tiene stock no se escribe nada.

        Raises:
            NotFoundError: producto o bodega inexistente
            InvalidOperationError: cantidad fraccionada en producto no fraccionable
            InsufficientStockError: stock insuficiente en origen
            StoreError: fallo de base de datos
        """
        logger.info(
            f"🔄 Transferencia - Producto: {transfer_data.product_id}, "
            f"Origen: {transfer_data.origin_warehouse_id}, Destino: {transfer_data.destination_warehouse_id}, "
            f"Cantidad: {transfer_data.quantity}, Fraccionada: {transfer_data.fractional_quantity}"
        )

        product = self.store.get("products", transfer_data.product_id)
        origin = self.store.get("warehouses", transfer_data.origin_warehouse_id)
        destination = self.store.get("warehouses", transfer_data.destination_warehouse_id)

        if transfer_data.fractional_quantity and not product.fractionable:
            raise InvalidOperationError(
                f"El producto '{product.name}' no es fraccionable",
                details={"product_id": product.id, "fractional_quantity": transfer_data.fractional_quantity}
            )

        origin_key = BalanceKey(origin.id, product.id)
        destination_key = BalanceKey(destination.id, product.id)
        fractionable = bool(product.fractionable)

        with self.locks.hold(origin_key, destination_key):
            try:
                with self.store.transaction():
                    transfer = self.repository.create_transfer(transfer_data.dict())
                    origin_balance = self.adjuster.adjust(
                        origin_key.warehouse_id, origin_key.product_id,
                        AdjustmentDirection.DEBIT,
                        transfer_data.quantity,
                        fractional_amount=transfer_data.fractional_quantity,
                        fractionable=fractionable
                    )
                    destination_balance = self.adjuster.adjust(
                        destination_key.warehouse_id, destination_key.product_id,
                        AdjustmentDirection.CREDIT,
                        transfer_data.quantity,
                        fractional_amount=transfer_data.fractional_quantity,
                        fractionable=fractionable
                    )
            except InsufficientStockError as e:
                logger.warning(f"❌ Transferencia rechazada en '{origin.name}': {e.message}")
                raise
            except StoreError:
                logger.exception("❌ Error de base de datos registrando transferencia")
                raise

        logger.info(f"✅ Transferencia #{transfer.id} completada: {origin.name} → {destination.name}")

        return TransferResponse(
            success=True,
            message=f"Transferencia registrada: {origin.name} → {destination.name}",
            transfer=transfer_record(transfer),
            origin_balance=balance_item(origin_balance),
            destination_balance=balance_item(destination_balance)
        )

    def list_transfers(self) -> TransferListResponse:
        transfers = [transfer_record(t) for t in self.repository.get_transfers()]
        return TransferListResponse(
            success=True,
            message="Transferencias entre bodegas",
            transfers=transfers,
            total=len(transfers)
        )
