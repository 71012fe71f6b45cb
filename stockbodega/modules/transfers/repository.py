# stockbodega/modules/transfers/repository.py
from typing import Any, Dict, List

from stockbodega.shared.database.models import WarehouseTransfer
from stockbodega.shared.database.record_store import RecordStore

class TransfersRepository:
    TABLE = "warehouse_transfers"

    def __init__(self, store: RecordStore):
        self.store = store

    def create_transfer(self, transfer_data: Dict[str, Any]) -> WarehouseTransfer:
        """Insertar el registro de auditoría de la transferencia (sin commit)"""
        return self.store.insert(self.TABLE, {
            "product_id": transfer_data['product_id'],
            "origin_warehouse_id": transfer_data['origin_warehouse_id'],
            "destination_warehouse_id": transfer_data['destination_warehouse_id'],
            "quantity": transfer_data['quantity'],
            "fractional_quantity": transfer_data.get('fractional_quantity') or None,
            "date": transfer_data['date'],
            "notes": transfer_data.get('notes')
        })

    def get_transfers(self) -> List[WarehouseTransfer]:
        """Transferencias de la más reciente a la más antigua"""
        return self.store.find(self.TABLE, order_by="date", descending=True)
