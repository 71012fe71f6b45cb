# stockbodega/modules/kardex/repository.py
from typing import Any, Dict, List, Optional

from stockbodega.shared.database.models import InventoryMovement
from stockbodega.shared.database.record_store import RecordStore
from .schemas import MovementType

class KardexRepository:
    TABLE = "inventory_movements"

    def __init__(self, store: RecordStore):
        self.store = store

    def create_movement(self, movement_data: Dict[str, Any]) -> InventoryMovement:
        """Insertar el registro de auditoría (sin commit)"""
        return self.store.insert(self.TABLE, {
            "product_id": movement_data['product_id'],
            "warehouse_id": movement_data['warehouse_id'],
            "type": MovementType(movement_data['type']).value,
            "quantity": movement_data['quantity'],
            "fractional_quantity": movement_data.get('fractional_quantity') or None,
            "date": movement_data['date'],
            "employee_id": movement_data['employee_id'],
            "notes": movement_data.get('notes')
        })

    def get_movements(self, warehouse_id: Optional[int] = None) -> List[InventoryMovement]:
        """Movimientos del más reciente al más antiguo"""
        filters = {"warehouse_id": warehouse_id} if warehouse_id else {}
        return self.store.find(self.TABLE, filters, order_by="date", descending=True)
