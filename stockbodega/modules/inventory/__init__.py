# stockbodega/modules/inventory/__init__.py
"""
Módulo de Inventario - Saldos por Bodega

Este módulo mantiene el saldo de cada producto en cada bodega:
- Lectura y escritura del saldo (repository.py)
- Protocolo de ajuste entrada/salida con validación de stock (adjustment.py)
- Exclusión mutua por bodega x producto (locks.py)
- Consultas de inventario por bodega y por producto

Arquitectura:
- router.py: Endpoints de consulta
- service.py: Ajuste de saldos y consultas
- repository.py: Acceso a datos de saldos
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import StockAdjustmentService, InventoryService
from .repository import BalanceRepository
from .locks import balance_locks

__all__ = [
    "router",
    "StockAdjustmentService",
    "InventoryService",
    "BalanceRepository",
    "balance_locks"
]
