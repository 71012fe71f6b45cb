# stockbodega/modules/kardex/__init__.py
"""
Módulo de Kardex - Movimientos de Inventario

Este módulo registra entradas y salidas de productos por bodega:
- Registro de auditoría del movimiento
- Actualización atómica del saldo de la bodega
- Consulta de movimientos por bodega

Arquitectura:
- router.py: Endpoints de movimientos
- service.py: Orquestación movimiento + ajuste de saldo
- repository.py: Acceso a datos de movimientos
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import KardexService
from .repository import KardexRepository

__all__ = [
    "router",
    "KardexService",
    "KardexRepository"
]
