# stockbodega/modules/transfers/__init__.py
"""
Módulo de Transferencias - Movimiento de Stock entre Bodegas

Arquitectura:
- router.py: Endpoints de transferencias
- service.py: Orquestación registro + débito origen + crédito destino
- repository.py: Acceso a datos de transferencias
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import TransfersService
from .repository import TransfersRepository

__all__ = [
    "router",
    "TransfersService",
    "TransfersRepository"
]
