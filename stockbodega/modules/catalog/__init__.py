# stockbodega/modules/catalog/__init__.py
"""
Módulo de Catálogo - Datos Maestros

Categorías, productos, personal, bodegas y datos de la empresa.
Todo el acceso a datos pasa por RecordStore.

Arquitectura:
- router.py: Endpoints CRUD
- service.py: Validaciones y transacciones
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import CatalogService

__all__ = [
    "router",
    "CatalogService"
]
