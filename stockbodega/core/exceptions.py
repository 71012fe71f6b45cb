# stockbodega/core/exceptions.py
from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from stockbodega.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class StockBodegaError(Exception):
    """Error base del dominio de inventario"""
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INVENTORY_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(StockBodegaError):
    """Registro referenciado que no existe (producto, bodega, empleado...)"""
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, table: str, record_id: Any):
        super().__init__(
            f"No existe el registro {record_id} en '{table}'",
            details={"table": table, "id": record_id}
        )
        self.table = table
        self.record_id = record_id


class InsufficientStockError(StockBodegaError):
    """La bodega no tiene saldo suficiente para la salida solicitada"""
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INSUFFICIENT_STOCK"

    def __init__(
        self,
        warehouse_id: int,
        product_id: int,
        available: int,
        requested: int,
        available_fractional: int = 0,
        requested_fractional: Optional[int] = None
    ):
        message = (
            f"Stock insuficiente en bodega {warehouse_id} para producto {product_id}. "
            f"Disponible: {available}, Solicitado: {requested}"
        )
        if requested_fractional:
            message += (
                f" (fraccionado disponible: {available_fractional}, "
                f"solicitado: {requested_fractional})"
            )
        super().__init__(message, details={
            "warehouse_id": warehouse_id,
            "product_id": product_id,
            "available": available,
            "requested": requested,
            "available_fractional": available_fractional,
            "requested_fractional": requested_fractional
        })
        self.warehouse_id = warehouse_id
        self.product_id = product_id
        self.available = available
        self.requested = requested
        self.available_fractional = available_fractional
        self.requested_fractional = requested_fractional


class InvalidOperationError(StockBodegaError):
    """Validación entre entidades que no puede expresar el schema"""
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INVALID_OPERATION"


class StoreError(StockBodegaError):
    """Fallo de persistencia o de conexión con la base de datos"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "STORE_ERROR"


def register_exception_handlers(app: FastAPI) -> None:
    """Traducir errores de dominio a ErrorResponse"""

    @app.exception_handler(StockBodegaError)
    async def handle_domain_error(request: Request, exc: StockBodegaError):
        if isinstance(exc, StoreError):
            logger.error(f"{request.method} {request.url.path} - Error de persistencia: {exc.message}")
        body = ErrorResponse(
            message=exc.message,
            error_code=exc.error_code,
            details=exc.details or None
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(mode="json")
        )
