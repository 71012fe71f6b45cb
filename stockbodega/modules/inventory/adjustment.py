# stockbodega/modules/inventory/adjustment.py
"""
Protocolo de ajuste de saldo (entrada / salida).

Funciones puras: reciben el saldo actual y devuelven el saldo nuevo, sin
tocar la base de datos. La lectura y escritura del saldo las hace
StockAdjustmentService alrededor de compute_adjustment().

Unidades completas y fraccionadas son ejes independientes: un monto
fraccionado ausente o cero nunca valida ni modifica el eje fraccionado.
"""
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from stockbodega.core.exceptions import InsufficientStockError, InvalidOperationError


class AdjustmentDirection(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class BalanceKey(NamedTuple):
    warehouse_id: int
    product_id: int


@dataclass(frozen=True)
class BalanceValues:
    quantity: int = 0
    fractional_quantity: int = 0

    @classmethod
    def from_record(cls, record) -> "BalanceValues":
        """Un saldo inexistente equivale a cero"""
        if record is None:
            return cls()
        return cls(
            quantity=record.quantity or 0,
            fractional_quantity=record.fractional_quantity or 0
        )


def compute_adjustment(
    key: BalanceKey,
    current: BalanceValues,
    direction: AdjustmentDirection,
    amount: int,
    fractional_amount: Optional[int] = None,
    fractionable: bool = False
) -> BalanceValues:
    """
    Calcular el saldo resultante de un crédito o débito.

    Raises:
        InsufficientStockError: débito mayor al saldo (entero o fraccionado)
        InvalidOperationError: montos negativos o fracción en producto no fraccionable
    """
    if amount < 0 or (fractional_amount or 0) < 0:
        raise InvalidOperationError(
            "Las cantidades de un ajuste no pueden ser negativas",
            details={"amount": amount, "fractional_amount": fractional_amount}
        )
    if fractional_amount and not fractionable:
        raise InvalidOperationError(
            f"El producto {key.product_id} no es fraccionable",
            details={"product_id": key.product_id, "fractional_amount": fractional_amount}
        )

    fraction = fractional_amount or 0

    if direction == AdjustmentDirection.CREDIT:
        return BalanceValues(
            quantity=current.quantity + amount,
            fractional_quantity=current.fractional_quantity + fraction
        )

    if current.quantity < amount or (fraction and current.fractional_quantity < fraction):
        raise InsufficientStockError(
            warehouse_id=key.warehouse_id,
            product_id=key.product_id,
            available=current.quantity,
            requested=amount,
            available_fractional=current.fractional_quantity,
            requested_fractional=fractional_amount
        )

    return BalanceValues(
        quantity=current.quantity - amount,
        fractional_quantity=current.fractional_quantity - fraction
    )
