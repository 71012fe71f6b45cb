# tests/test_adjustment.py
import pytest

from stockbodega.core.exceptions import InsufficientStockError, InvalidOperationError
from stockbodega.modules.inventory.adjustment import (
    AdjustmentDirection, BalanceKey, BalanceValues, compute_adjustment
)

KEY = BalanceKey(warehouse_id=1, product_id=1)
CREDIT = AdjustmentDirection.CREDIT
DEBIT = AdjustmentDirection.DEBIT


def test_credit_on_absent_balance_starts_from_zero():
    current = BalanceValues.from_record(None)

    result = compute_adjustment(KEY, current, CREDIT, 10)

    assert result == BalanceValues(quantity=10, fractional_quantity=0)


def test_debit_larger_than_quantity_fails():
    with pytest.raises(InsufficientStockError) as exc_info:
        compute_adjustment(KEY, BalanceValues(quantity=5), DEBIT, 10)

    error = exc_info.value
    assert error.available == 5
    assert error.requested == 10
    assert error.warehouse_id == 1


def test_fractional_debit_on_fractionable_product():
    current = BalanceValues(quantity=20, fractional_quantity=3)

    result = compute_adjustment(KEY, current, DEBIT, 5, fractional_amount=2, fractionable=True)

    assert result == BalanceValues(quantity=15, fractional_quantity=1)


def test_fractional_debit_larger_than_fractional_balance_fails():
    current = BalanceValues(quantity=20, fractional_quantity=1)

    with pytest.raises(InsufficientStockError) as exc_info:
        compute_adjustment(KEY, current, DEBIT, 1, fractional_amount=2, fractionable=True)

    assert exc_info.value.requested_fractional == 2
    assert exc_info.value.available_fractional == 1


@pytest.mark.parametrize("fractional_amount", [None, 0])
def test_absent_or_zero_fraction_skips_fractional_axis(fractional_amount):
    current = BalanceValues(quantity=4, fractional_quantity=0)

    result = compute_adjustment(KEY, current, DEBIT, 4, fractional_amount=fractional_amount, fractionable=True)

    assert result == BalanceValues(quantity=0, fractional_quantity=0)


def test_fraction_is_not_carried_into_whole_units():
    current = BalanceValues(quantity=1, fractional_quantity=9)

    result = compute_adjustment(KEY, current, CREDIT, 0, fractional_amount=5, fractionable=True)

    assert result == BalanceValues(quantity=1, fractional_quantity=14)


def test_fraction_on_non_fractionable_product_is_rejected():
    with pytest.raises(InvalidOperationError):
        compute_adjustment(KEY, BalanceValues(quantity=10), CREDIT, 1, fractional_amount=1, fractionable=False)


def test_negative_amounts_are_rejected():
    with pytest.raises(InvalidOperationError):
        compute_adjustment(KEY, BalanceValues(quantity=10), DEBIT, -1)


def test_sequence_of_credits_sums_amounts():
    credits = [(3, None), (7, 2), (1, 0), (4, 5)]
    balance = BalanceValues()

    for amount, fraction in credits:
        balance = compute_adjustment(KEY, balance, CREDIT, amount, fractional_amount=fraction, fractionable=True)

    assert balance.quantity == 15
    assert balance.fractional_quantity == 7


def test_debit_to_exactly_zero_is_allowed():
    result = compute_adjustment(KEY, BalanceValues(quantity=3, fractional_quantity=2), DEBIT, 3,
                                fractional_amount=2, fractionable=True)

    assert result == BalanceValues(quantity=0, fractional_quantity=0)


def test_current_values_are_not_mutated_on_failure():
    current = BalanceValues(quantity=2, fractional_quantity=1)

    with pytest.raises(InsufficientStockError):
        compute_adjustment(KEY, current, DEBIT, 3)

    assert current == BalanceValues(quantity=2, fractional_quantity=1)
