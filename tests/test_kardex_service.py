# tests/test_kardex_service.py
from datetime import date

import pytest

from stockbodega.core.exceptions import InsufficientStockError, InvalidOperationError, NotFoundError
from stockbodega.modules.kardex.schemas import MovementCreate, MovementType
from stockbodega.modules.kardex.service import KardexService


@pytest.fixture
def service(store, locks):
    return KardexService(store, locks=locks)


def movement(seed, type_, quantity, product=None, fractional=None, **extra):
    return MovementCreate(
        product_id=product or seed.product,
        warehouse_id=extra.pop("warehouse_id", seed.w1),
        type=type_,
        quantity=quantity,
        fractional_quantity=fractional,
        employee_id=extra.pop("employee_id", seed.employee),
        **extra
    )


def test_entrada_creates_balance(service, store, seed):
    response = service.record_movement(movement(seed, MovementType.ENTRADA, 10))

    assert response.success
    assert response.movement.type == MovementType.ENTRADA
    assert response.movement.fractional_quantity is None
    assert response.movement.product_name == "Arroz 1kg"
    assert response.movement.employee_name == "Ana Torres"
    assert (response.balance.quantity, response.balance.fractional_quantity) == (10, 0)
    assert len(store.find("inventory_movements")) == 1


def test_salida_without_stock_leaves_no_trace(service, store, seed, set_balance):
    set_balance(seed.w1, seed.product, 5)

    with pytest.raises(InsufficientStockError):
        service.record_movement(movement(seed, MovementType.SALIDA, 10))

    balance = store.find_one("warehouse_balances", {"warehouse_id": seed.w1, "product_id": seed.product})
    assert balance.quantity == 5
    assert store.find("inventory_movements") == []


def test_salida_on_absent_balance_fails_without_creating_row(service, store, seed):
    with pytest.raises(InsufficientStockError):
        service.record_movement(movement(seed, MovementType.SALIDA, 1))

    assert store.find("warehouse_balances") == []


def test_fractional_salida(service, seed, set_balance):
    set_balance(seed.w1, seed.fractionable, 20, 3)

    response = service.record_movement(
        movement(seed, MovementType.SALIDA, 5, product=seed.fractionable, fractional=2)
    )

    assert (response.balance.quantity, response.balance.fractional_quantity) == (15, 1)
    assert response.movement.fractional_quantity == 2


def test_fraction_on_non_fractionable_product_rejected(service, store, seed):
    with pytest.raises(InvalidOperationError):
        service.record_movement(movement(seed, MovementType.ENTRADA, 1, fractional=3))

    assert store.find("inventory_movements") == []


def test_unknown_employee(service, store, seed):
    with pytest.raises(NotFoundError):
        service.record_movement(movement(seed, MovementType.ENTRADA, 1, employee_id=999))

    assert store.find("warehouse_balances") == []


def test_entrada_then_salida(service, seed):
    service.record_movement(movement(seed, MovementType.ENTRADA, 8))
    response = service.record_movement(movement(seed, MovementType.SALIDA, 8))

    assert response.balance.quantity == 0


def test_list_movements_newest_first_and_filtered(service, seed):
    service.record_movement(movement(seed, MovementType.ENTRADA, 1, date=date(2024, 1, 10)))
    service.record_movement(movement(seed, MovementType.ENTRADA, 2, date=date(2024, 3, 5), notes="  compra  "))
    service.record_movement(movement(seed, MovementType.ENTRADA, 3, warehouse_id=seed.w2, date=date(2024, 2, 1)))

    all_movements = service.list_movements()
    assert [m.quantity for m in all_movements.movements] == [2, 3, 1]
    assert all_movements.movements[0].notes == "compra"

    north = service.list_movements(seed.w1)
    assert north.total == 2
    assert {m.warehouse_name for m in north.movements} == {"Bodega Norte"}


def test_list_movements_unknown_warehouse(service, seed):
    with pytest.raises(NotFoundError):
        service.list_movements(999)
