# tests/test_transfers_service.py
import threading

import pytest
from pydantic import ValidationError
from sqlalchemy.orm import sessionmaker

from stockbodega.config.database import build_engine
from stockbodega.core.exceptions import (
    InsufficientStockError, InvalidOperationError, NotFoundError, StoreError
)
from stockbodega.modules.inventory.adjustment import AdjustmentDirection
from stockbodega.modules.inventory.locks import BalanceLockRegistry
from stockbodega.modules.kardex.schemas import MovementCreate, MovementType
from stockbodega.modules.kardex.service import KardexService
from stockbodega.modules.transfers.schemas import TransferCreate
from stockbodega.modules.transfers.service import TransfersService
from stockbodega.shared.database.models import Base
from stockbodega.shared.database.record_store import RecordStore


@pytest.fixture
def service(store, locks):
    return TransfersService(store, locks=locks)


def balance_of(store, warehouse_id, product_id):
    balance = store.find_one("warehouse_balances", {"warehouse_id": warehouse_id, "product_id": product_id})
    if balance is None:
        return None
    return balance.quantity, balance.fractional_quantity


def test_transfer_moves_stock_between_warehouses(service, store, seed, set_balance):
    set_balance(seed.w1, seed.product, 10)
    set_balance(seed.w2, seed.product, 0)

    response = service.record_transfer(TransferCreate(
        product_id=seed.product,
        origin_warehouse_id=seed.w1,
        destination_warehouse_id=seed.w2,
        quantity=4
    ))

    assert response.origin_balance.quantity == 6
    assert response.destination_balance.quantity == 4
    assert response.transfer.origin_warehouse_name == "Bodega Norte"
    assert response.transfer.destination_warehouse_name == "Bodega Sur"
    assert balance_of(store, seed.w1, seed.product) == (6, 0)
    assert balance_of(store, seed.w2, seed.product) == (4, 0)

    transfers = store.find("warehouse_transfers")
    assert len(transfers) == 1
    assert (transfers[0].origin_warehouse_id, transfers[0].destination_warehouse_id) == (seed.w1, seed.w2)


def test_transfer_creates_destination_balance_lazily(service, store, seed, set_balance):
    set_balance(seed.w1, seed.product, 3)

    service.record_transfer(TransferCreate(
        product_id=seed.product, origin_warehouse_id=seed.w1,
        destination_warehouse_id=seed.w2, quantity=3
    ))

    assert balance_of(store, seed.w1, seed.product) == (0, 0)
    assert balance_of(store, seed.w2, seed.product) == (3, 0)


def test_insufficient_origin_leaves_everything_untouched(service, store, seed, set_balance):
    set_balance(seed.w1, seed.product, 2)
    set_balance(seed.w2, seed.product, 1)

    with pytest.raises(InsufficientStockError) as exc_info:
        service.record_transfer(TransferCreate(
            product_id=seed.product, origin_warehouse_id=seed.w1,
            destination_warehouse_id=seed.w2, quantity=5
        ))

    assert exc_info.value.warehouse_id == seed.w1
    assert balance_of(store, seed.w1, seed.product) == (2, 0)
    assert balance_of(store, seed.w2, seed.product) == (1, 0)
    assert store.find("warehouse_transfers") == []


def test_failed_destination_credit_rolls_back_origin_debit(service, store, seed, set_balance, monkeypatch):
    set_balance(seed.w1, seed.product, 10)
    adjust = service.adjuster.adjust

    def failing_credit(warehouse_id, product_id, direction, *args, **kwargs):
        if direction is AdjustmentDirection.CREDIT:
            raise StoreError("Fallo simulado en el crédito de destino")
        return adjust(warehouse_id, product_id, direction, *args, **kwargs)

    monkeypatch.setattr(service.adjuster, "adjust", failing_credit)

    with pytest.raises(StoreError):
        service.record_transfer(TransferCreate(
            product_id=seed.product, origin_warehouse_id=seed.w1,
            destination_warehouse_id=seed.w2, quantity=4
        ))

    assert balance_of(store, seed.w1, seed.product) == (10, 0)
    assert balance_of(store, seed.w2, seed.product) is None
    assert store.find("warehouse_transfers") == []


def test_fractional_transfer_keeps_totals(service, store, seed, set_balance):
    set_balance(seed.w1, seed.fractionable, 20, 3)
    set_balance(seed.w2, seed.fractionable, 1, 0)

    service.record_transfer(TransferCreate(
        product_id=seed.fractionable, origin_warehouse_id=seed.w1,
        destination_warehouse_id=seed.w2, quantity=5, fractional_quantity=2
    ))

    origin = balance_of(store, seed.w1, seed.fractionable)
    destination = balance_of(store, seed.w2, seed.fractionable)
    assert origin == (15, 1)
    assert destination == (6, 2)
    assert origin[0] + destination[0] == 21
    assert origin[1] + destination[1] == 3


def test_fraction_on_non_fractionable_transfer_rejected(service, seed, set_balance):
    set_balance(seed.w1, seed.product, 10)

    with pytest.raises(InvalidOperationError):
        service.record_transfer(TransferCreate(
            product_id=seed.product, origin_warehouse_id=seed.w1,
            destination_warehouse_id=seed.w2, quantity=1, fractional_quantity=1
        ))


def test_unknown_destination(service, store, seed, set_balance):
    set_balance(seed.w1, seed.product, 10)

    with pytest.raises(NotFoundError):
        service.record_transfer(TransferCreate(
            product_id=seed.product, origin_warehouse_id=seed.w1,
            destination_warehouse_id=999, quantity=1
        ))

    assert balance_of(store, seed.w1, seed.product) == (10, 0)


def test_same_origin_and_destination_is_invalid_command():
    with pytest.raises(ValidationError):
        TransferCreate(product_id=1, origin_warehouse_id=2, destination_warehouse_id=2, quantity=1)


def test_list_transfers(service, seed, set_balance):
    set_balance(seed.w1, seed.product, 10)
    service.record_transfer(TransferCreate(
        product_id=seed.product, origin_warehouse_id=seed.w1,
        destination_warehouse_id=seed.w2, quantity=1, notes="reposición"
    ))

    listing = service.list_transfers()

    assert listing.total == 1
    assert listing.transfers[0].product_name == "Arroz 1kg"
    assert listing.transfers[0].notes == "reposición"


def test_concurrent_salidas_do_not_double_spend(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'concurrencia.db'}")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    locks = BalanceLockRegistry()

    setup = RecordStore(Session())
    with setup.transaction():
        warehouse = setup.insert("warehouses", {"name": "Bodega Única"})
        product = setup.insert("products", {"name": "Aceite", "price": 2})
        employee = setup.insert("employees", {"name": "Luis"})
    ids = (warehouse.id, product.id, employee.id)
    KardexService(setup, locks=locks).record_movement(MovementCreate(
        warehouse_id=ids[0], product_id=ids[1], employee_id=ids[2],
        type=MovementType.ENTRADA, quantity=10
    ))
    setup.db.close()

    barrier = threading.Barrier(2)
    outcomes = []

    def salida():
        session = Session()
        try:
            service = KardexService(RecordStore(session), locks=locks)
            barrier.wait()
            service.record_movement(MovementCreate(
                warehouse_id=ids[0], product_id=ids[1], employee_id=ids[2],
                type=MovementType.SALIDA, quantity=6
            ))
            outcomes.append("ok")
        except InsufficientStockError:
            outcomes.append("insufficient")
        finally:
            session.close()

    threads = [threading.Thread(target=salida) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert sorted(outcomes) == ["insufficient", "ok"]

    check = RecordStore(Session())
    balance = check.find_one("warehouse_balances", {"warehouse_id": ids[0], "product_id": ids[1]})
    assert balance.quantity == 4
    assert len(check.find("inventory_movements", {"type": "salida"})) == 1
    check.db.close()
    engine.dispose()
