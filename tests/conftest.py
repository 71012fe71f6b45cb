# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stockbodega.config.database import build_engine, get_db
from stockbodega.main import app
from stockbodega.modules.inventory.locks import BalanceLockRegistry
from stockbodega.shared.database.models import Base
from stockbodega.shared.database.record_store import RecordStore


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return RecordStore(db)


@pytest.fixture
def locks():
    return BalanceLockRegistry()


@pytest.fixture
def seed(store):
    """Dos bodegas, un producto normal, uno fraccionable y un empleado"""
    with store.transaction():
        category = store.insert("categories", {"name": "Abarrotes"})
        w1 = store.insert("warehouses", {"name": "Bodega Norte", "city": "Quito"})
        w2 = store.insert("warehouses", {"name": "Bodega Sur", "city": "Guayaquil"})
        product = store.insert("products", {
            "name": "Arroz 1kg", "price": 1, "category_id": category.id, "fractionable": False
        })
        fractionable = store.insert("products", {
            "name": "Tornillos caja", "price": 5, "category_id": category.id,
            "fractionable": True, "units_per_package": 10
        })
        employee = store.insert("employees", {"name": "Ana Torres", "position": "Bodeguera"})

    return SimpleNamespace(
        category_id=category.id,
        w1=w1.id,
        w2=w2.id,
        product=product.id,
        fractionable=fractionable.id,
        employee=employee.id
    )


@pytest.fixture
def set_balance(store):
    def _set(warehouse_id, product_id, quantity, fractional_quantity=0):
        with store.transaction():
            store.insert("warehouse_balances", {
                "warehouse_id": warehouse_id,
                "product_id": product_id,
                "quantity": quantity,
                "fractional_quantity": fractional_quantity
            })
    return _set


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
