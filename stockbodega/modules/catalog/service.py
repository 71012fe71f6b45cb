# stockbodega/modules/catalog/service.py
from typing import Any, List, Type
import logging

from pydantic import BaseModel

from stockbodega.core.exceptions import InvalidOperationError, NotFoundError
from stockbodega.shared.database.models import Product
from stockbodega.shared.database.record_store import RecordStore

from .schemas import (
    CategoryCreate, CategoryUpdate, CategoryRecord,
    ProductCreate, ProductUpdate, ProductRecord,
    EmployeeCreate, EmployeeUpdate, EmployeeRecord,
    WarehouseCreate, WarehouseUpdate, WarehouseRecord,
    CompanyUpdate, CompanyRecord, DeleteResponse
)

logger = logging.getLogger(__name__)


class CatalogService:
    """CRUD de categorías, productos, personal, bodegas y empresa"""

    def __init__(self, store: RecordStore):
        self.store = store

    # ==================== GENÉRICOS ====================

    def _list(self, table: str, record_schema: Type[BaseModel], order_by: str = "name") -> List[Any]:
        return [record_schema.model_validate(r) for r in self.store.find(table, order_by=order_by)]

    def _create(self, table: str, data: BaseModel) -> Any:
        with self.store.transaction():
            record = self.store.insert(table, data.dict())
        logger.info(f"✅ Creado {table} #{record.id}")
        return record

    def _update(self, table: str, record_id: int, data: BaseModel) -> Any:
        values = data.dict(exclude_unset=True)
        with self.store.transaction():
            record = self.store.update(table, record_id, values)
        logger.info(f"Actualizado {table} #{record_id}: {sorted(values)}")
        return record

    def _delete(self, table: str, record_id: int) -> DeleteResponse:
        with self.store.transaction():
            self.store.delete(table, record_id)
        logger.info(f"Eliminado {table} #{record_id}")
        return DeleteResponse(success=True, message=f"Registro {record_id} eliminado", deleted_id=record_id)

    # ==================== CATEGORÍAS ====================

    def list_categories(self) -> List[CategoryRecord]:
        return self._list("categories", CategoryRecord)

    def create_category(self, data: CategoryCreate) -> CategoryRecord:
        return CategoryRecord.model_validate(self._create("categories", data))

    def update_category(self, category_id: int, data: CategoryUpdate) -> CategoryRecord:
        return CategoryRecord.model_validate(self._update("categories", category_id, data))

    def delete_category(self, category_id: int) -> DeleteResponse:
        self.store.get("categories", category_id)
        products = self.store.find("products", {"category_id": category_id})
        if products:
            raise InvalidOperationError(
                "No se puede eliminar una categoría con productos asignados",
                details={"category_id": category_id, "products": len(products)}
            )
        return self._delete("categories", category_id)

    # ==================== PRODUCTOS ====================

    def _product_record(self, product: Product) -> ProductRecord:
        record = ProductRecord.model_validate(product)
        record.category_name = product.category.name if product.category else None
        return record

    def _check_category(self, category_id) -> None:
        if category_id is not None:
            self.store.get("categories", category_id)

    def _check_no_fractional_stock(self, product_id: int) -> None:
        """Un producto con unidades sueltas en bodega no puede dejar de ser fraccionable"""
        product = self.store.get("products", product_id)
        if not product.fractionable:
            return
        loose = [
            b for b in self.store.find("warehouse_balances", {"product_id": product_id})
            if b.fractional_quantity > 0
        ]
        if loose:
            raise InvalidOperationError(
                f"'{product.name}' tiene stock fraccionado en {len(loose)} bodega(s)",
                details={"product_id": product_id, "warehouses": [b.warehouse_id for b in loose]}
            )

    def list_products(self) -> List[ProductRecord]:
        return [self._product_record(p) for p in self.store.find("products", order_by="name")]

    def get_product(self, product_id: int) -> ProductRecord:
        return self._product_record(self.store.get("products", product_id))

    def create_product(self, data: ProductCreate) -> ProductRecord:
        self._check_category(data.category_id)
        return self._product_record(self._create("products", data))

    def update_product(self, product_id: int, data: ProductUpdate) -> ProductRecord:
        self._check_category(data.category_id)
        if data.fractionable is False:
            self._check_no_fractional_stock(product_id)
        return self._product_record(self._update("products", product_id, data))

    def delete_product(self, product_id: int) -> DeleteResponse:
        return self._delete("products", product_id)

    # ==================== PERSONAL ====================

    def list_employees(self) -> List[EmployeeRecord]:
        return self._list("employees", EmployeeRecord)

    def create_employee(self, data: EmployeeCreate) -> EmployeeRecord:
        return EmployeeRecord.model_validate(self._create("employees", data))

    def update_employee(self, employee_id: int, data: EmployeeUpdate) -> EmployeeRecord:
        return EmployeeRecord.model_validate(self._update("employees", employee_id, data))

    def delete_employee(self, employee_id: int) -> DeleteResponse:
        return self._delete("employees", employee_id)

    # ==================== BODEGAS ====================

    def list_warehouses(self) -> List[WarehouseRecord]:
        return self._list("warehouses", WarehouseRecord)

    def create_warehouse(self, data: WarehouseCreate) -> WarehouseRecord:
        return WarehouseRecord.model_validate(self._create("warehouses", data))

    def update_warehouse(self, warehouse_id: int, data: WarehouseUpdate) -> WarehouseRecord:
        return WarehouseRecord.model_validate(self._update("warehouses", warehouse_id, data))

    def delete_warehouse(self, warehouse_id: int) -> DeleteResponse:
        return self._delete("warehouses", warehouse_id)

    # ==================== EMPRESA ====================

    def get_company(self) -> CompanyRecord:
        companies = self.store.find("companies", order_by="id")
        if not companies:
            raise NotFoundError("companies", None)
        return CompanyRecord.model_validate(companies[0])

    def update_company(self, data: CompanyUpdate) -> CompanyRecord:
        """Actualizar el perfil de la organización; se crea si no existe"""
        companies = self.store.find("companies", order_by="id")
        if companies:
            return CompanyRecord.model_validate(self._update("companies", companies[0].id, data))

        if not data.name:
            raise InvalidOperationError("Se requiere el nombre para registrar la empresa")
        return CompanyRecord.model_validate(self._create("companies", data))
