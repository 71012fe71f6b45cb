# stockbodega/modules/catalog/router.py
from typing import List
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from stockbodega.config.database import get_db
from stockbodega.shared.database.record_store import RecordStore
from .service import CatalogService
from .schemas import (
    CategoryCreate, CategoryUpdate, CategoryRecord,
    ProductCreate, ProductUpdate, ProductRecord,
    EmployeeCreate, EmployeeUpdate, EmployeeRecord,
    WarehouseCreate, WarehouseUpdate, WarehouseRecord,
    CompanyUpdate, CompanyRecord, DeleteResponse
)

router = APIRouter()


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(RecordStore(db))


# ==================== CATEGORÍAS ====================

@router.get("/categories", response_model=List[CategoryRecord])
def list_categories(service: CatalogService = Depends(get_catalog_service)):
    """Categorías ordenadas por nombre"""
    return service.list_categories()

@router.post("/categories", response_model=CategoryRecord, status_code=201)
def create_category(data: CategoryCreate, service: CatalogService = Depends(get_catalog_service)):
    return service.create_category(data)

@router.put("/categories/{category_id}", response_model=CategoryRecord)
def update_category(
    data: CategoryUpdate,
    category_id: int = Path(..., gt=0),
    service: CatalogService = Depends(get_catalog_service)
):
    return service.update_category(category_id, data)

@router.delete("/categories/{category_id}", response_model=DeleteResponse)
def delete_category(category_id: int = Path(..., gt=0), service: CatalogService = Depends(get_catalog_service)):
    return service.delete_category(category_id)


# ==================== PRODUCTOS ====================

@router.get("/products", response_model=List[ProductRecord])
def list_products(service: CatalogService = Depends(get_catalog_service)):
    """Productos ordenados por nombre, con el nombre de su categoría"""
    return service.list_products()

@router.get("/products/{product_id}", response_model=ProductRecord)
def get_product(product_id: int = Path(..., gt=0), service: CatalogService = Depends(get_catalog_service)):
    return service.get_product(product_id)

@router.post("/products", response_model=ProductRecord, status_code=201)
def create_product(data: ProductCreate, service: CatalogService = Depends(get_catalog_service)):
    """
    Crear producto

    **Fraccionable:** si el producto se vende por unidades sueltas
    (paquetes abiertos), los movimientos aceptan cantidad fraccionada.
    """
    return service.create_product(data)

@router.put("/products/{product_id}", response_model=ProductRecord)
def update_product(
    data: ProductUpdate,
    product_id: int = Path(..., gt=0),
    service: CatalogService = Depends(get_catalog_service)
):
    return service.update_product(product_id, data)

@router.delete("/products/{product_id}", response_model=DeleteResponse)
def delete_product(product_id: int = Path(..., gt=0), service: CatalogService = Depends(get_catalog_service)):
    return service.delete_product(product_id)


# ==================== PERSONAL ====================

@router.get("/employees", response_model=List[EmployeeRecord])
def list_employees(service: CatalogService = Depends(get_catalog_service)):
    return service.list_employees()

@router.post("/employees", response_model=EmployeeRecord, status_code=201)
def create_employee(data: EmployeeCreate, service: CatalogService = Depends(get_catalog_service)):
    return service.create_employee(data)

@router.put("/employees/{employee_id}", response_model=EmployeeRecord)
def update_employee(
    data: EmployeeUpdate,
    employee_id: int = Path(..., gt=0),
    service: CatalogService = Depends(get_catalog_service)
):
    return service.update_employee(employee_id, data)

@router.delete("/employees/{employee_id}", response_model=DeleteResponse)
def delete_employee(employee_id: int = Path(..., gt=0), service: CatalogService = Depends(get_catalog_service)):
    return service.delete_employee(employee_id)


# ==================== BODEGAS ====================

@router.get("/warehouses", response_model=List[WarehouseRecord])
def list_warehouses(service: CatalogService = Depends(get_catalog_service)):
    return service.list_warehouses()

@router.post("/warehouses", response_model=WarehouseRecord, status_code=201)
def create_warehouse(data: WarehouseCreate, service: CatalogService = Depends(get_catalog_service)):
    return service.create_warehouse(data)

@router.put("/warehouses/{warehouse_id}", response_model=WarehouseRecord)
def update_warehouse(
    data: WarehouseUpdate,
    warehouse_id: int = Path(..., gt=0),
    service: CatalogService = Depends(get_catalog_service)
):
    return service.update_warehouse(warehouse_id, data)

@router.delete("/warehouses/{warehouse_id}", response_model=DeleteResponse)
def delete_warehouse(warehouse_id: int = Path(..., gt=0), service: CatalogService = Depends(get_catalog_service)):
    """Una bodega con saldos o movimientos no puede eliminarse"""
    return service.delete_warehouse(warehouse_id)


# ==================== EMPRESA ====================

@router.get("/company", response_model=CompanyRecord)
def get_company(service: CatalogService = Depends(get_catalog_service)):
    return service.get_company()

@router.put("/company", response_model=CompanyRecord)
def update_company(data: CompanyUpdate, service: CatalogService = Depends(get_catalog_service)):
    return service.update_company(data)
