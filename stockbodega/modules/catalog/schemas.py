# stockbodega/modules/catalog/schemas.py
from pydantic import BaseModel, Field, validator
from typing import Optional
from decimal import Decimal
from datetime import datetime

from stockbodega.shared.schemas.common import BaseResponse


class NamedModel(BaseModel):
    """Base para recursos con nombre obligatorio no vacío"""

    @validator('name', check_fields=False)
    def validate_name(cls, v):
        if v is None or not v.strip():
            raise ValueError('El nombre no puede estar vacío')
        return v.strip()


# ==================== CATEGORÍAS ====================

class CategoryCreate(NamedModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)

class CategoryUpdate(NamedModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)

class CategoryRecord(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ==================== PRODUCTOS ====================

class ProductCreate(NamedModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    price: Decimal = Field(Decimal("0"), ge=0, description="Precio unitario")
    category_id: Optional[int] = Field(None, gt=0)
    fractionable: bool = Field(False, description="Lleva stock en unidades sueltas")
    units_per_package: Optional[int] = Field(None, gt=0, description="Unidades por empaque")

class ProductUpdate(NamedModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    price: Optional[Decimal] = Field(None, ge=0)
    category_id: Optional[int] = Field(None, gt=0)
    fractionable: Optional[bool] = None
    units_per_package: Optional[int] = Field(None, gt=0)

    @validator('price', 'fractionable')
    def reject_null(cls, v):
        if v is None:
            raise ValueError('El valor no puede ser nulo')
        return v

class ProductRecord(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    fractionable: bool = False
    units_per_package: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ==================== PERSONAL ====================

class EmployeeCreate(NamedModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    position: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)

    @validator('email')
    def validate_email(cls, v):
        if v and '@' not in v:
            raise ValueError('Email inválido')
        return v

class EmployeeUpdate(NamedModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    position: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)

class EmployeeRecord(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ==================== BODEGAS ====================

class WarehouseCreate(NamedModel):
    name: str = Field(..., min_length=1, max_length=255)
    city: Optional[str] = Field(None, max_length=100, description="Ciudad: Quito, Guayaquil, Otra")

class WarehouseUpdate(NamedModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, max_length=100)

class WarehouseRecord(BaseModel):
    id: int
    name: str
    city: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ==================== EMPRESA ====================

class CompanyUpdate(NamedModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    tax_id: Optional[str] = Field(None, max_length=50)

class CompanyRecord(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    tax_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ==================== RESPUESTAS ====================

class DeleteResponse(BaseResponse):
    deleted_id: int
