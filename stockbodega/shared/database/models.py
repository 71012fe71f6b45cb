# stockbodega/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Date, Text,
    Numeric, ForeignKey, UniqueConstraint, CheckConstraint,
    func
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Mixin que agrega campos created_at y updated_at"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# EMPRESA
# =====================================================

class Company(Base, TimestampMixin):
    """Perfil de la organización (una sola fila)"""
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    address = Column(Text)
    phone = Column(String(50))
    email = Column(String(255))
    tax_id = Column(String(50))


# =====================================================
# CATÁLOGO
# =====================================================

class Category(Base, TimestampMixin):
    """Categoría de productos"""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)

    # Relationships
    products = relationship("Product", back_populates="category")


class Product(Base, TimestampMixin):
    """
    Producto del catálogo.

    Un producto fraccionable lleva stock en unidades completas y en
    unidades sueltas (ej. paquetes abiertos).
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    category_id = Column(Integer, ForeignKey("categories.id"), index=True)
    fractionable = Column(Boolean, nullable=False, default=False)
    units_per_package = Column(Integer)

    # Relationships
    category = relationship("Category", back_populates="products")

    __table_args__ = (
        CheckConstraint("units_per_package IS NULL OR units_per_package > 0", name="ck_products_units_per_package"),
    )


# =====================================================
# PERSONAL
# =====================================================

class Employee(Base, TimestampMixin):
    """Empleado que registra movimientos"""
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255))
    position = Column(String(100))
    department = Column(String(100))


# =====================================================
# BODEGAS E INVENTARIO
# =====================================================

class Warehouse(Base):
    """Bodega"""
    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    city = Column(String(100))
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    balances = relationship("WarehouseBalance", back_populates="warehouse")


class WarehouseBalance(Base):
    """
    Saldo de un producto en una bodega (una fila por bodega x producto).

    Se crea en el primer movimiento o transferencia que afecta al par y
    nunca se borra desde el flujo de inventario.
    """
    __tablename__ = "warehouse_balances"

    id = Column(Integer, primary_key=True, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    fractional_quantity = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, server_default=func.current_timestamp(), onupdate=func.current_timestamp())

    # Relationships
    warehouse = relationship("Warehouse", back_populates="balances")
    product = relationship("Product")

    __table_args__ = (
        UniqueConstraint('warehouse_id', 'product_id', name='uq_warehouse_balances_warehouse_product'),
        CheckConstraint("quantity >= 0", name="ck_warehouse_balances_quantity_non_negative"),
        CheckConstraint("fractional_quantity >= 0", name="ck_warehouse_balances_fractional_non_negative"),
    )

    def __repr__(self):
        return (
            f"<WarehouseBalance warehouse_id={self.warehouse_id} product_id={self.product_id} "
            f"qty={self.quantity} frac={self.fractional_quantity}>"
        )


# =====================================================
# KARDEX Y TRANSFERENCIAS (AUDITORÍA)
# =====================================================

class InventoryMovement(Base):
    """Movimiento de kardex: entrada o salida en una bodega"""
    __tablename__ = "inventory_movements"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    type = Column(String(10), nullable=False)
    quantity = Column(Integer, nullable=False)
    fractional_quantity = Column(Integer)
    date = Column(Date, nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    # Relationships
    product = relationship("Product")
    warehouse = relationship("Warehouse")
    employee = relationship("Employee")

    __table_args__ = (
        CheckConstraint("type IN ('entrada', 'salida')", name="ck_inventory_movements_type"),
        CheckConstraint("quantity > 0", name="ck_inventory_movements_quantity_positive"),
    )


class WarehouseTransfer(Base):
    """Transferencia entre bodegas: salida de origen + entrada en destino"""
    __tablename__ = "warehouse_transfers"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    origin_warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    destination_warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    fractional_quantity = Column(Integer)
    date = Column(Date, nullable=False, index=True)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    # Relationships
    product = relationship("Product")
    origin_warehouse = relationship("Warehouse", foreign_keys=[origin_warehouse_id])
    destination_warehouse = relationship("Warehouse", foreign_keys=[destination_warehouse_id])

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_warehouse_transfers_quantity_positive"),
        CheckConstraint(
            "origin_warehouse_id <> destination_warehouse_id",
            name="ck_warehouse_transfers_distinct_warehouses"
        ),
    )
