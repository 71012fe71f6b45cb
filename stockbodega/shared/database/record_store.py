# stockbodega/shared/database/record_store.py
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Type
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockbodega.core.exceptions import NotFoundError, StoreError
from stockbodega.shared.database.models import Base

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Acceso genérico a registros por nombre de tabla.

    Todas las operaciones hacen flush pero no commit: quien llama decide el
    límite de la transacción (ver `transaction()`). Cualquier fallo de
    SQLAlchemy sale como StoreError; un registro ausente en find_one es
    None, no un error.
    """

    def __init__(self, db: Session):
        self.db = db
        self._tables: Dict[str, Type[Base]] = {
            mapper.class_.__tablename__: mapper.class_
            for mapper in Base.registry.mappers
        }

    def model_for(self, table: str) -> Type[Base]:
        try:
            return self._tables[table]
        except KeyError:
            raise ValueError(f"Tabla desconocida: '{table}'")

    @contextmanager
    def _store_errors(self, operation: str, table: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(f"❌ {operation} sobre '{table}' falló: {e}")
            raise StoreError(
                f"Error de base de datos en {operation} sobre '{table}'",
                details={"table": table, "operation": operation, "error": e.__class__.__name__}
            ) from e

    def find(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False
    ) -> List[Any]:
        """Listar registros que cumplen igualdad en todos los filtros"""
        model = self.model_for(table)
        with self._store_errors("find", table):
            query = self.db.query(model).filter_by(**(filters or {}))
            if order_by:
                column = getattr(model, order_by)
                query = query.order_by(column.desc() if descending else column, model.id)
            return query.all()

    def find_one(
        self,
        table: str,
        filters: Dict[str, Any],
        for_update: bool = False
    ) -> Optional[Any]:
        """
        Obtener un registro o None.

        Con for_update=True la fila queda bloqueada (SELECT ... FOR UPDATE)
        hasta el fin de la transacción en bases que lo soportan.
        """
        model = self.model_for(table)
        with self._store_errors("find_one", table):
            query = self.db.query(model).filter_by(**filters)
            if for_update:
                query = query.with_for_update()
            return query.first()

    def get(self, table: str, record_id: int) -> Any:
        """Obtener por id o lanzar NotFoundError"""
        record = self.find_one(table, {"id": record_id})
        if record is None:
            raise NotFoundError(table, record_id)
        return record

    def insert(self, table: str, values: Dict[str, Any]) -> Any:
        model = self.model_for(table)
        with self._store_errors("insert", table):
            record = model(**values)
            self.db.add(record)
            self.db.flush()
            self.db.refresh(record)
            return record

    def update(self, table: str, record_id: int, values: Dict[str, Any]) -> Any:
        record = self.get(table, record_id)
        with self._store_errors("update", table):
            for field, value in values.items():
                setattr(record, field, value)
            self.db.flush()
            self.db.refresh(record)
            return record

    def delete(self, table: str, record_id: int) -> None:
        record = self.get(table, record_id)
        with self._store_errors("delete", table):
            self.db.delete(record)
            self.db.flush()

    @contextmanager
    def transaction(self) -> Iterator["RecordStore"]:
        """Commit único al final; rollback ante cualquier error"""
        try:
            yield self
            with self._store_errors("commit", "*"):
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise
