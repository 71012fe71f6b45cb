# stockbodega/config/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from .settings import settings


def build_engine(database_url: str, echo: bool = False, **overrides) -> Engine:
    """Crear engine con las opciones adecuadas para Postgres o SQLite"""
    engine_kwargs = {
        "pool_pre_ping": True,
        "echo": echo
    }
    
    if database_url.startswith("sqlite"):
        # Las sesiones se usan desde el threadpool de FastAPI
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_recycle"] = 300
        if "render" in database_url:
            engine_kwargs["connect_args"] = {"sslmode": "require"}
    
    engine_kwargs.update(overrides)
    engine = create_engine(database_url, **engine_kwargs)

    if database_url.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


# Create engine
engine = build_engine(settings.database_url_with_ssl, echo=settings.debug)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Database dependency
def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
