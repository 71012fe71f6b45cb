# stockbodega/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from stockbodega.config.settings import settings
from stockbodega.config.database import engine
from stockbodega.core.exceptions import register_exception_handlers
from stockbodega.core.middleware import setup_middleware
from stockbodega.shared.database.models import Base
from stockbodega.api.v1.router import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("🚀 StockBodega API Starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"🗄️  Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")
    
    if settings.create_tables_on_startup:
        Base.metadata.create_all(bind=engine)
    
    yield
    
    # Shutdown
    logger.info("🛑 StockBodega API Shutting down...")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Inventario por bodegas: catálogo, kardex y transferencias",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)
register_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix="/api/v1")

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "🚀 StockBodega API - Inventario por Bodegas",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": "/api/v1"
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name,
        "environment": "production" if not settings.debug else "development"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "stockbodega.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
