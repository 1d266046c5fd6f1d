# backend/farmsync/main.py

# FORCE logger module import so handlers attach
import farmsync.core.logger
from farmsync.core.logger import logger

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farmsync import __version__
from farmsync.core.config import settings
from farmsync.core.database import engine, Base, AsyncSessionLocal
from farmsync.core.seed_demo import seed_demo_data
from farmsync.core.request_middleware import RequestLoggingMiddleware
from farmsync.core.error_middleware import ExceptionLoggingMiddleware
from farmsync.crud.gateways import build_gateways
import farmsync.models  # noqa: F401  (register tables on Base.metadata)

from farmsync.api import records, pages, exports, weather

# ---------------------------------------------------
# Create FastAPI instance FIRST
# ---------------------------------------------------
app = FastAPI(title="FarmSync API", version=__version__)


# ---------------------------------------------------
# CORS MUST be added immediately after app creation
# ---------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------
# Logging middlewares
# ---------------------------------------------------
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionLoggingMiddleware)


# ---------------------------------------------------
# Include Routers
# ---------------------------------------------------
for router in records.routers:
    app.include_router(router, prefix="/api")
app.include_router(pages.router, prefix="/api")
app.include_router(exports.router, prefix="/api")
app.include_router(weather.router, prefix="/api")


# ---------------------------------------------------
# Startup: create tables, wire gateways, optional demo seed
# ---------------------------------------------------
@app.on_event("startup")
async def startup_event():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.gateways = build_gateways(AsyncSessionLocal)

    if settings.SEED_DEMO_DATA:
        await seed_demo_data(app.state.gateways)

    logger.info("Backend started with structured JSON logging")


@app.on_event("shutdown")
async def shutdown_event():
    await engine.dispose()
    logger.info("Backend stopped")


# ---------------------------------------------------
# Health endpoint
# ---------------------------------------------------
@app.get("/health")
async def health_check():
    return {"status": "ok", "version": __version__}
