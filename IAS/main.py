import asyncio
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Core imports
from packages.ias_core.config import IASConfig
from packages.ias_core.logging import get_logger, setup_logging

# API Routers
from IAS.api.health import router as health_router
from IAS.api.session import router as session_router
from IAS.api.dependencies import get_session_service

# Configuration Load
config = IASConfig.load()
setup_logging(config.LOG_DIR, config.LOG_LEVEL)
logger = get_logger("IAS.main")


async def evict_idle_sessions(service, interval: float):
    """Drop sessions idle past SESSION_TTL_SEC even when nobody touches the store."""
    while True:
        await asyncio.sleep(interval)
        evicted = service.evict_expired()
        if evicted:
            logger.info(f"Evicted {len(evicted)} idle session(s)")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {config.PROJECT_NAME} v{config.VERSION}...")
    sweeper = None
    if config.EVICTION_SWEEP_SEC > 0:
        sweeper = asyncio.create_task(evict_idle_sessions(get_session_service(), config.EVICTION_SWEEP_SEC))

    yield

    # Shutdown: no timer may outlive the app
    if sweeper:
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass
    get_session_service().shutdown()
    logger.info("Server shutting down...")


def create_app() -> FastAPI:
    app = FastAPI(
        title=config.PROJECT_NAME,
        version=config.VERSION,
        lifespan=lifespan,
        docs_url="/docs",       # Dev only
        redoc_url=None
    )

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],    # Allow all for now (Dev)
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(health_router, prefix="", tags=["Status"])
    app.include_router(session_router, prefix="/api/v1")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("IAS.main:app", host="0.0.0.0", port=8000, reload=True)
