# crowdwatch/main.py
"""
FastAPI application entry point.
Builds the store and services once, wires middleware, error handlers and
routers, and owns the store / simulator lifecycle via startup + shutdown.

Run: uvicorn crowdwatch.main:app --host 0.0.0.0 --port 8080
"""

import random
import time
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from crowdwatch.config import settings
from crowdwatch.database import make_engine
from crowdwatch.errors import CrowdWatchError, InternalError
from crowdwatch.routers import alerts, analytics, chat, gates, health, videos
from crowdwatch.services.crowd_simulator import CrowdSimulator
from crowdwatch.services.media_analyzer import MediaAnalyzer
from crowdwatch.services.query_responder import QueryResponder
from crowdwatch.services.store import StadiumStore
from crowdwatch.utils.logger import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="CrowdWatch Stadium Monitoring API",
    description="Simulated gate occupancy, capacity alerts, crowd assistant chat and video heatmaps.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── Services ─────────────────────────────────────────────────────────────────
# One random source per concern, all derived from RANDOM_SEED when it is set
_seed = random.Random(settings.RANDOM_SEED)

store = StadiumStore(make_engine(settings.DATABASE_URL))
app.state.store = store
app.state.simulator = CrowdSimulator(
    store,
    rng=random.Random(_seed.getrandbits(32)),
    interval_seconds=settings.SIMULATION_INTERVAL_SECONDS,
    initial_delay_seconds=settings.SIMULATION_INITIAL_DELAY_SECONDS,
)
app.state.responder = QueryResponder(rng=random.Random(_seed.getrandbits(32)))
app.state.analyzer = MediaAnalyzer(
    store,
    rng=random.Random(_seed.getrandbits(32)),
    delay_seconds=settings.ANALYSIS_DELAY_SECONDS,
    region_count=settings.HEATMAP_REGION_COUNT,
)
app.state.rng = random.Random(_seed.getrandbits(32))

# ── CORS (dashboard may be served from another origin) ───────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(CrowdWatchError)
async def crowdwatch_exception_handler(request: Request, exc: CrowdWatchError):
    if isinstance(exc, InternalError):
        logger.error(f"Internal error on {request.url.path}: {exc.message}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
    logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(gates.router,     prefix="/api", tags=["🚪 Gates"])
app.include_router(alerts.router,    prefix="/api", tags=["🔔 Alerts"])
app.include_router(chat.router,      prefix="/api", tags=["💬 Chat"])
app.include_router(videos.router,    prefix="/api", tags=["🎥 Videos"])
app.include_router(analytics.router, prefix="/api", tags=["📊 Analytics"])
app.include_router(health.router,    prefix="/api", tags=["💚 Health"])


# ── Startup / Shutdown ───────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 CrowdWatch starting up...")
    store.init(settings.DEFAULT_GATES)
    logger.info("✅ Store ready")

    if settings.SIMULATION_ENABLED:
        app.state.simulator.start()
    else:
        logger.info("Crowd simulation disabled (SIMULATION_ENABLED=false)")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 CrowdWatch shutting down...")
    await app.state.simulator.stop()
    store.teardown()
