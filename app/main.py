import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.db_check import wait_for_db, create_tables
from app.core.errors import register_exception_handlers
from app.core.log_config import configure_logging
from app.db.session import engine
from app.api.v1.routes.system import router as system_router
from app.api.v1.routes.user import router as user_router
from app.api.v1.routes.bet import router as bet_router
from app.api.v1.routes.settlement import router as settlement_router
from app.api.v1.routes.poker import router as poker_router

logger = logging.getLogger("wager_ledger.http")

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await wait_for_db()
    if engine.dialect.name == "sqlite":
        await create_tables()
    yield
    await engine.dispose()
    logger.info("Database connection closed")

app = FastAPI(title="Friends Wager Ledger", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)

@app.get("/")
async def root():
    return {"message": "Friends Wager Ledger is live"}

app.include_router(system_router, prefix="/api/system")
app.include_router(user_router, prefix="/api/users")
app.include_router(bet_router, prefix="/api/bets")
app.include_router(settlement_router, prefix="/api/settlements")
app.include_router(poker_router, prefix="/api/poker")
