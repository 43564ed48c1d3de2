"""
Tracker service entry point (habits, tracking, stats, motivation).
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from config import LOG_LEVEL, TRACKER_SERVICE_PORT, USER_SERVICE_URL
from database import init_db
from errors import register_exception_handlers
from routes.habit_routes import router as habit_router
from routes.motivation_routes import router as motivation_router
from services.habit_service import HabitService

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Silence noisy third-party loggers
logging.getLogger('httpx').setLevel(logging.WARNING)
logging.getLogger('httpcore').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"Tracker service ready, resolving users via {USER_SERVICE_URL}")
    yield
    HabitService.clear_cache()


app = FastAPI(title="Habit Tracker Service", version="1.0.0", lifespan=lifespan)
register_exception_handlers(app)
app.include_router(habit_router)
app.include_router(motivation_router)


@app.get("/health-check")
async def health():
    return {"status": "ok", "service": "tracker"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("tracker_main:app", host="0.0.0.0", port=TRACKER_SERVICE_PORT)
