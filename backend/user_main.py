"""
User service entry point (registration, login, /me).
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from config import LOG_LEVEL, USER_SERVICE_PORT
from database import init_db
from errors import register_exception_handlers
from routes.auth_routes import router as auth_router

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("User service ready")
    yield


app = FastAPI(title="Habit Tracker User Service", version="1.0.0", lifespan=lifespan)
register_exception_handlers(app)
app.include_router(auth_router)


@app.get("/health-check")
async def health():
    return {"status": "ok", "service": "user"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("user_main:app", host="0.0.0.0", port=USER_SERVICE_PORT)
