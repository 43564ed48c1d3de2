import os
from dotenv import load_dotenv

load_dotenv()

# --- Database ---
# Default to local SQLite, but prefer environment variable (Postgres in production)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/habit_tracker.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))  # seconds

# --- JWT Configuration ---
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-key")
JWT_ALGORITHM = "HS256"
JWT_EXPIRY_HOURS = int(os.getenv("JWT_EXPIRY_HOURS", "720"))  # 30 days
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# "token" resolves /me from the bearer token only.
# "last_login" falls back to the most recently logged in user when no token is sent.
SESSION_MODE = os.getenv("SESSION_MODE", "token")

# --- Service wiring ---
USER_SERVICE_URL = os.getenv("USER_SERVICE_URL", "http://localhost:8080").rstrip("/")
USER_SERVICE_TIMEOUT = float(os.getenv("USER_SERVICE_TIMEOUT", "5"))
USER_SERVICE_PORT = int(os.getenv("USER_SERVICE_PORT", "8080"))
TRACKER_SERVICE_PORT = int(os.getenv("TRACKER_SERVICE_PORT", "8081"))

# --- Motivation quotes ---
QUOTE_API_URL = os.getenv("QUOTE_API_URL", "https://zenquotes.io/api/random")
QUOTE_API_TIMEOUT = float(os.getenv("QUOTE_API_TIMEOUT", "10"))

# --- Habit cache ---
HABIT_CACHE_TTL_SECONDS = int(os.getenv("HABIT_CACHE_TTL_SECONDS", "300"))
HABIT_CACHE_MAX_USERS = int(os.getenv("HABIT_CACHE_MAX_USERS", "1024"))

# --- Logging / formatting ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
