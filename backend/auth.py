from datetime import datetime, timedelta, timezone
import base64
import hashlib
import logging

from fastapi import Request
from jose import jwt, JWTError
import bcrypt
import uuid

from config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRY_HOURS, BCRYPT_ROUNDS

logger = logging.getLogger(__name__)


def _password_digest(password: str) -> bytes:
    """
    Fixed-length bcrypt input for any password.
    bcrypt only reads 72 bytes, so the full password is folded into a
    44-byte base64 SHA-256 digest first; every byte of it counts.
    """
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    """bcrypt hash of the password's digest, as stored in users.hashed_password."""
    return bcrypt.hashpw(_password_digest(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """True only when plain_password is exactly the registered password."""
    try:
        return bcrypt.checkpw(_password_digest(plain_password), hashed_password.encode("ascii"))
    except ValueError as e:
        # malformed stored hash
        logger.warning(f"Unreadable password hash: {e}")
        return False


def create_token(user_id: int, username: str) -> str:
    """Bearer token identifying one user until JWT_EXPIRY_HOURS from now."""
    claims = {
        "user_id": user_id,
        "username": username,
        "exp": datetime.now(timezone.utc) + timedelta(hours=JWT_EXPIRY_HOURS),
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Claims of a valid, unexpired token; None for anything else."""
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None


def bearer_token(request: Request) -> str | None:
    """Return the Bearer token from the Authorization header, if any."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header.split(" ", 1)[1].strip() or None


async def get_current_user(request: Request) -> int:
    """
    FastAPI dependency for the tracker service. Asks the user service who the
    caller is (forwarding the Authorization header) and returns the user_id.
    Raises AuthError (401) when the lookup fails.
    """
    from services.identity_client import user_service_client

    user = await user_service_client.current_user(request.headers.get("Authorization"))
    return user["id"]
