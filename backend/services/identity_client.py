"""
identity_client.py - Tracker → user service lookup
Resolves the caller by asking the user service's /me endpoint.
"""
import logging

import httpx

from config import USER_SERVICE_URL, USER_SERVICE_TIMEOUT
from errors import AuthError

logger = logging.getLogger(__name__)


class UserServiceClient:
    """Thin async client for the user service."""

    def __init__(self, base_url: str = USER_SERVICE_URL, timeout: float = USER_SERVICE_TIMEOUT,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def current_user(self, authorization: str | None = None) -> dict:
        """Return {id, username, email} for the caller or raise AuthError."""
        headers = {"Authorization": authorization} if authorization else {}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(f"{self.base_url}/me", headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"User service unreachable: {e}")
            raise AuthError(f"failed to get current user: {e}")

        if resp.status_code != 200:
            raise AuthError(f"failed to get current user: status {resp.status_code}")

        try:
            user = resp.json()
            user["id"] = int(user["id"])
        except (ValueError, KeyError, TypeError) as e:
            raise AuthError(f"failed to decode user response: {e}")
        return user


user_service_client = UserServiceClient()
