# app/client/car_client.py
"""
Async HTTP client for the /api/cars endpoints, as used by the mobile screen.

Every call is retried on transport failures and 5xx responses:
  attempt 1 → wait 1s → attempt 2 → wait 2s → attempt 3 → NetworkError
4xx responses (missing field, duplicate plate, not found) are never retried.

Each logical write gets one Idempotency-Key which is reused by its retries, so
a create that actually reached the server before the connection dropped is
not applied twice.
"""

import asyncio
import uuid
from typing import Optional
import httpx
from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """The server answered with a 4xx. Carries the server's message/detail."""

    def __init__(self, action: str, status_code: int, message: str, detail: str = ""):
        super().__init__(f"{action} failed: {message}" + (f" ({detail})" if detail else ""))
        self.action = action
        self.status_code = status_code
        self.message = message
        self.detail = detail

    @classmethod
    def from_response(cls, action: str, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            return cls(action, response.status_code, str(body.get("message", "Request failed")),
                       str(body.get("detail", "")))
        return cls(action, response.status_code, response.text or f"HTTP {response.status_code}")


class NetworkError(Exception):
    """All attempts failed with a transport error or a 5xx."""

    def __init__(self, action: str, attempts: int, last_error: str):
        super().__init__(f"{action} failed after {attempts} attempts: {last_error}")
        self.action = action
        self.attempts = attempts
        self.last_error = last_error


class LoggingNotifier:
    """Default notifier. The mobile UI swaps in one that shows alerts."""

    def success(self, action: str, data):
        logger.info(f"✅ {action} succeeded")

    def failure(self, action: str, message: str, details: dict):
        logger.error(f"❌ {action} failed: {message} | {details}")


class CarApiClient:
    def __init__(
        self,
        base_url: str = None,
        notifier=None,
        max_attempts: int = None,
        backoff_base: float = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None,
        sleep=None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.notifier = notifier or LoggingNotifier()
        self.max_attempts = max_attempts or settings.CLIENT_MAX_ATTEMPTS
        self.backoff_base = settings.CLIENT_BACKOFF_SECONDS if backoff_base is None else backoff_base
        self._sleep = sleep or asyncio.sleep
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.CLIENT_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    def backoff_delay(self, attempt: int) -> float:
        """Delay after failed attempt number `attempt` (1-based): 1s, 2s, 4s ..."""
        return self.backoff_base * 2 ** (attempt - 1)

    # ── Operations ─────────────────────────────────────────────────────────
    async def list_cars(self, plate: Optional[str] = None) -> list[dict]:
        params = {"plate": plate} if plate else None
        return await self._call("Load cars", "GET", "/cars", params=params)

    async def create_car(self, record: dict) -> dict:
        return await self._call("Add car", "POST", "/cars", json=record)

    async def update_car(self, car_id: int, record: dict) -> dict:
        return await self._call("Update car", "PUT", f"/cars/{car_id}", json=record)

    async def delete_car(self, car_id: int):
        await self._call("Delete car", "DELETE", f"/cars/{car_id}")

    # ── Retry loop ─────────────────────────────────────────────────────────
    async def _call(self, action: str, method: str, path: str, json=None, params=None):
        headers = {}
        if method != "GET":
            headers["Idempotency-Key"] = str(uuid.uuid4())

        last_error = ""
        for attempt in range(1, self.max_attempts + 1):
            try:
                response = await self._client.request(method, path, json=json, params=params, headers=headers)
            except httpx.TransportError as e:
                last_error = f"{type(e).__name__}: {e}"
                logger.warning(f"⚠️  {action} attempt {attempt}/{self.max_attempts}: {last_error}")
            else:
                if response.status_code >= 500:
                    last_error = f"HTTP {response.status_code}: {response.text[:200]}"
                    logger.warning(f"⚠️  {action} attempt {attempt}/{self.max_attempts}: {last_error}")
                elif response.status_code >= 400:
                    error = ApiError.from_response(action, response)
                    self.notifier.failure(action, str(error), {
                        "status": response.status_code,
                        "message": error.message,
                        "detail": error.detail,
                    })
                    raise error
                else:
                    data = response.json() if response.content else None
                    self.notifier.success(action, data)
                    return data

            if attempt < self.max_attempts:
                delay = self.backoff_delay(attempt)
                logger.info(f"🔁 Retrying {action} in {delay}s")
                await self._sleep(delay)

        error = NetworkError(action, self.max_attempts, last_error)
        self.notifier.failure(action, str(error), {
            "method": method,
            "url": f"{self.base_url}{path}",
            "attempts": self.max_attempts,
            "lastError": last_error,
        })
        raise error
