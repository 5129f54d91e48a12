from typing import Optional
import httpx

from config import settings, logger
from models.claims import HistoryRecord
from utils.retry import async_retry


class NullHistoryStore:
    """Used when no history store is configured; drops every record."""

    async def save(self, record: HistoryRecord) -> bool:
        return False


class HttpHistoryStore:
    """
    Appends verification records to a PostgREST-style table endpoint.

    Persistence is best effort: failures are logged and save() returns False.
    """

    def __init__(self, endpoint: str, api_key: Optional[str] = None, timeout: float = 10.0):
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> dict:
        headers = {
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    @async_retry(exceptions=(httpx.ConnectError,))
    async def _insert(self, record: HistoryRecord) -> None:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(self.endpoint, headers=self._headers(), json=record)
            r.raise_for_status()

    async def save(self, record: HistoryRecord) -> bool:
        try:
            await self._insert(record)
            return True
        except httpx.HTTPStatusError as e:
            logger.error("History store HTTP error %s: %s", e.response.status_code, e.response.text[:200])
        except httpx.RequestError as e:
            logger.error("History store request error: %s", str(e))
        return False


def build_history_store():
    if settings.HISTORY_ENDPOINT:
        return HttpHistoryStore(settings.HISTORY_ENDPOINT, settings.HISTORY_STORE_KEY)
    return NullHistoryStore()
