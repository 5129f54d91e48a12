import uuid
import time
from contextvars import ContextVar
from typing import Optional
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from config import logger

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_client_key(request: Request) -> str:
    """Client identity for rate limiting: first forwarded hop, then the CDN header, then the peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    cf_ip = request.headers.get("CF-Connecting-IP")
    if cf_ip and cf_ip.strip():
        return cf_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request_id_var.set(request_id)
        client_key = get_client_key(request)

        start_time = time.time()
        logger.info(
            "Request started: %s %s",
            request.method,
            request.url.path,
            extra={"request_id": request_id, "client": client_key},
        )

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            "Request completed: %s in %.1fms",
            response.status_code,
            duration * 1000,
            extra={"request_id": request_id},
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response


def get_request_id() -> Optional[str]:
    return request_id_var.get()
