from .context import RequestContextMiddleware, get_client_key, get_request_id

__all__ = ["RequestContextMiddleware", "get_client_key", "get_request_id"]
