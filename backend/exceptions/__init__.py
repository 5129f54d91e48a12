from typing import Optional, Dict, Any

class SentinelaException(Exception):
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        # Details stay server-side; callers only get the localized message.
        return {"error": self.message}

class InvalidInputException(SentinelaException):
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message, {"field": field})

class RateLimitException(SentinelaException):
    status_code = 429

    def __init__(self, scope: str, retry_after: float, message: str = "Limite de requisições excedido. Aguarde um momento."):
        self.retry_after = retry_after
        super().__init__(message, {"scope": scope, "retry_after": retry_after})

class LLMException(SentinelaException):
    status_code = 503

    def __init__(self, reason: str, message: str = "Serviço temporariamente indisponível", recoverable: bool = True):
        self.reason = reason
        super().__init__(message, {"reason": reason, "recoverable": recoverable})

class UpstreamRateLimitedException(LLMException):
    status_code = 429

    def __init__(self, reason: str = "HTTP 429"):
        super().__init__(reason, "Limite de requisições excedido. Tente novamente mais tarde.")

class UpstreamUnavailableException(LLMException):
    pass

class UpstreamUnreachableException(LLMException):
    def __init__(self, reason: str):
        super().__init__(reason, "Não foi possível contatar o serviço de análise. Tente novamente.")

class CircuitBreakerOpenException(UpstreamUnavailableException):
    def __init__(self, service_name: str, failure_count: int):
        super().__init__(f"Circuit breaker open for {service_name}")
        self.details.update({"service": service_name, "failure_count": failure_count})
