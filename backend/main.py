from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import BackgroundTasks, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import RATE_LIMIT_CONFIG, check_api_keys_on_startup, logger
from exceptions import RateLimitException, SentinelaException
from middleware.context import RequestContextMiddleware, get_client_key, get_request_id
from models import AnalyzeLinkRequest, LinkVerdict, VerificationVerdict, VerifyTextRequest
from services import (
    InferenceClient,
    LinkAnalysisService,
    TextVerificationService,
    build_history_store,
)
from utils.rate_limiter import ClientRateLimiter, get_rate_limiter
from utils.validation import InputValidator


@asynccontextmanager
async def lifespan(app: FastAPI):
    check_api_keys_on_startup()
    yield


app = FastAPI(title="Sentinela API", lifespan=lifespan)

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SentinelaException)
async def sentinela_exception_handler(request: Request, exc: SentinelaException):
    if exc.status_code >= 500:
        logger.error(
            "%s on %s: %s %s", type(exc).__name__, request.url.path, exc.message, exc.details,
            extra={"request_id": get_request_id()},
        )
    else:
        logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)

    headers = {}
    if isinstance(exc, RateLimitException):
        headers["Retry-After"] = str(max(1, int(round(exc.retry_after))))
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Malformed request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Corpo da requisição inválido"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Erro interno do servidor"})


@lru_cache(maxsize=1)
def get_inference_client() -> InferenceClient:
    return InferenceClient()


@lru_cache(maxsize=1)
def get_history_store():
    return build_history_store()


def get_link_limiter() -> ClientRateLimiter:
    return get_rate_limiter(
        "analyze_link", RATE_LIMIT_CONFIG.LINK_ANALYSIS_PER_WINDOW, RATE_LIMIT_CONFIG.WINDOW_SECONDS
    )


def get_text_limiter() -> ClientRateLimiter:
    return get_rate_limiter(
        "verify_text", RATE_LIMIT_CONFIG.TEXT_VERIFICATION_PER_WINDOW, RATE_LIMIT_CONFIG.WINDOW_SECONDS
    )


async def enforce_link_rate_limit(request: Request, limiter: ClientRateLimiter = Depends(get_link_limiter)):
    client_key = get_client_key(request)
    if not await limiter.admit(client_key):
        logger.warning("Link analysis rate limit hit for %s", client_key)
        raise RateLimitException("analyze_link", limiter.retry_after(client_key))


async def enforce_text_rate_limit(request: Request, limiter: ClientRateLimiter = Depends(get_text_limiter)):
    client_key = get_client_key(request)
    if not await limiter.admit(client_key):
        logger.warning("Text verification rate limit hit for %s", client_key)
        raise RateLimitException(
            "verify_text",
            limiter.retry_after(client_key),
            "Limite de requisições excedido. Tente novamente em alguns minutos.",
        )


def get_link_service(client: InferenceClient = Depends(get_inference_client)) -> LinkAnalysisService:
    return LinkAnalysisService(client)


def get_text_service(client: InferenceClient = Depends(get_inference_client)) -> TextVerificationService:
    return TextVerificationService(client)


@app.get("/")
async def health_check():
    return {"status": "ok", "message": "Sentinela API is running."}


@app.post(
    "/analyze-link",
    response_model=LinkVerdict,
    response_model_exclude_none=True,
    dependencies=[Depends(enforce_link_rate_limit)],
)
async def analyze_link(req: AnalyzeLinkRequest, service: LinkAnalysisService = Depends(get_link_service)):
    """Score a URL for phishing and scam indicators."""
    try:
        return await service.analyze(req.url)
    except SentinelaException:
        raise
    except Exception:
        logger.exception("Unexpected error during link analysis.")
        raise SentinelaException("Erro ao analisar o link")


@app.post(
    "/verify-text",
    response_model=VerificationVerdict,
    dependencies=[Depends(enforce_text_rate_limit)],
)
async def verify_text(
    req: VerifyTextRequest,
    background_tasks: BackgroundTasks,
    service: TextVerificationService = Depends(get_text_service),
    history_store=Depends(get_history_store),
):
    """Classify a free-text claim and attach curated references."""
    try:
        text = InputValidator.sanitize_text(req.text)
        verdict = await service.verify(text)
    except SentinelaException:
        raise
    except Exception:
        logger.exception("Unexpected error during text verification.")
        raise SentinelaException("Erro interno do servidor")

    record = service.to_history_record(text, verdict)
    background_tasks.add_task(history_store.save, record)
    return verdict
