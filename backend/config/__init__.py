import logging

from .settings import Settings, settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("sentinela")

from .constants import (
    RATE_LIMIT_CONFIG,
    LLM_CONFIG,
    LINK_SCORING,
    TEXT_CONFIG,
)

OPTIONAL_KEYS = [
    "AI_GATEWAY_API_KEY",
    "HISTORY_STORE_URL",
]

def check_api_keys_on_startup():
    """Check for configured collaborator keys on startup."""
    missing_keys = [key_name for key_name in OPTIONAL_KEYS if not getattr(settings, key_name)]

    if "AI_GATEWAY_API_KEY" in missing_keys:
        logger.warning("AI_GATEWAY_API_KEY missing: text verification will answer 503 and link analysis runs without AI review.")
    if "HISTORY_STORE_URL" in missing_keys:
        logger.info("HISTORY_STORE_URL not set: verification history will not be persisted.")
    if not missing_keys:
        logger.info("All collaborator keys are configured.")

__all__ = [
    "Settings",
    "settings",
    "logger",
    "check_api_keys_on_startup",
    "RATE_LIMIT_CONFIG",
    "LLM_CONFIG",
    "LINK_SCORING",
    "TEXT_CONFIG",
]
