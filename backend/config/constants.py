from dataclasses import dataclass

@dataclass(frozen=True)
class RateLimitConfig:
    WINDOW_SECONDS: float = 60.0
    LINK_ANALYSIS_PER_WINDOW: int = 15
    TEXT_VERIFICATION_PER_WINDOW: int = 10

@dataclass(frozen=True)
class LLMConfig:
    REQUEST_TIMEOUT: float = 30.0
    CONNECT_RETRY_ATTEMPTS: int = 2
    LINK_TEMPERATURE: float = 0.3
    LINK_MAX_TOKENS: int = 300
    TEXT_TEMPERATURE: float = 0.2
    CIRCUIT_FAILURE_THRESHOLD: int = 5
    CIRCUIT_RECOVERY_TIMEOUT: float = 60.0

@dataclass(frozen=True)
class LinkScoringConfig:
    """Penalties subtracted from the starting score and status thresholds."""
    START_SCORE: int = 100
    NO_HTTPS_PENALTY: int = 50
    SHORTENER_PENALTY: int = 30
    SUSPICIOUS_TLD_PENALTY: int = 30
    SCAM_KEYWORD_PENALTY: int = 15
    SCAM_KEYWORD_PENALTY_CAP: int = 60
    BRAND_SQUATTING_PENALTY: int = 40
    IP_LITERAL_PENALTY: int = 35
    SUBDOMAIN_PENALTY: int = 15
    MAX_SUBDOMAIN_DEPTH: int = 2
    OBFUSCATION_PENALTY: int = 20

    DANGER_BELOW: int = 30
    WARNING_BELOW: int = 60

    AI_REVIEW_BELOW: int = 80

@dataclass(frozen=True)
class TextConfig:
    MIN_LENGTH: int = 10
    MAX_LENGTH: int = 10000
    MAX_KEYWORDS: int = 10
    MIN_KEYWORD_LENGTH: int = 4
    MAX_SOURCES: int = 5
    FACTCHECKERS_APPENDED: int = 2
    SEARCH_QUERY_KEYWORDS: int = 4
    FALLBACK_CONFIDENCE: float = 0.5
    FALLBACK_REASONING_LENGTH: int = 500
    FACT_SUMMARY_LENGTH: int = 200
    HISTORY_TEXT_LENGTH: int = 1000

RATE_LIMIT_CONFIG = RateLimitConfig()
LLM_CONFIG = LLMConfig()
LINK_SCORING = LinkScoringConfig()
TEXT_CONFIG = TextConfig()
