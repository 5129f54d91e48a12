from .llm import InferenceClient, infer_safely
from .extractors import extract_url_signals, extract_keywords
from .link_scoring import assess_link, needs_ai_review
from .link_analysis import LinkAnalysisService
from .source_router import route
from .synthesis import synthesize_verdict
from .verification_service import TextVerificationService
from .history import HttpHistoryStore, NullHistoryStore, build_history_store

__all__ = [
    "InferenceClient",
    "infer_safely",
    "extract_url_signals",
    "extract_keywords",
    "assess_link",
    "needs_ai_review",
    "LinkAnalysisService",
    "route",
    "synthesize_verdict",
    "TextVerificationService",
    "HttpHistoryStore",
    "NullHistoryStore",
    "build_history_store",
]
