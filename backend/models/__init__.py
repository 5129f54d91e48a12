from .claims import (
    AnalyzeLinkRequest,
    VerifyTextRequest,
    HistoryRecord,
)
from .links import (
    LinkStatus,
    UrlSignals,
    BrandMatch,
    Narrative,
    ScoreCard,
    LinkVerdict,
)
from .verdicts import (
    Classification,
    SourceType,
    SourceReference,
    VerificationVerdict,
)

__all__ = [
    "AnalyzeLinkRequest",
    "VerifyTextRequest",
    "HistoryRecord",

    "LinkStatus",
    "UrlSignals",
    "BrandMatch",
    "Narrative",
    "ScoreCard",
    "LinkVerdict",

    "Classification",
    "SourceType",
    "SourceReference",
    "VerificationVerdict",
]
