from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

LinkStatus = Literal["safe", "warning", "danger", "scam"]

@dataclass(frozen=True)
class UrlSignals:
    """Lexical signals derived from one submitted URL."""
    domain: str
    scheme: str
    full_url: str
    is_https: bool
    subdomain_depth: int
    matched_scam_keywords: Tuple[str, ...] = ()
    suspicious_tlds: Tuple[str, ...] = ()
    is_shortener: bool = False
    is_ip_literal: bool = False
    has_obfuscation_chars: bool = False

    @property
    def has_suspicious_tld(self) -> bool:
        return bool(self.suspicious_tlds)

@dataclass(frozen=True)
class BrandMatch:
    official_domain: str
    targeted_brand: str
    is_impersonating: bool
    matched_markers: Tuple[str, ...] = ()

@dataclass(frozen=True)
class Narrative:
    scam_type: str
    modus_operandi: str

@dataclass
class ScoreCard:
    """Intermediate result of the penalty and override passes."""
    score: int
    issues: List[str] = field(default_factory=list)
    confirmed_issues: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    brand_match: Optional[BrandMatch] = None
    narrative: Optional[Narrative] = None

class LinkVerdict(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: LinkStatus
    score: int = Field(..., ge=0, le=100)
    domain: str
    issues: List[str] = []
    recommendations: List[str] = []
    scam_type: Optional[str] = None
    modus_operandi: Optional[str] = None
    ai_analysis: Optional[str] = None
    is_brand_squatting: bool = False
    is_url_shortener: bool = False
    targeted_brand: Optional[str] = None
