from typing import Literal, List
from pydantic import BaseModel, Field, field_validator, model_validator

from utils.parsing import clamp

Classification = Literal["verified", "fake", "needs_verification"]
SourceType = Literal["government", "factchecker", "media", "academic"]

class SourceReference(BaseModel):
    """A curated reference the caller can consult; never produced by the model."""
    type: SourceType
    name: str
    description: str
    url: str
    relevance: str

class VerificationVerdict(BaseModel):
    """Complete response from /verify-text."""
    classification: Classification = "needs_verification"
    is_true: bool = False
    confidence: float = Field(0.5, ge=0.0, le=1.0)
    headline: str = ""
    reasoning: str = ""
    fact_summary: str = ""
    key_points: List[str] = []
    limitations: str = ""
    sources: List[SourceReference] = []
    references: List[str] = []

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v):
        return clamp(float(v), 0.0, 1.0)

    @model_validator(mode="after")
    def derive_fields(self):
        self.is_true = self.classification == "verified"
        self.references = [source.url for source in self.sources]
        return self
