from typing import Any, List, TypedDict
from pydantic import BaseModel, ConfigDict

class AnalyzeLinkRequest(BaseModel):
    """Request body for /analyze-link. Type and format checks happen in InputValidator."""
    url: Any = None

    model_config = ConfigDict(
        json_schema_extra={"example": {"url": "https://www.bcb.gov.br/estabilidadefinanceira/pix"}}
    )

class VerifyTextRequest(BaseModel):
    """Request body for /verify-text. Length and sanitization happen in InputValidator."""
    text: Any = None

    model_config = ConfigDict(
        json_schema_extra={"example": {"text": "O Banco Central vai taxar o PIX em 2025"}}
    )

class HistoryRecord(TypedDict):
    """Row handed to the persistence collaborator after a text verification."""
    input_text: str
    classification_result: bool
    confidence: float
    fact_summary: str
    reference_urls: List[str]
