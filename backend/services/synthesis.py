from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from config import logger
from config.constants import TEXT_CONFIG
from models.verdicts import SourceReference, VerificationVerdict
from utils.parsing import clamp, extract_json_block, parse_json_object, parse_numeric_value

VALID_CLASSIFICATIONS = ("verified", "fake", "needs_verification")

FAKE_MARKERS = ("falso", "fake", "desinformação")

DEFAULT_HEADLINES = {
    "verified": "Informação Verificada",
    "fake": "Possível Desinformação",
    "needs_verification": "Verificação Inconclusiva",
}


def heuristic_verdict(text: str) -> Dict[str, Any]:
    """Degraded verdict for model output that holds no usable JSON."""
    lowered = (text or "").lower()
    is_fake = any(marker in lowered for marker in FAKE_MARKERS)
    return {
        "classification": "fake" if is_fake else "needs_verification",
        "confidence": TEXT_CONFIG.FALLBACK_CONFIDENCE,
        "headline": "Possível Desinformação Detectada" if is_fake else "Verificação Inconclusiva",
        "analysis": (text or "")[:TEXT_CONFIG.FALLBACK_REASONING_LENGTH],
        "fact_correction": "",
        "key_points": [],
        "limitations": "Análise automatizada pode conter imprecisões.",
    }


ParseStage = Callable[[str], Optional[Dict[str, Any]]]

PARSE_CHAIN: Tuple[Tuple[str, ParseStage], ...] = (
    ("strict", parse_json_object),
    ("embedded", extract_json_block),
    ("heuristic", heuristic_verdict),
)


def parse_model_output(text: str) -> Tuple[Dict[str, Any], str]:
    """Run the parse chain; returns the candidate verdict and the stage that produced it."""
    for stage_name, stage in PARSE_CHAIN:
        candidate = stage(text)
        if candidate is not None:
            if stage_name != "strict":
                logger.warning("Model output parsed by %s stage.", stage_name)
            return candidate, stage_name
    return heuristic_verdict(text), "heuristic"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value)


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (str, int, float)):
        value = [value]
    if not isinstance(value, list):
        return []
    return [s for s in (_as_text(item) for item in value if item is not None) if s]


def _normalize_classification(value: Any) -> str:
    classification = _as_text(value).lower()
    return classification if classification in VALID_CLASSIFICATIONS else "needs_verification"


def _normalize_confidence(value: Any) -> float:
    number = parse_numeric_value(value)
    if number is None or number != number:
        number = TEXT_CONFIG.FALLBACK_CONFIDENCE
    return clamp(number, 0.0, 1.0)


def synthesize_verdict(raw_text: str, sources: Sequence[SourceReference]) -> VerificationVerdict:
    """
    Turn raw model text into a verdict. Any URLs the model produced are
    discarded; sources and references come from the router only.
    """
    candidate, _stage = parse_model_output(raw_text)

    classification = _normalize_classification(candidate.get("classification"))
    analysis = _as_text(candidate.get("analysis") or candidate.get("reasoning"))
    fact_summary = _as_text(candidate.get("fact_correction")) or analysis[:TEXT_CONFIG.FACT_SUMMARY_LENGTH]

    return VerificationVerdict(
        classification=classification,
        confidence=_normalize_confidence(candidate.get("confidence")),
        headline=_as_text(candidate.get("headline")) or DEFAULT_HEADLINES[classification],
        reasoning=analysis,
        fact_summary=fact_summary,
        key_points=_as_str_list(candidate.get("key_points")),
        limitations=_as_text(candidate.get("limitations")),
        sources=list(sources),
    )
