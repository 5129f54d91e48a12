from typing import Any, Optional

from config import logger
from config.constants import LLM_CONFIG
from models.links import LinkVerdict
from prompts import LINK_REVIEW_SYSTEM_PROMPT, build_link_review_prompt
from services.extractors import extract_url_signals
from services.link_scoring import assess_link, needs_ai_review
from services.llm import InferenceClient, infer_safely


class LinkAnalysisService:
    """Scores a submitted URL and, for borderline scores, attaches an AI review."""

    def __init__(self, inference_client: Optional[InferenceClient] = None):
        self.inference_client = inference_client or InferenceClient()

    async def analyze(self, raw_url: Any) -> LinkVerdict:
        signals = extract_url_signals(raw_url)
        verdict = assess_link(signals)

        logger.info(
            "Link scored: domain=%s score=%s status=%s issues=%d",
            verdict.domain, verdict.score, verdict.status, len(verdict.issues),
        )

        if needs_ai_review(verdict.score):
            ai_analysis = await infer_safely(
                self.inference_client,
                LINK_REVIEW_SYSTEM_PROMPT,
                build_link_review_prompt(signals.full_url, verdict.domain, verdict.issues, verdict.score),
                temperature=LLM_CONFIG.LINK_TEMPERATURE,
                max_tokens=LLM_CONFIG.LINK_MAX_TOKENS,
                retry=False,
            )
            if ai_analysis:
                verdict = verdict.model_copy(update={"ai_analysis": ai_analysis.strip()})

        return verdict
