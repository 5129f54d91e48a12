import asyncio
from typing import Optional

from config import logger
from config.constants import LLM_CONFIG, TEXT_CONFIG
from models.claims import HistoryRecord
from models.verdicts import VerificationVerdict
from prompts import build_text_verification_prompts
from services.extractors import extract_keywords
from services.llm import InferenceClient
from services.source_router import route
from services.synthesis import synthesize_verdict


class TextVerificationService:

    def __init__(self, inference_client: Optional[InferenceClient] = None):
        self.inference_client = inference_client or InferenceClient()

    async def verify(self, text: str) -> VerificationVerdict:
        """
        Verify a claim that already went through InputValidator.sanitize_text.

        Raises an LLMException subclass when the inference provider cannot
        produce an answer. A malformed answer never raises; it degrades to a
        heuristic verdict.
        """
        start_time = asyncio.get_event_loop().time()
        logger.info(f"Verifying claim: '{text[:100]}'")

        keywords = extract_keywords(text)
        sources = route(keywords)
        logger.info("Keywords: %s; routed %d sources.", keywords, len(sources))

        system_prompt, user_prompt = build_text_verification_prompts(text, sources)
        raw_answer = await self.inference_client.infer(
            system_prompt,
            user_prompt,
            temperature=LLM_CONFIG.TEXT_TEMPERATURE,
            retry=True,
        )

        verdict = synthesize_verdict(raw_answer, sources)

        duration = round(asyncio.get_event_loop().time() - start_time, 2)
        logger.info(
            f"Verification completed in {duration}s: {verdict.classification} "
            f"(confidence {verdict.confidence:.2f})"
        )
        return verdict

    @staticmethod
    def to_history_record(text: str, verdict: VerificationVerdict) -> HistoryRecord:
        return {
            "input_text": text[:TEXT_CONFIG.HISTORY_TEXT_LENGTH],
            "classification_result": verdict.is_true,
            "confidence": verdict.confidence,
            "fact_summary": verdict.fact_summary,
            "reference_urls": list(verdict.references),
        }
