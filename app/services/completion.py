# services/completion.py
import json
import logging
import re
from typing import Any, List, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.exceptions import MalformedCompletionResponse
from app.core.result import ErrorKind, Result
from app.schemas.completion import (
    CompanionRequest,
    CompanionResponse,
    CompletionType,
    JournalAnalysis,
)
from app.schemas.insight import InsightDraft
from app.services.prompts import build_prompt

logger = logging.getLogger(__name__)

ANALYSIS_MAX_TOKENS = 500
DEFAULT_MAX_TOKENS = 1000

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


# =====================================================================
# HTTP CLIENT
# =====================================================================

class CompletionClient:
    """
    Thin client for the Gemini ``generateContent`` endpoint.

    ``complete`` never raises for network or HTTP problems; it returns a
    failed ``Result`` and logs the cause.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    @property
    def endpoint(self) -> str:
        base_url = (self.base_url or settings.GEMINI_BASE_URL).rstrip("/")
        return f"{base_url}/models/{self.model or settings.GEMINI_MODEL}:generateContent"

    def complete(self, prompt: str, max_output_tokens: int = DEFAULT_MAX_TOKENS) -> Result[str]:
        """
        Send a prompt and return the generated text.

        Args:
            prompt: Full prompt text
            max_output_tokens: Generation budget

        Returns:
            Result holding the reply text
        """
        api_key = self.api_key or settings.GEMINI_API_KEY
        if not api_key:
            logger.error("Completion service is not configured (GEMINI_API_KEY missing)")
            return Result.failure(ErrorKind.completion, "Completion service is not configured")

        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.7,
                "maxOutputTokens": max_output_tokens,
            },
        }

        try:
            with httpx.Client(
                timeout=self.timeout or settings.COMPLETION_TIMEOUT_SECONDS,
                transport=self.transport,
            ) as client:
                response = client.post(self.endpoint, params={"key": api_key}, json=body)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Completion service returned {exc.response.status_code}")
            return Result.failure(
                ErrorKind.completion, f"Completion service error: {exc.response.status_code}"
            )
        except httpx.HTTPError as exc:
            logger.error(f"Completion service unreachable: {exc}")
            return Result.failure(ErrorKind.completion, "Completion service unreachable")
        except ValueError:
            logger.error("Completion service returned a non-JSON envelope")
            return Result.failure(ErrorKind.completion, "Completion service returned an invalid envelope")

        try:
            text = payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.error(f"Unexpected completion envelope: {str(payload)[:200]}")
            return Result.failure(ErrorKind.completion, "Completion service returned no text")

        return Result.success(text)


# =====================================================================
# REPLY PARSING
# =====================================================================

def _load_json(text: str) -> Any:
    stripped = (text or "").strip()
    fenced = _FENCE.match(stripped)
    if fenced:
        stripped = fenced.group(1)
    try:
        return json.loads(stripped)
    except ValueError as exc:
        raise MalformedCompletionResponse(f"Reply is not JSON: {exc}") from exc


def parse_journal_analysis(text: str) -> JournalAnalysis:
    """
    Parse an ``analyze_journal`` reply.

    Never raises: anything that is not a JSON object of the expected shape is
    replaced by ``JournalAnalysis.default`` carrying the raw text as insight.
    """
    try:
        payload = _load_json(text)
        if not isinstance(payload, dict):
            raise MalformedCompletionResponse("Reply is not a JSON object")
        return JournalAnalysis.model_validate(payload)
    except (MalformedCompletionResponse, PydanticValidationError) as exc:
        logger.warning(f"Using default journal analysis: {exc}")
        return JournalAnalysis.default(text or "")


def parse_generated_insights(text: str) -> Optional[List[InsightDraft]]:
    """Insight drafts from a ``generate_insights`` reply, or None when unusable."""
    try:
        payload = _load_json(text)
    except MalformedCompletionResponse as exc:
        logger.warning(f"Generated insights unusable: {exc}")
        return None

    items = payload.get("insights") if isinstance(payload, dict) else None
    if not isinstance(items, list) or not items:
        logger.warning("Generated insights reply has no insights array")
        return None

    try:
        return [InsightDraft.model_validate(item) for item in items]
    except PydanticValidationError as exc:
        logger.warning(f"Generated insights have an invalid shape: {exc}")
        return None


# =====================================================================
# COMPANION SERVICE
# =====================================================================

class CompanionService:
    """Builds prompts for each request type and interprets the replies."""

    def __init__(self, client: Optional[CompletionClient] = None):
        self.client = client or CompletionClient()

    def complete(
        self, completion_type: CompletionType, message: str, context: Any = None
    ) -> Result[str]:
        prompt = build_prompt(completion_type, message, context)
        max_tokens = (
            ANALYSIS_MAX_TOKENS
            if completion_type == CompletionType.analyze_journal
            else DEFAULT_MAX_TOKENS
        )
        return self.client.complete(prompt, max_output_tokens=max_tokens)

    def analyze_journal(self, content: str) -> Result[JournalAnalysis]:
        reply = self.complete(CompletionType.analyze_journal, content)
        if not reply.ok:
            return reply
        return Result.success(parse_journal_analysis(reply.value))

    def handle(self, request: CompanionRequest) -> Union[JournalAnalysis, CompanionResponse]:
        """
        Answer one companion request.

        Raises:
            CompletionServiceError: if the completion service fails
        """
        if request.type == CompletionType.analyze_journal:
            return self.analyze_journal(request.message).unwrap()

        text = self.complete(request.type, request.message, request.context).unwrap()
        return CompanionResponse(response=text)


# =====================================================================
# SINGLETON INSTANCE
# =====================================================================

companion_service = CompanionService()
