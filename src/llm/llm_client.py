import json
import logging
import os
import re
from datetime import date
from typing import Iterable, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from greedy.errors import UpstreamError
from greedy.models import Assignment, FileAttachment
from llm.prompts import PRIORITY_PROMPT, SYLLABUS_PROMPT, assistant_system_prompt, chat_user_prompt
from llm.providers.base import LLMProvider
from llm.schemas import FUNCTION_DECLARATIONS, FunctionCall, ModelReply, PriorityAssessment, SyllabusSummary

logger = logging.getLogger(__name__)

# failures a provider call can surface
_PROVIDER_ERRORS = (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError)


def provider_from_env() -> LLMProvider:
    name = os.getenv("LLM_PROVIDER", "gemini").strip().lower()
    if name == "openai":
        from llm.providers.openai_provider import OpenAIProvider

        return OpenAIProvider()
    if name == "mock":
        from llm.providers.mock_provider import MockProvider

        return MockProvider()
    from llm.providers.gemini_provider import GeminiProvider

    return GeminiProvider()


def extract_json(text: str) -> Optional[dict]:
    """Pull the first JSON object out of model text (code fences and chatter allowed)."""
    if not text:
        return None
    cleaned = re.sub(r"```(?:json)?", "", text)
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        data = json.loads(cleaned[start:end + 1])
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


class LLMClient:
    """Provider-agnostic access to the language model.

    Every public method either returns validated data or raises UpstreamError.
    """

    def __init__(self, provider: Optional[LLMProvider] = None):
        self.provider = provider if provider is not None else provider_from_env()

    def _select_model_name(self, model_tier: str) -> Optional[str]:
        # None lets the provider use its configured default model
        if model_tier == "small":
            return os.getenv("LLM_MODEL_SMALL") or None
        return os.getenv("LLM_MODEL_LARGE") or None

    def complete(self, prompt: str, system: str = "", model_tier: str = "small") -> str:
        """Return the JSON object found in the model reply, or "{}" when there is none."""
        try:
            text = self.provider.generate(
                system=system, user=prompt, model=self._select_model_name(model_tier)
            )
        except _PROVIDER_ERRORS as e:
            raise UpstreamError(f"Language model request failed: {e}") from e
        data = extract_json(text)
        if data is None:
            logger.warning("Model reply contained no JSON object: %.200s", text)
            return "{}"
        return json.dumps(data)

    def interpret_message(
        self,
        message: str,
        today: Optional[date] = None,
        selected: Optional[Assignment] = None,
        files: Iterable[FileAttachment] = (),
        model_tier: str = "small",
    ) -> ModelReply:
        """Send a chat message with the intent declarations; return text plus function calls."""
        try:
            raw = self.provider.generate_function_calls(
                system=assistant_system_prompt(today or date.today()),
                user=chat_user_prompt(message, selected, files),
                functions=FUNCTION_DECLARATIONS,
                model=self._select_model_name(model_tier),
            )
        except _PROVIDER_ERRORS as e:
            raise UpstreamError(f"Language model request failed: {e}") from e

        if not isinstance(raw, dict):
            raise UpstreamError("Language model returned an unexpected reply shape")

        if "raw" in raw:
            parsed = extract_json(raw["raw"])
            if parsed is None:
                # plain-text answer, no intents
                return ModelReply(text=str(raw["raw"]).strip())
            raw = parsed

        calls = []
        for item in raw.get("function_calls") or raw.get("functionCalls") or []:
            try:
                calls.append(FunctionCall.model_validate(item))
            except PydanticValidationError as e:
                logger.warning("Dropping malformed function call %r: %s", item, e)
        text = raw.get("text") or ""
        logger.info("Model returned %d function call(s)", len(calls))
        return ModelReply(text=str(text), function_calls=calls)

    def assess_priority(self, content: str, model_tier: str = "small") -> PriorityAssessment:
        data = json.loads(
            self.complete(f"Assignment Content:\n{content}", system=PRIORITY_PROMPT, model_tier=model_tier)
        )
        if not data:
            raise UpstreamError("Language model returned no priority assessment")
        try:
            return PriorityAssessment.model_validate(data)
        except PydanticValidationError as e:
            raise UpstreamError(f"Malformed priority assessment: {e.error_count()} error(s)") from e

    def summarize_syllabus(self, text: str, model_tier: str = "large") -> SyllabusSummary:
        data = json.loads(
            self.complete(f"Syllabus text:\n{text}", system=SYLLABUS_PROMPT, model_tier=model_tier)
        )
        try:
            return SyllabusSummary.model_validate(data)
        except PydanticValidationError as e:
            raise UpstreamError(f"Malformed syllabus summary: {e.error_count()} error(s)") from e
