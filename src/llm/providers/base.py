from __future__ import annotations
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List

FUNCTION_CALL_INSTRUCTIONS = """
You can call these functions:
{functions}

Reply with JSON only, in this shape:
{{"text": "<short reply to the user>", "function_calls": [{{"name": "<function name>", "args": {{...}}}}]}}
Use an empty function_calls list when no function applies.
"""


class LLMProvider(ABC):
    @abstractmethod
    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        """
        Must return the model output as TEXT (we'll parse/validate JSON in LLMClient).
        """
        raise NotImplementedError

    def generate_function_calls(
        self,
        *,
        system: str,
        user: str,
        functions: List[Dict[str, Any]],
        model: str | None = None,
    ) -> Dict[str, Any]:
        """
        Returns {"text": str, "function_calls": [{"name": ..., "args": {...}}]}.

        Providers without native function calling fall back to asking for JSON;
        the raw text goes back under "raw" and LLMClient parses it.
        """
        prompt = system + FUNCTION_CALL_INSTRUCTIONS.format(functions=json.dumps(functions, indent=2))
        return {"raw": self.generate(system=prompt, user=user, model=model)}
