from __future__ import annotations
import json
import os
from typing import Any, Dict, List

import httpx
from .base import LLMProvider


class OpenAIProvider(LLMProvider):
    def __init__(self):
        self.api_key = os.getenv("OPENAI_API_KEY", "").strip()
        self.model = os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()
        self.base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip()
        self.timeout_s = float(os.getenv("LLM_TIMEOUT_S", "30"))

        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY is missing")

    def _chat(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        with httpx.Client(timeout=self.timeout_s) as client:
            r = client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            return r.json()

    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        data = self._chat(
            {
                "model": model or self.model,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                "temperature": 0.2,
            }
        )
        return data["choices"][0]["message"]["content"] or ""

    def generate_function_calls(
        self,
        *,
        system: str,
        user: str,
        functions: List[Dict[str, Any]],
        model: str | None = None,
    ) -> Dict[str, Any]:
        data = self._chat(
            {
                "model": model or self.model,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                "tools": [{"type": "function", "function": f} for f in functions],
                "temperature": 0.2,
            }
        )
        message = data["choices"][0]["message"]

        calls = []
        for tool_call in message.get("tool_calls") or []:
            fn = tool_call.get("function") or {}
            # arguments arrive as a JSON string
            args = json.loads(fn.get("arguments") or "{}")
            calls.append({"name": fn.get("name"), "args": args})

        return {"text": message.get("content") or "", "function_calls": calls}
