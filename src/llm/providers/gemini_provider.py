from __future__ import annotations
import os
from typing import Any, Dict, List

import httpx
from .base import LLMProvider

SAFETY_CATEGORIES = [
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
]


class GeminiProvider(LLMProvider):
    def __init__(self):
        self.api_key = os.getenv("GEMINI_API_KEY", "").strip()
        self.model = os.getenv("GEMINI_MODEL", "gemini-2.0-flash").strip()
        self.base_url = os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        ).strip()
        self.timeout_s = float(os.getenv("LLM_TIMEOUT_S", "30"))

        if not self.api_key:
            raise RuntimeError("GEMINI_API_KEY is missing")

    def _post(self, payload: Dict[str, Any], model: str | None) -> Dict[str, Any]:
        url = f"{self.base_url}/models/{model or self.model}:generateContent"
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        payload = {
            **payload,
            "safetySettings": [
                {"category": c, "threshold": "BLOCK_MEDIUM_AND_ABOVE"} for c in SAFETY_CATEGORIES
            ],
            "generationConfig": {"temperature": 0.2},
        }

        with httpx.Client(timeout=self.timeout_s) as client:
            r = client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            return r.json()

    @staticmethod
    def _parts(data: Dict[str, Any]) -> List[Dict[str, Any]]:
        candidates = data.get("candidates") or []
        if not candidates:
            return []
        return (candidates[0].get("content") or {}).get("parts") or []

    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        data = self._post(
            {
                "systemInstruction": {"parts": [{"text": system}]},
                "contents": [{"role": "user", "parts": [{"text": user}]}],
            },
            model,
        )
        return "".join(part.get("text", "") for part in self._parts(data))

    def generate_function_calls(
        self,
        *,
        system: str,
        user: str,
        functions: List[Dict[str, Any]],
        model: str | None = None,
    ) -> Dict[str, Any]:
        data = self._post(
            {
                "systemInstruction": {"parts": [{"text": system}]},
                "contents": [{"role": "user", "parts": [{"text": user}]}],
                "tools": [{"functionDeclarations": functions}],
            },
            model,
        )

        text = []
        calls = []
        for part in self._parts(data):
            if "functionCall" in part:
                call = part["functionCall"]
                calls.append({"name": call.get("name"), "args": call.get("args") or {}})
            elif "text" in part:
                text.append(part["text"])

        return {"text": "".join(text), "function_calls": calls}
