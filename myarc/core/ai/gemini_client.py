"""Gemini REST client for text generation and embeddings."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

import requests

from myarc.core.ai.result import AIResult
from myarc.core.ai.sanitize import sanitize_for_ai

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


class GeminiClient:
    """Thin wrapper over the Generative Language API.

    Every outbound text is passed through ``sanitize_for_ai``. Calls are made
    once; any transport or payload problem comes back as an ``AIResult``
    instead of an exception.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str,
        model: str,
        prompt_model: str,
        embedding_model: str,
        embedding_dimensions: int,
        embedding_max_chars: int,
        timeout: float = 30.0,
    ) -> None:
        self.api_key = api_key or ""
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.prompt_model = prompt_model
        self.embedding_model = embedding_model
        self.embedding_dimensions = embedding_dimensions
        self.embedding_max_chars = embedding_max_chars
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def generate(
        self,
        prompt: str,
        *,
        model: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        temperature: Optional[float] = None,
    ) -> AIResult[str]:
        """Return the first candidate's text."""
        if not self.configured:
            logger.info("Gemini API key not set; skipping generation")
            return AIResult.unavailable("gemini_unconfigured")

        generation_config: Dict[str, Any] = {}
        if response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema
        if temperature is not None:
            generation_config["temperature"] = temperature
        payload: Dict[str, Any] = {"contents": [{"parts": [{"text": sanitize_for_ai(prompt)}]}]}
        if generation_config:
            payload["generationConfig"] = generation_config

        data = self._post(f"models/{model or self.model}:generateContent", payload)
        if data is None:
            return AIResult.error("gemini_request_failed")
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Gemini response had no candidate text")
            return AIResult.unavailable("gemini_empty_response")
        text = (text or "").strip()
        if not text:
            return AIResult.unavailable("gemini_empty_response")
        return AIResult.ok(text)

    def generate_json(
        self,
        prompt: str,
        *,
        response_schema: Dict[str, Any],
        model: Optional[str] = None,
    ) -> AIResult[Dict[str, Any]]:
        """Generate constrained JSON and decode it."""
        result = self.generate(prompt, model=model, response_schema=response_schema)
        if not result.is_ok:
            return AIResult(status=result.status, detail=result.detail)
        clean = _CODE_FENCE_RE.sub("", result.value or "").strip()
        try:
            decoded = json.loads(clean)
        except json.JSONDecodeError as exc:
            logger.warning("Gemini returned non-JSON output: %s", exc)
            return AIResult.error("gemini_malformed_json")
        if not isinstance(decoded, dict):
            logger.warning("Gemini returned JSON of type %s", type(decoded).__name__)
            return AIResult.error("gemini_malformed_json")
        return AIResult.ok(decoded)

    def embed(self, text: str) -> AIResult[List[float]]:
        """Return a fixed-length embedding for ``text``."""
        if not self.configured:
            logger.info("Gemini API key not set; skipping embedding")
            return AIResult.unavailable("gemini_unconfigured")
        clipped = sanitize_for_ai(text or "")[: self.embedding_max_chars]
        if not clipped.strip():
            return AIResult.unavailable("empty_text")

        payload = {
            "model": f"models/{self.embedding_model}",
            "content": {"parts": [{"text": clipped}]},
            "outputDimensionality": self.embedding_dimensions,
        }
        data = self._post(f"models/{self.embedding_model}:embedContent", payload)
        if data is None:
            return AIResult.error("gemini_request_failed")
        values = (data.get("embedding") or {}).get("values") or []
        if len(values) != self.embedding_dimensions:
            logger.warning(
                "Embedding length %d does not match configured %d",
                len(values),
                self.embedding_dimensions,
            )
            return AIResult.error("embedding_dimension_mismatch")
        return AIResult.ok([float(v) for v in values])

    def _post(self, path: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url}/{path}"
        try:
            resp = requests.post(
                url,
                json=payload,
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            logger.warning("Gemini request to %s failed: %s", path, e.__class__.__name__)
            return None
        except ValueError:
            logger.warning("Gemini response from %s was not JSON", path)
            return None
