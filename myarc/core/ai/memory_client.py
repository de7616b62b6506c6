"""Mem0 long-term memory client."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from myarc.core.ai.result import AIResult
from myarc.core.ai.sanitize import sanitize_for_ai

logger = logging.getLogger(__name__)


class MemoryClient:
    """Index and search per-user memories through the Mem0 platform API."""

    def __init__(self, api_key: Optional[str], *, base_url: str, timeout: float = 30.0) -> None:
        self.api_key = api_key or ""
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def add(self, user_id: str, text: str) -> AIResult[bool]:
        if not self.configured:
            logger.info("Mem0 API key not set; skipping memory sync")
            return AIResult.unavailable("mem0_unconfigured")
        payload = {
            "messages": [{"role": "user", "content": sanitize_for_ai(text)}],
            "user_id": str(user_id),
        }
        if self._post("/v1/memories/", payload) is None:
            return AIResult.error("mem0_request_failed")
        return AIResult.ok(True)

    def search(self, user_id: str, query: str, limit: int = 5) -> AIResult[List[str]]:
        """Return memory snippets ranked by the vendor."""
        if not self.configured:
            return AIResult.unavailable("mem0_unconfigured")
        payload = {"query": sanitize_for_ai(query), "user_id": str(user_id), "limit": limit}
        data = self._post("/v1/memories/search/", payload)
        if data is None:
            return AIResult.error("mem0_request_failed")
        rows = data.get("results", []) if isinstance(data, dict) else data
        snippets = [row.get("memory") for row in rows or [] if isinstance(row, dict) and row.get("memory")]
        return AIResult.ok(snippets[:limit])

    def _post(self, path: str, payload: Dict[str, Any]) -> Optional[Any]:
        try:
            resp = requests.post(
                f"{self.base_url}{path}",
                json=payload,
                headers={"Authorization": f"Token {self.api_key}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            logger.warning("Mem0 request to %s failed: %s", path, e.__class__.__name__)
            return None
        except ValueError:
            logger.warning("Mem0 response from %s was not JSON", path)
            return None
