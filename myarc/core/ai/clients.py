"""Process-wide vendor clients built once from app config."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from flask import current_app

from myarc.core.ai.gemini_client import GeminiClient
from myarc.core.ai.memory_client import MemoryClient

EXTENSION_KEY = "ai_clients"


@dataclass
class AIClients:
    gemini: GeminiClient
    memory: MemoryClient


def build_ai_clients(config: Mapping) -> AIClients:
    timeout = float(config.get("AI_REQUEST_TIMEOUT_SECONDS", 30))
    gemini = GeminiClient(
        config.get("GEMINI_API_KEY"),
        base_url=config["GEMINI_BASE_URL"],
        model=config["GEMINI_MODEL"],
        prompt_model=config["GEMINI_PROMPT_MODEL"],
        embedding_model=config["GEMINI_EMBEDDING_MODEL"],
        embedding_dimensions=int(config["EMBEDDING_DIMENSIONS"]),
        embedding_max_chars=int(config["EMBEDDING_MAX_CHARS"]),
        timeout=timeout,
    )
    memory = MemoryClient(config.get("MEM0_API_KEY"), base_url=config["MEM0_BASE_URL"], timeout=timeout)
    return AIClients(gemini=gemini, memory=memory)


def get_ai_clients() -> AIClients:
    return current_app.extensions[EXTENSION_KEY]
