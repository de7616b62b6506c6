from myarc.core.ai.clients import AIClients, build_ai_clients, get_ai_clients
from myarc.core.ai.embeddings import embed_entry, embed_text
from myarc.core.ai.ranking import cosine_similarity, rank_candidates, score_candidates
from myarc.core.ai.result import AIResult
from myarc.core.ai.sanitize import sanitize_for_ai

__all__ = [
    "AIClients",
    "AIResult",
    "build_ai_clients",
    "get_ai_clients",
    "embed_entry",
    "embed_text",
    "cosine_similarity",
    "rank_candidates",
    "score_candidates",
    "sanitize_for_ai",
]
