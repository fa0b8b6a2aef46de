"""Pipeline stages: key terms, candidate pool, ranking engines, orchestration, weekly pick."""

from .candidate_pool import get_candidate_pool, get_text_candidates, load_reference, store_call
from .genre import pick_by_genre
from .key_terms import extract_key_terms, tokenize
from .orchestrator import SimilarityOrchestrator
from .weekly import WeeklySelector, candidate_tiers, week_number

__all__ = [
    "SimilarityOrchestrator",
    "WeeklySelector",
    "candidate_tiers",
    "extract_key_terms",
    "get_candidate_pool",
    "get_text_candidates",
    "load_reference",
    "pick_by_genre",
    "store_call",
    "tokenize",
    "week_number",
]
