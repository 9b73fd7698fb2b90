from .aggregate import build_overall_suggestions, compute_ats_score
from .categories import score_categories
from .rounding import clamp_score, round_half_up
from .sections import score_sections

__all__ = [
    "build_overall_suggestions",
    "compute_ats_score",
    "score_categories",
    "score_sections",
    "clamp_score",
    "round_half_up",
]
