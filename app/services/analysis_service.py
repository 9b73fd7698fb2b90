from __future__ import annotations

import logging
from typing import Sequence

from app.core.config.scoring import ScoringPolicy, get_scoring_policy
from app.core.ids import Clock, IdGenerator, timestamped_id, utc_now
from app.features import extract_signals, match_keywords
from app.normalize.text import normalize_resume_text
from app.schemas.analysis import AnalysisInput, AnalysisResult
from app.scoring import build_overall_suggestions, compute_ats_score, score_categories, score_sections

logger = logging.getLogger(__name__)


class AnalysisValidationError(ValueError):
    """Raised when the analysis input is unusable; no scorer runs."""


def analyze(
    job_description: str,
    keywords: Sequence[str] | None,
    resume_text: str,
    *,
    policy: ScoringPolicy | None = None,
    id_generator: IdGenerator | None = None,
    clock: Clock | None = None,
) -> AnalysisResult:
    """Score a resume against a job description and package the result.

    Only an empty job description fails. Any resume text, including an empty
    string or undecodable garbage, yields a complete result with low scores.
    """
    if not job_description or not job_description.strip():
        raise AnalysisValidationError("Job description is required.")

    policy = policy or get_scoring_policy()
    request = AnalysisInput(
        job_description=job_description,
        keywords=list(keywords) if keywords is not None else None,
        resume_text=resume_text or "",
    )
    text = normalize_resume_text(request.resume_text)
    signals = extract_signals(text, policy)
    keyword_matches = match_keywords(text.lower, request.keywords)

    improvements = score_categories(text, signals, policy.categories)
    sections = score_sections(signals, keyword_matches, policy.sections)
    ats_score = compute_ats_score(improvements, sections, keyword_matches, policy.aggregate)

    result = AnalysisResult(
        ats_score=ats_score,
        improvements=improvements,
        section_analysis=sections,
        overall_suggestions=build_overall_suggestions(ats_score, signals, keyword_matches, policy.aggregate),
        keyword_matches=keyword_matches,
        analysis_id=(id_generator or timestamped_id)(),
        created_at=(clock or utc_now)(),
    )
    logger.info(
        "analysis_completed analysis_id=%s ats_score=%s keyword_match=%s resume_chars=%s",
        result.analysis_id,
        result.ats_score,
        keyword_matches.match_percentage,
        len(text.raw),
    )
    return result
