from __future__ import annotations

from app.core.config.scoring import AggregatePolicy
from app.features.signals import ResumeSignals
from app.schemas.analysis import ImprovementCategories, KeywordMatchResult, SectionAnalysis
from app.scoring.rounding import clamp_score


def compute_ats_score(
    improvements: ImprovementCategories,
    sections: SectionAnalysis,
    keywords: KeywordMatchResult,
    policy: AggregatePolicy,
) -> int:
    """Blend section and category scores with the keyword match percentage.

    Readability and formatting are not part of the weighting table and never
    move the overall score.
    """
    weights = policy.weights
    base_weighted = (
        sections.contact_info.score * weights.contact_info
        + sections.summary.score * weights.summary
        + sections.experience.score * weights.experience
        + sections.education.score * weights.education
        + sections.skills.score * weights.skills
        + improvements.quantifiable_achievements.score * weights.quantifiable_achievements
        + improvements.spelling.score * weights.spelling
        + improvements.grammar.score * weights.grammar
    )
    return clamp_score(base_weighted * policy.base_share + keywords.match_percentage * policy.keyword_share)


def build_overall_suggestions(
    ats_score: int,
    signals: ResumeSignals,
    keywords: KeywordMatchResult,
    policy: AggregatePolicy,
) -> list[str]:
    suggestions = [f"Your resume scored {ats_score}/100 for ATS compatibility"]

    if keywords.match_percentage < policy.keyword_alignment_threshold:
        suggestions.append("Incorporate more keywords from the job description")
    else:
        suggestions.append("Good keyword alignment with job requirements")

    if signals.quantifiable_achievements.count < policy.achievement_target:
        suggestions.append("Add more quantifiable achievements with specific numbers and metrics")
    else:
        suggestions.append("Strong use of quantifiable achievements")

    suggestions.append("Tailor your resume for each job application")
    suggestions.append("Use a clean, ATS-friendly format without complex layouts")
    return suggestions
