from __future__ import annotations

from app.core.config.scoring import CategoryPolicy
from app.features.signals import ResumeSignals
from app.normalize.text import NormalizedText
from app.schemas.analysis import FeedbackScore, ImprovementCategories, IssueScore
from app.scoring.rounding import clamp_score


def score_spelling(signals: ResumeSignals, policy: CategoryPolicy) -> IssueScore:
    rules = policy.spelling
    found = signals.spelling.misspellings
    score = clamp_score(max(rules.floor, rules.base - rules.penalty_per_issue * len(found)))
    if found:
        return IssueScore(
            score=score,
            issues=[f"Found potential spelling issues: {', '.join(found)}"],
            suggestions=["Use spell-check tools", "Proofread carefully before submitting"],
        )
    return IssueScore(score=score, issues=[], suggestions=["Spelling looks good!"])


def score_grammar(signals: ResumeSignals, policy: CategoryPolicy) -> IssueScore:
    # No grammar engine; fixed baseline.
    rules = policy.grammar
    score = clamp_score(rules.baseline)
    if score < rules.issue_threshold:
        return IssueScore(
            score=score,
            issues=["Minor grammatical inconsistencies detected"],
            suggestions=["Review sentence structure", "Consider professional proofreading"],
        )
    return IssueScore(score=score, issues=[], suggestions=["Grammar appears to be in good shape"])


def score_quantifiable_achievements(signals: ResumeSignals, policy: CategoryPolicy) -> FeedbackScore:
    rules = policy.quantifiable_achievements
    count = signals.quantifiable_achievements.count
    score = clamp_score(min(100, rules.base + rules.per_achievement * count))

    if count == 0:
        feedback = "No quantifiable achievements found. Add specific numbers, percentages, and metrics."
    elif count < rules.strong_count:
        feedback = "Some quantifiable achievements present, but more would strengthen your resume."
    else:
        feedback = "Good use of quantifiable achievements throughout the resume."

    if count < rules.strong_count:
        suggestions = [
            "Add specific numbers and percentages to your accomplishments",
            "Include metrics like revenue generated, costs saved, or performance improvements",
            "Quantify team sizes, project scopes, and timeframes",
        ]
    else:
        suggestions = ["Continue to include specific metrics and results in your achievements"]
    return FeedbackScore(score=score, feedback=feedback, suggestions=suggestions)


def score_readability(text: NormalizedText, policy: CategoryPolicy) -> FeedbackScore:
    rules = policy.readability
    length = len(text.raw)
    bonus = rules.length_bonus if rules.bonus_min_chars <= length < rules.bonus_max_chars else 0
    score = clamp_score(rules.base + bonus)

    if length < rules.brief_below_chars:
        feedback = "Resume appears too brief. Consider adding more detail."
        suggestions = ["Add more detail to your experience and achievements"]
    elif length > rules.lengthy_above_chars:
        feedback = "Resume may be too lengthy. Consider condensing content."
        suggestions = ["Consider condensing content to 1-2 pages", "Focus on most relevant experiences"]
    else:
        feedback = "Resume length and readability are appropriate."
        suggestions = ["Maintain clear, concise language throughout"]
    return FeedbackScore(score=score, feedback=feedback, suggestions=suggestions)


def score_formatting(signals: ResumeSignals, policy: CategoryPolicy) -> IssueScore:
    # Plain text carries no layout; fixed baseline.
    rules = policy.formatting
    score = clamp_score(rules.baseline)
    issues = ["Minor formatting inconsistencies detected"] if score < rules.issue_threshold else []
    return IssueScore(
        score=score,
        issues=issues,
        suggestions=[
            "Ensure consistent font usage throughout",
            "Use bullet points for easy scanning",
            "Maintain consistent spacing and alignment",
        ],
    )


def score_categories(text: NormalizedText, signals: ResumeSignals, policy: CategoryPolicy) -> ImprovementCategories:
    return ImprovementCategories(
        spelling=score_spelling(signals, policy),
        grammar=score_grammar(signals, policy),
        quantifiable_achievements=score_quantifiable_achievements(signals, policy),
        readability=score_readability(text, policy),
        formatting=score_formatting(signals, policy),
    )
