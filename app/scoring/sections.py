from __future__ import annotations

from app.core.config.scoring import SectionPolicy
from app.features.signals import ResumeSignals
from app.schemas.analysis import KeywordMatchResult, SectionAnalysis, SectionScore
from app.scoring.rounding import clamp_score


def score_contact_info(signals: ResumeSignals, policy: SectionPolicy) -> SectionScore:
    rules = policy.contact_info
    contact = signals.contact_info
    score = clamp_score(
        rules.base
        + (rules.email_bonus if contact.has_email else 0)
        + (rules.phone_bonus if contact.has_phone else 0)
        + (rules.linkedin_bonus if contact.has_linkedin else 0)
    )

    if not contact.has_email:
        feedback = "Missing email address"
    elif not contact.has_phone:
        feedback = "Missing phone number"
    else:
        feedback = "Contact information is complete and professional"

    suggestions: list[str] = []
    if not contact.has_email:
        suggestions.append("Add a professional email address")
    if not contact.has_phone:
        suggestions.append("Include a phone number")
    if not contact.has_linkedin:
        suggestions.append("Consider adding LinkedIn profile URL")
    suggestions.append("Ensure all contact information is current and professional")
    return SectionScore(score=score, feedback=feedback, suggestions=suggestions)


def score_summary(signals: ResumeSignals, policy: SectionPolicy) -> SectionScore:
    if signals.sections.has_summary:
        return SectionScore(
            score=clamp_score(policy.summary.present),
            feedback="Summary section present. Ensure it aligns with the job description.",
            suggestions=[
                "Tailor summary to match job requirements",
                "Include relevant keywords from job posting",
                "Highlight your most relevant achievements",
            ],
        )
    return SectionScore(
        score=clamp_score(policy.summary.absent),
        feedback="No summary or objective section found. This is valuable for ATS systems.",
        suggestions=[
            "Add a professional summary at the top of your resume",
            "Include 2-3 sentences highlighting your key qualifications",
            "Align summary content with job requirements",
        ],
    )


def score_experience(signals: ResumeSignals, policy: SectionPolicy) -> SectionScore:
    rules = policy.experience
    has_section = signals.sections.has_experience
    verb_count = signals.action_verbs.count
    score = clamp_score(
        rules.base
        + (rules.section_bonus if has_section else 0)
        + min(rules.per_action_verb * verb_count, rules.action_verb_cap)
    )

    if not has_section:
        feedback = "No clear experience section found"
    elif verb_count < rules.strong_verb_count:
        feedback = "Experience section present but could use stronger action verbs"
    else:
        feedback = "Experience section is well-structured with good use of action verbs"

    suggestions = [] if has_section else ["Add a clear work experience section"]
    suggestions += [
        "Start bullet points with strong action verbs",
        "Focus on achievements rather than just responsibilities",
        "Include relevant experience that matches job requirements",
    ]
    return SectionScore(score=score, feedback=feedback, suggestions=suggestions)


def score_education(signals: ResumeSignals, policy: SectionPolicy) -> SectionScore:
    if signals.sections.has_education:
        return SectionScore(
            score=clamp_score(policy.education.present),
            feedback="Education section is present and complete",
            suggestions=[
                "Include relevant certifications if applicable",
                "List degree, institution, and graduation year",
            ],
        )
    return SectionScore(
        score=clamp_score(policy.education.absent),
        feedback="Education section not clearly identified",
        suggestions=[
            "Add education section with degree details",
            "Include relevant certifications or training",
        ],
    )


def score_skills(signals: ResumeSignals, keywords: KeywordMatchResult, policy: SectionPolicy) -> SectionScore:
    rules = policy.skills
    has_section = signals.sections.has_skills
    match_percentage = keywords.match_percentage
    score = clamp_score(
        rules.base
        + (rules.section_bonus if has_section else 0)
        + min(rules.match_factor * match_percentage, rules.match_cap)
    )

    if not has_section:
        feedback = "No dedicated skills section found"
    elif match_percentage < rules.aligned_match_percentage:
        feedback = "Skills section present but needs better alignment with job keywords"
    else:
        feedback = "Skills section well-aligned with job requirements"

    suggestions = [] if has_section else ["Add a dedicated skills section"]
    suggestions += [
        "Include technical skills mentioned in the job posting",
        "Organize skills by category (technical, soft skills, etc.)",
        "Remove outdated or irrelevant skills",
    ]
    return SectionScore(score=score, feedback=feedback, suggestions=suggestions)


def score_sections(signals: ResumeSignals, keywords: KeywordMatchResult, policy: SectionPolicy) -> SectionAnalysis:
    return SectionAnalysis(
        contact_info=score_contact_info(signals, policy),
        summary=score_summary(signals, policy),
        experience=score_experience(signals, policy),
        education=score_education(signals, policy),
        skills=score_skills(signals, keywords, policy),
    )
