from __future__ import annotations

import re
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from app.core.config.scoring import ScoringPolicy
from app.normalize.text import NormalizedText, contains_any, markers_present

_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z|]{2,}\b")
_PHONE_RE = re.compile(r"\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}")
# ASCII digits only; starts at the beginning of a digit run.
_QUANT_MARKER_RE = re.compile(r"(?<![0-9])[0-9]+[%$k+]")


class _Signal(BaseModel):
    model_config = ConfigDict(frozen=True)


class ContactInfoSignal(_Signal):
    has_email: bool = False
    has_phone: bool = False
    has_linkedin: bool = False


class QuantifiableSignal(_Signal):
    count: int = 0


class ActionVerbSignal(_Signal):
    count: int = 0
    verbs: tuple[str, ...] = ()


class SpellingSignal(_Signal):
    misspellings: tuple[str, ...] = ()


class SectionSignal(_Signal):
    has_summary: bool = False
    has_experience: bool = False
    has_education: bool = False
    has_skills: bool = False


class ResumeSignals(_Signal):
    contact_info: ContactInfoSignal
    quantifiable_achievements: QuantifiableSignal
    action_verbs: ActionVerbSignal
    spelling: SpellingSignal
    sections: SectionSignal


def extract_contact_info(text: NormalizedText, policy: ScoringPolicy) -> ContactInfoSignal:
    return ContactInfoSignal(
        has_email="@" in text.raw and bool(_EMAIL_RE.search(text.raw)),
        has_phone=bool(_PHONE_RE.search(text.raw)),
        has_linkedin="linkedin" in text.lower,
    )


def extract_quantifiable_achievements(text: NormalizedText, policy: ScoringPolicy) -> QuantifiableSignal:
    return QuantifiableSignal(count=len(_QUANT_MARKER_RE.findall(text.raw)))


def extract_action_verbs(text: NormalizedText, policy: ScoringPolicy) -> ActionVerbSignal:
    # Plain substring test, so "led" also hits "skilled".
    found = markers_present(text.lower, policy.signals.action_verbs)
    return ActionVerbSignal(count=len(found), verbs=tuple(found))


def extract_spelling(text: NormalizedText, policy: ScoringPolicy) -> SpellingSignal:
    return SpellingSignal(misspellings=tuple(markers_present(text.lower, policy.signals.misspellings)))


def extract_sections(text: NormalizedText, policy: ScoringPolicy) -> SectionSignal:
    headings = policy.signals.sections
    return SectionSignal(
        has_summary=contains_any(text.lower, headings.summary),
        has_experience=contains_any(text.lower, headings.experience),
        has_education=contains_any(text.lower, headings.education),
        has_skills=contains_any(text.lower, headings.skills),
    )


SignalExtractor = Callable[[NormalizedText, ScoringPolicy], Any]

# Order is irrelevant; each extractor only reads the normalized text.
SIGNAL_EXTRACTORS: dict[str, SignalExtractor] = {
    "contact_info": extract_contact_info,
    "quantifiable_achievements": extract_quantifiable_achievements,
    "action_verbs": extract_action_verbs,
    "spelling": extract_spelling,
    "sections": extract_sections,
}


def extract_signals(text: NormalizedText, policy: ScoringPolicy) -> ResumeSignals:
    return ResumeSignals(**{name: extractor(text, policy) for name, extractor in SIGNAL_EXTRACTORS.items()})
