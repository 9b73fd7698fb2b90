from .keywords import match_keywords
from .signals import (
    SIGNAL_EXTRACTORS,
    ActionVerbSignal,
    ContactInfoSignal,
    QuantifiableSignal,
    ResumeSignals,
    SectionSignal,
    SpellingSignal,
    extract_signals,
)

__all__ = [
    "match_keywords",
    "SIGNAL_EXTRACTORS",
    "ActionVerbSignal",
    "ContactInfoSignal",
    "QuantifiableSignal",
    "ResumeSignals",
    "SectionSignal",
    "SpellingSignal",
    "extract_signals",
]
