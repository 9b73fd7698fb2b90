from __future__ import annotations

import math
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

_SCORING_CONFIG_CACHE: dict[str, Any] | None = None
_SCORING_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "scoring.yaml"


def get_scoring_config() -> dict[str, Any]:
    """Load scoring config from repo-level config/scoring.yaml and cache it."""
    global _SCORING_CONFIG_CACHE

    if _SCORING_CONFIG_CACHE is not None:
        return _SCORING_CONFIG_CACHE

    if not _SCORING_CONFIG_PATH.exists():
        raise RuntimeError(
            f"Scoring config not found at '{_SCORING_CONFIG_PATH}'. "
            "Expected file: config/scoring.yaml"
        )

    try:
        raw = _SCORING_CONFIG_PATH.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(
            f"Failed to read scoring config '{_SCORING_CONFIG_PATH}': {exc}"
        ) from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(
            f"Invalid YAML in scoring config '{_SCORING_CONFIG_PATH}': {exc}"
        ) from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid scoring config '{_SCORING_CONFIG_PATH}': expected a top-level mapping."
        )

    _SCORING_CONFIG_CACHE = parsed
    return _SCORING_CONFIG_CACHE


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SectionKeywords(_Frozen):
    summary: tuple[str, ...]
    experience: tuple[str, ...]
    education: tuple[str, ...]
    skills: tuple[str, ...]


class SignalPolicy(_Frozen):
    action_verbs: tuple[str, ...]
    misspellings: tuple[str, ...]
    sections: SectionKeywords


class SpellingPolicy(_Frozen):
    base: int
    penalty_per_issue: int
    floor: int


class BaselinePolicy(_Frozen):
    baseline: int
    issue_threshold: int


class QuantifiablePolicy(_Frozen):
    base: int
    per_achievement: int
    strong_count: int


class ReadabilityPolicy(_Frozen):
    base: int
    length_bonus: int
    bonus_min_chars: int
    bonus_max_chars: int
    brief_below_chars: int
    lengthy_above_chars: int


class CategoryPolicy(_Frozen):
    spelling: SpellingPolicy
    grammar: BaselinePolicy
    quantifiable_achievements: QuantifiablePolicy
    readability: ReadabilityPolicy
    formatting: BaselinePolicy


class ContactInfoPolicy(_Frozen):
    base: int
    email_bonus: int
    phone_bonus: int
    linkedin_bonus: int


class PresencePolicy(_Frozen):
    present: int
    absent: int


class ExperiencePolicy(_Frozen):
    base: int
    section_bonus: int
    per_action_verb: int
    action_verb_cap: int
    strong_verb_count: int


class SkillsPolicy(_Frozen):
    base: int
    section_bonus: int
    match_factor: float
    match_cap: float
    aligned_match_percentage: int


class SectionPolicy(_Frozen):
    contact_info: ContactInfoPolicy
    summary: PresencePolicy
    experience: ExperiencePolicy
    education: PresencePolicy
    skills: SkillsPolicy


class AggregateWeights(_Frozen):
    contact_info: float
    summary: float
    experience: float
    education: float
    skills: float
    quantifiable_achievements: float
    spelling: float
    grammar: float


class AggregatePolicy(_Frozen):
    weights: AggregateWeights
    base_share: float = Field(ge=0.0, le=1.0)
    keyword_share: float = Field(ge=0.0, le=1.0)
    keyword_alignment_threshold: int
    achievement_target: int

    @model_validator(mode="after")
    def _check_totals(self) -> "AggregatePolicy":
        weight_total = sum(self.weights.model_dump().values())
        if not math.isclose(weight_total, 1.0, abs_tol=1e-9):
            raise ValueError(f"aggregate weights must sum to 1.0, got {weight_total}")
        if not math.isclose(self.base_share + self.keyword_share, 1.0, abs_tol=1e-9):
            raise ValueError("base_share and keyword_share must sum to 1.0")
        return self


class ScoringPolicy(_Frozen):
    """Every weight, threshold and bonus cap used by the scoring engine."""

    signals: SignalPolicy
    categories: CategoryPolicy
    sections: SectionPolicy
    aggregate: AggregatePolicy


def load_scoring_policy(config: dict[str, Any] | None = None) -> ScoringPolicy:
    """Validate a raw config mapping (default: config/scoring.yaml) into a ScoringPolicy."""
    raw = config if config is not None else get_scoring_config()
    return ScoringPolicy.model_validate(raw)


@lru_cache(maxsize=1)
def get_scoring_policy() -> ScoringPolicy:
    return load_scoring_policy()
