from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class NormalizedText(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw: str
    lower: str


def normalize_resume_text(text: str | None) -> NormalizedText:
    raw = text or ""
    return NormalizedText(raw=raw, lower=raw.lower())


def contains_any(lowered: str, markers: tuple[str, ...]) -> bool:
    return any(marker.lower() in lowered for marker in markers)


def markers_present(lowered: str, markers: tuple[str, ...]) -> list[str]:
    return [marker for marker in markers if marker.lower() in lowered]
