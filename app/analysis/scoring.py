from __future__ import annotations

from app.core.analysis_config import get_analysis_tuple, get_analysis_value

_DEFAULT_KEYWORDS = ("excellent", "strong", "impressive", "good")


def _clamp(value: float, low: int, high: int) -> int:
    return int(max(low, min(high, value)))


def score_section(text: str | None) -> int:
    """Keyword heuristic: base score plus a bonus per positive keyword present."""
    lowered = (text or "").lower()
    base = int(get_analysis_value("scoring.base", 50))
    bonus = int(get_analysis_value("scoring.keyword_bonus", 5))
    keywords = get_analysis_tuple("scoring.positive_keywords", _DEFAULT_KEYWORDS)

    score = base + sum(bonus for keyword in keywords if keyword.lower() in lowered)
    return _clamp(
        score,
        int(get_analysis_value("scoring.min", 0)),
        int(get_analysis_value("scoring.max", 100)),
    )


def overall_score(skills: int, experience: int, education: int) -> int:
    weighted = (
        float(get_analysis_value("scoring.weights.skills", 0.4)) * skills
        + float(get_analysis_value("scoring.weights.experience", 0.4)) * experience
        + float(get_analysis_value("scoring.weights.education", 0.2)) * education
    )
    return _clamp(round(weighted), 0, 100)
