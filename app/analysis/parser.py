from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from app.analysis.contract import (
    EDUCATION_ENHANCEMENT_HEADING,
    EXPERIENCE_RECOMMENDATIONS_HEADING,
    NO_RECOMMENDATIONS_SENTENCE,
    RECOMMENDATION_MARKERS,
    TECHNICAL_SKILLS_HEADING,
)
from app.core.analysis_config import get_analysis_tuple, get_analysis_value
from app.schemas.analysis import (
    SECTION_KINDS,
    AnalysisReport,
    ExtractedSkill,
    ReportView,
    SectionInsights,
    SectionResult,
)

_DEFAULT_SKIP_PHRASES = ("not applicable", "not provided", "no data", "details missing")
_DEFAULT_EMPTY_SKILL_TOKENS = ("none", "n/a")
_DEFAULT_SKILL_CATEGORIES = ("Programming Languages", "Frontend Development", "Backend Development")

_KEY_POINT_LEAD_RE = re.compile(r"^\*\*[0-9]+\.|^\*\s|^\*\*[A-Za-z]")
_BOLD_BULLET = "* **"
_BOLD_RE = re.compile(r"\*\*")
_STAR_BULLET_RE = re.compile(r"^\* ")
_NUMBER_PREFIX_RE = re.compile(r"^\d+\.\s*")
_BOLD_BULLET_PREFIX_RE = re.compile(r"^\* \*\*|\*\*")
_SKILL_LINE_RE = re.compile(r"^(?:[*\-]|\d+\.)")
_SKILL_MARKER_RE = re.compile(r"^[*\-]\s*|^\d+\.\s*")
_SKILL_SPLIT_RE = re.compile(r"—| - |:")
_BOLD_SKILLS_BLOCK_RE = re.compile(
    rf"\*\*{re.escape(TECHNICAL_SKILLS_HEADING)}:?\*\*(.*?)(?=\*\*|\Z)", re.IGNORECASE | re.DOTALL
)
_PLAIN_SKILLS_BLOCK_RE = re.compile(
    rf"{re.escape(TECHNICAL_SKILLS_HEADING)}:?(.*?)(?=\n\n|\Z)", re.IGNORECASE | re.DOTALL
)
_EXTRA_RECOMMENDATION_MARKERS = (EXPERIENCE_RECOMMENDATIONS_HEADING, EDUCATION_ENHANCEMENT_HEADING)


def _skip_phrases() -> tuple[str, ...]:
    return tuple(p.lower() for p in get_analysis_tuple("extraction.skip_phrases", _DEFAULT_SKIP_PHRASES))


def should_skip_line(line: str) -> bool:
    lowered = line.lower()
    return any(phrase in lowered for phrase in _skip_phrases())


def _always(_: str) -> bool:
    return True


@dataclass(frozen=True)
class LineRule:
    """One extraction rule: which lines to take, how to clean them, what to keep."""

    name: str
    match: Callable[[str], bool]
    strip: Callable[[str], str]
    keep: Callable[[str], bool] = _always
    limit: int | None = None

    def apply(self, lines: Iterable[str]) -> list[str]:
        found: list[str] = []
        for line in lines:
            if not self.match(line):
                continue
            cleaned = self.strip(line)
            if not cleaned or not self.keep(cleaned):
                continue
            found.append(cleaned)
            if self.limit is not None and len(found) >= self.limit:
                break
        return found


def _strip_key_point(line: str) -> str:
    cleaned = _BOLD_RE.sub("", line)
    cleaned = _STAR_BULLET_RE.sub("", cleaned, count=1)
    cleaned = _NUMBER_PREFIX_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def _strip_recommendation(line: str) -> str:
    return _BOLD_BULLET_PREFIX_RE.sub("", line.strip()).strip()


def _is_skill_line(line: str) -> bool:
    return bool(_SKILL_LINE_RE.match(line)) and TECHNICAL_SKILLS_HEADING.lower() not in line.lower()


def _strip_skill_marker(line: str) -> str:
    return _SKILL_MARKER_RE.sub("", line, count=1).strip()


def _keep_skill(line: str) -> bool:
    empty_tokens = get_analysis_tuple("extraction.empty_skill_tokens", _DEFAULT_EMPTY_SKILL_TOKENS)
    if line.lower() in {token.lower() for token in empty_tokens}:
        return False
    return not should_skip_line(line)


def key_point_rule() -> LineRule:
    return LineRule(
        name="key_points",
        match=lambda line: bool(_KEY_POINT_LEAD_RE.match(line)) or _BOLD_BULLET in line,
        strip=_strip_key_point,
        keep=lambda line: not should_skip_line(line),
        limit=int(get_analysis_value("extraction.max_key_points", 4)),
    )


def recommendation_rule() -> LineRule:
    return LineRule(
        name="recommendations",
        match=lambda line: _BOLD_BULLET in line,
        strip=_strip_recommendation,
        limit=int(get_analysis_value("extraction.max_recommendations", 3)),
    )


def skill_line_rule() -> LineRule:
    return LineRule(name="skill_lines", match=_is_skill_line, strip=_strip_skill_marker, keep=_keep_skill)


def extract_key_points(text: str | None) -> list[str]:
    return key_point_rule().apply((text or "").splitlines())


def extract_recommendations(text: str | None) -> list[str]:
    return recommendation_rule().apply((text or "").splitlines())


def extract_recommendations_text(summary: str | None) -> str:
    """Text after the first recommendations marker, up to the marker's next occurrence."""
    content = summary or ""
    for marker in RECOMMENDATION_MARKERS + _EXTRA_RECOMMENDATION_MARKERS:
        parts = content.split(marker)
        if len(parts) > 1 and parts[1]:
            return parts[1].strip() or NO_RECOMMENDATIONS_SENTENCE
    return NO_RECOMMENDATIONS_SENTENCE


def _technical_skills_block(text: str) -> str:
    match = _BOLD_SKILLS_BLOCK_RE.search(text) or _PLAIN_SKILLS_BLOCK_RE.search(text)
    return match.group(1) if match else ""


def _split_skill(line: str) -> ExtractedSkill | None:
    parts = _SKILL_SPLIT_RE.split(line, maxsplit=1)
    name = parts[0].strip()
    if not name:
        return None
    context = parts[1].strip() if len(parts) > 1 else ""
    return ExtractedSkill(name=name, context=context if context and context != name else None)


def _primary_skills(text: str) -> list[ExtractedSkill]:
    block_lines = [line.strip() for line in _technical_skills_block(text).splitlines()]
    skills: list[ExtractedSkill] = []
    for line in skill_line_rule().apply(block_lines):
        skill = _split_skill(line)
        if skill is not None:
            skills.append(skill)
    return skills


def _category_skills(text: str, category: str) -> list[ExtractedSkill]:
    match = re.search(rf"\*\*{re.escape(category)}:\*\*([^*]+)", text)
    if not match:
        return []
    names = [item.strip() for item in match.group(1).split(",")]
    return [ExtractedSkill(name=name) for name in names if name]


def _dedupe_skills(skills: Iterable[ExtractedSkill]) -> list[ExtractedSkill]:
    seen: set[str] = set()
    unique: list[ExtractedSkill] = []
    for skill in skills:
        key = skill.name.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(skill)
    return unique


def extract_skills(text: str | None) -> list[ExtractedSkill]:
    content = text or ""
    skills = _primary_skills(content)
    if not skills:
        categories = get_analysis_tuple("extraction.skill_categories", _DEFAULT_SKILL_CATEGORIES)
        for category in categories:
            skills.extend(_category_skills(content, category))
    return _dedupe_skills(skills)


def build_section_insights(section: SectionResult) -> SectionInsights:
    return SectionInsights(
        score=section.score,
        key_points=extract_key_points(section.summary),
        recommendations=extract_recommendations(section.recommendations),
    )


def build_report_view(report: AnalysisReport) -> ReportView:
    insights = {kind: build_section_insights(report.section(kind)) for kind in SECTION_KINDS}
    return ReportView(
        job_role=report.job_role,
        overall_score=report.overall_score,
        generated_at=report.generated_at,
        technical_skills=extract_skills(report.skills.summary),
        **insights,
    )
