from .parser import (
    build_report_view,
    build_section_insights,
    extract_key_points,
    extract_recommendations,
    extract_recommendations_text,
    extract_skills,
)
from .prompts import build_prompt
from .sanitizer import sanitize_document
from .scoring import overall_score, score_section

__all__ = [
    "build_prompt",
    "build_report_view",
    "build_section_insights",
    "extract_key_points",
    "extract_recommendations",
    "extract_recommendations_text",
    "extract_skills",
    "overall_score",
    "sanitize_document",
    "score_section",
]
