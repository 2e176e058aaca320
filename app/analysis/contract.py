"""Markdown shape shared by the prompts and the response parser.

Every heading, marker and fallback sentence the model is asked to emit lives
here so the prompt builder and the parser cannot drift apart.
"""
from __future__ import annotations

TECHNICAL_SKILLS_HEADING = "Technical Skills"
SKILLS_KEY_SKILLS_HEADING = "1. Key skills aligned with job requirements"
SKILLS_STRENGTHS_HEADING = "2. Candidate's strengths"
SKILLS_GAPS_HEADING = "3. Critical missing skills"
SKILLS_SUGGESTIONS_HEADING = "4. Actionable suggestions for improvement"

EXPERIENCE_OVERVIEW_HEADING = "Experience Overview"
EXPERIENCE_RECOMMENDATIONS_HEADING = "Recommendations"

EDUCATION_SUMMARY_HEADING = "Education Summary"
EDUCATION_ENHANCEMENT_HEADING = "Enhancement Opportunities"

SKILL_NAME_SEPARATOR = " — "
MIN_TECHNICAL_SKILLS = 6
MAX_SKILL_RATIONALE_CHARS = 60

NO_GAPS_SENTENCE = "None noted."
NO_EXPERIENCE_SENTENCE = "Experience information not provided."
NO_EDUCATION_SENTENCE = "No education details detected in the provided CV."
NO_RECOMMENDATIONS_SENTENCE = "No specific recommendations provided."

# Text after the first marker (up to the next one) becomes the section's
# recommendations text.
RECOMMENDATION_MARKERS = ("4.", "Suggestions")


def bold(label: str) -> str:
    return f"**{label}**"
