from __future__ import annotations

from typing import Callable

from app.analysis.contract import (
    EDUCATION_ENHANCEMENT_HEADING,
    EDUCATION_SUMMARY_HEADING,
    EXPERIENCE_OVERVIEW_HEADING,
    EXPERIENCE_RECOMMENDATIONS_HEADING,
    MAX_SKILL_RATIONALE_CHARS,
    MIN_TECHNICAL_SKILLS,
    NO_EDUCATION_SENTENCE,
    NO_EXPERIENCE_SENTENCE,
    NO_GAPS_SENTENCE,
    SKILL_NAME_SEPARATOR,
    SKILLS_GAPS_HEADING,
    SKILLS_KEY_SKILLS_HEADING,
    SKILLS_STRENGTHS_HEADING,
    SKILLS_SUGGESTIONS_HEADING,
    TECHNICAL_SKILLS_HEADING,
    bold,
)
from app.schemas.analysis import SectionKind


def build_skills_prompt(content: str, job_role: str) -> str:
    return (
        f"You are an expert technical recruiter evaluating a CV for a {job_role} opening.\n\n"
        "Output MUST follow this structure:\n\n"
        f"{bold(TECHNICAL_SKILLS_HEADING)}\n"
        f"* Skill Name{SKILL_NAME_SEPARATOR}Short rationale (may mention inferred context)\n"
        f"* (repeat for at least {MIN_TECHNICAL_SKILLS} skills, prioritising concrete technologies/tools)\n\n"
        "Rules:\n"
        "- Extract explicit skills first.\n"
        "- If skills are implied (e.g. \"built dashboards with React\"), infer \"React\", \"JavaScript\" etc.\n"
        "- Never output placeholders like \"Unspecified\", \"Not provided\" or \"Not applicable\".\n"
        "- Prefer singular nouns (e.g. \"REST APIs\", \"AWS Lambda\", \"Next.js\", \"CI/CD\").\n"
        f"- Keep each rationale under {MAX_SKILL_RATIONALE_CHARS} characters.\n\n"
        f"{bold(SKILLS_KEY_SKILLS_HEADING)}\n"
        "(3-4 bullet points starting with \"* \", no placeholders)\n\n"
        f"{bold(SKILLS_STRENGTHS_HEADING)}\n"
        "(3 concise bullets starting with \"* \")\n\n"
        f"{bold(SKILLS_GAPS_HEADING)}\n"
        f"(only list actual gaps; if none, say \"{NO_GAPS_SENTENCE}\")\n\n"
        f"{bold(SKILLS_SUGGESTIONS_HEADING)}\n"
        "(3 short steps, each formatted as \"* **Step** — detail\")\n\n"
        f"CV Content:\n{content}"
    )


def build_experience_prompt(content: str, job_role: str) -> str:
    return (
        f"Assess the professional experience for a {job_role}.\n"
        "Provide concrete observations only. Never write placeholders such as "
        "\"[Not Applicable]\", \"Unspecified\" or \"No data\".\n\n"
        "Structure:\n"
        f"{bold(EXPERIENCE_OVERVIEW_HEADING)}\n"
        "* Bullet with relevance summary\n"
        "* Bullet with quantified achievement (if present)\n"
        "* Bullet with improvement opportunity\n\n"
        f"{bold(EXPERIENCE_RECOMMENDATIONS_HEADING)}\n"
        "* **Action** — 2-3 bullets in this format, each actionable and specific.\n\n"
        "If absolutely no experience info exists, write:\n"
        f"\"{NO_EXPERIENCE_SENTENCE}\"\n\n"
        f"CV Content:\n{content}"
    )


def build_education_prompt(content: str, job_role: str) -> str:
    return (
        f"Evaluate the education and certifications relevant to a {job_role}.\n\n"
        "Structure:\n"
        f"{bold(EDUCATION_SUMMARY_HEADING)}\n"
        f"* [Institution Name]{SKILL_NAME_SEPARATOR}[Degree/Certification] ([Year or Status])\n"
        "* Include GPA if above 3.5, honors, or key academic projects\n"
        "* Repeat for all educational entries\n\n"
        f"{bold(EDUCATION_ENHANCEMENT_HEADING)}\n"
        "* **Certification or course** — suggest 2-3 missing items relevant to the role\n"
        "* Be specific (e.g., \"AWS Solutions Architect\", \"Certified Kubernetes Administrator\")\n\n"
        "Rules:\n"
        "- Extract all degrees, diplomas, certifications, bootcamps, and courses mentioned\n"
        "- If GPA/honors are stated, include them\n"
        "- Do NOT emit placeholder text like \"[Not Applicable]\", \"Unspecified\" or \"Details missing\"\n"
        "- If there truly is no education data at all, respond with:\n"
        f"  \"{NO_EDUCATION_SENTENCE}\"\n\n"
        f"CV Content:\n{content}"
    )


_BUILDERS: dict[SectionKind, Callable[[str, str], str]] = {
    "skills": build_skills_prompt,
    "experience": build_experience_prompt,
    "education": build_education_prompt,
}


def build_prompt(kind: SectionKind, content: str, job_role: str) -> str:
    try:
        builder = _BUILDERS[kind]
    except KeyError as exc:
        raise ValueError(f"Unsupported section kind '{kind}'") from exc
    return builder(content, job_role)
