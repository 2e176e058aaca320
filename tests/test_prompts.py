import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.analysis import contract  # noqa: E402
from app.analysis.prompts import (  # noqa: E402
    build_education_prompt,
    build_experience_prompt,
    build_prompt,
    build_skills_prompt,
)


class PromptBuilderTests(unittest.TestCase):
    def setUp(self):
        self.cv = "Jane Doe\nPython developer with 5 years of experience."
        self.role = "Backend Engineer"

    def test_role_and_content_are_embedded(self):
        for kind in ("skills", "experience", "education"):
            prompt = build_prompt(kind, self.cv, self.role)
            self.assertIn(self.role, prompt)
            self.assertTrue(prompt.rstrip().endswith(self.cv))

    def test_skills_prompt_fixes_headings(self):
        prompt = build_skills_prompt(self.cv, self.role)
        for heading in (
            contract.TECHNICAL_SKILLS_HEADING,
            contract.SKILLS_KEY_SKILLS_HEADING,
            contract.SKILLS_STRENGTHS_HEADING,
            contract.SKILLS_GAPS_HEADING,
            contract.SKILLS_SUGGESTIONS_HEADING,
        ):
            self.assertIn(contract.bold(heading), prompt)
        self.assertIn(contract.NO_GAPS_SENTENCE, prompt)
        self.assertIn(f"at least {contract.MIN_TECHNICAL_SKILLS} skills", prompt)
        self.assertIn("Not provided", prompt)

    def test_experience_prompt_fallback_sentence(self):
        prompt = build_experience_prompt(self.cv, self.role)
        self.assertIn(contract.bold(contract.EXPERIENCE_OVERVIEW_HEADING), prompt)
        self.assertIn(contract.bold(contract.EXPERIENCE_RECOMMENDATIONS_HEADING), prompt)
        self.assertIn(contract.NO_EXPERIENCE_SENTENCE, prompt)
        self.assertIn("[Not Applicable]", prompt)

    def test_education_prompt_fallback_sentence(self):
        prompt = build_education_prompt(self.cv, self.role)
        self.assertIn(contract.bold(contract.EDUCATION_SUMMARY_HEADING), prompt)
        self.assertIn(contract.bold(contract.EDUCATION_ENHANCEMENT_HEADING), prompt)
        self.assertIn(contract.NO_EDUCATION_SENTENCE, prompt)

    def test_prompts_are_pure(self):
        self.assertEqual(build_skills_prompt(self.cv, self.role), build_skills_prompt(self.cv, self.role))

    def test_unknown_kind_rejected(self):
        with self.assertRaises(ValueError):
            build_prompt("projects", self.cv, self.role)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
