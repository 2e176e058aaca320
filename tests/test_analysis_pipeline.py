import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.ai.errors import ServiceError, ServiceErrorKind  # noqa: E402
from app.ai.gateway import ServiceGateway  # noqa: E402
from app.core.report_store import InMemoryReportStore  # noqa: E402
from app.services.analysis_service import (  # noqa: E402
    GENERIC_FAILURE_MESSAGE,
    AnalysisFailedError,
    AnalysisPipeline,
    PipelineState,
    build_section_result,
    run_analysis,
)

SKILLS_TEXT = (
    "**Technical Skills**\n"
    "* Python — APIs\n\n"
    "**1. Key skills aligned with job requirements**\n"
    "* Strong backend experience\n"
    "* Excellent testing habits\n\n"
    "**4. Actionable suggestions for improvement**\n"
    "* **Add metrics** — quantify results\n"
)
EXPERIENCE_TEXT = (
    "**Experience Overview**\n"
    "* Good fit for the role\n\n"
    "**Recommendations**\n"
    "* **Quantify impact** — add numbers\n"
)
EDUCATION_TEXT = "No education details detected in the provided CV."


class ScriptedClient:
    def __init__(self, *outcomes):
        self._outcomes = list(outcomes)
        self.calls: list[tuple[str, str]] = []

    async def generate(self, model: str, prompt: str) -> str:
        self.calls.append((model, prompt))
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class AnalysisPipelineTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.sleep = RecordingSleep()

    def _pipeline(self, client):
        gateway = ServiceGateway(client, model="primary", fallback_model="lite", sleep=self.sleep)
        return AnalysisPipeline(gateway, pacing_delay_s=1.0, sleep=self.sleep)

    async def test_sections_run_in_order_with_pacing(self):
        client = ScriptedClient(SKILLS_TEXT, EXPERIENCE_TEXT, EDUCATION_TEXT)
        pipeline = self._pipeline(client)

        report = await pipeline.run("# Jane Doe\n## Skills\nPython", "Backend Engineer")

        prompts = [prompt for _, prompt in client.calls]
        self.assertEqual(len(prompts), 3)
        self.assertIn("**Technical Skills**", prompts[0])
        self.assertIn("**Experience Overview**", prompts[1])
        self.assertIn("**Education Summary**", prompts[2])
        self.assertTrue(all(prompt.endswith("Jane Doe\nSkills\nPython") for prompt in prompts))
        self.assertEqual(self.sleep.delays, [1.0, 1.0])
        self.assertEqual(
            pipeline.states,
            [
                PipelineState.IDLE,
                PipelineState.SANITIZE_INPUT,
                PipelineState.FETCH_SKILLS,
                PipelineState.PAUSE,
                PipelineState.FETCH_EXPERIENCE,
                PipelineState.PAUSE,
                PipelineState.FETCH_EDUCATION,
                PipelineState.AGGREGATE,
                PipelineState.DONE,
            ],
        )

        self.assertEqual(report.skills.summary, SKILLS_TEXT)
        self.assertEqual(report.skills.score, 60)
        self.assertEqual(report.experience.score, 55)
        self.assertEqual(report.education.score, 50)
        self.assertEqual(report.overall_score, round(0.4 * 60 + 0.4 * 55 + 0.2 * 50))
        self.assertEqual(report.job_role, "Backend Engineer")
        self.assertIn("Add metrics", report.skills.recommendations)
        self.assertIn("Quantify impact", report.experience.recommendations)

    async def test_backoff_and_pacing_share_one_clock(self):
        rate_limited = ServiceError("429", kind=ServiceErrorKind.RATE_LIMITED)
        client = ScriptedClient(rate_limited, SKILLS_TEXT, EXPERIENCE_TEXT, EDUCATION_TEXT)
        await self._pipeline(client).run("cv", "Data Engineer")
        self.assertEqual(self.sleep.delays, [2.0, 1.0, 1.0])

    async def test_failure_aborts_without_report(self):
        client = ScriptedClient(SKILLS_TEXT, ServiceError("boom"), EDUCATION_TEXT)
        pipeline = self._pipeline(client)

        with self.assertRaises(AnalysisFailedError) as ctx:
            await pipeline.run("cv", "Data Engineer")

        self.assertEqual(str(ctx.exception), GENERIC_FAILURE_MESSAGE)
        self.assertIsInstance(ctx.exception.__cause__, ServiceError)
        self.assertEqual(len(client.calls), 2)
        self.assertIs(pipeline.state, PipelineState.FAILED)
        self.assertNotIn(PipelineState.AGGREGATE, pipeline.states)


class RunAnalysisTests(unittest.IsolatedAsyncioTestCase):
    async def test_report_submitted_only_on_success(self):
        sleep = RecordingSleep()
        store = InMemoryReportStore()
        gateway = ServiceGateway(
            ScriptedClient(SKILLS_TEXT, EXPERIENCE_TEXT, EDUCATION_TEXT),
            model="primary",
            fallback_model="lite",
            sleep=sleep,
        )
        report = await run_analysis("cv text", "Backend Engineer", gateway=gateway, store=store, sleep=sleep)
        self.assertEqual(store.latest(), report)

        failing = ServiceGateway(
            ScriptedClient(ServiceError("boom")), model="primary", fallback_model="lite", sleep=sleep
        )
        with self.assertRaises(AnalysisFailedError):
            await run_analysis("other cv", "Backend Engineer", gateway=failing, store=store, sleep=sleep)
        self.assertEqual(store.latest(), report)

    async def test_empty_document_rejected_before_any_call(self):
        client = ScriptedClient()
        gateway = ServiceGateway(client, model="primary", fallback_model="lite", sleep=RecordingSleep())
        with self.assertRaises(AnalysisFailedError) as ctx:
            await run_analysis("   \n# \n", "Backend Engineer", gateway=gateway, store=InMemoryReportStore())
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(client.calls, [])


class SectionResultTests(unittest.TestCase):
    def test_build_section_result(self):
        result = build_section_result(EXPERIENCE_TEXT)
        self.assertEqual(result.summary, EXPERIENCE_TEXT)
        self.assertEqual(result.score, 55)
        self.assertTrue(result.recommendations.strip())


if __name__ == "__main__":
    unittest.main()
