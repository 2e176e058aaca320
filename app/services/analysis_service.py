from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from enum import Enum

from app.ai.errors import ServiceError
from app.ai.gateway import ServiceGateway
from app.ai.types import Sleeper
from app.analysis.parser import extract_recommendations_text
from app.analysis.prompts import build_prompt
from app.analysis.sanitizer import sanitize_document
from app.analysis.scoring import overall_score, score_section
from app.core.config import settings
from app.core.report_store import ReportChannel
from app.schemas.analysis import SECTION_KINDS, AnalysisReport, SectionKind, SectionResult

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "An error occurred while analyzing the CV. Please try again later."


class AnalysisFailedError(RuntimeError):
    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE, *, status_code: int = 502):
        super().__init__(message)
        self.status_code = status_code


class PipelineState(str, Enum):
    IDLE = "idle"
    SANITIZE_INPUT = "sanitize_input"
    FETCH_SKILLS = "fetch_skills"
    FETCH_EXPERIENCE = "fetch_experience"
    FETCH_EDUCATION = "fetch_education"
    PAUSE = "pause"
    AGGREGATE = "aggregate"
    DONE = "done"
    FAILED = "failed"


_FETCH_STATES: dict[SectionKind, PipelineState] = {
    "skills": PipelineState.FETCH_SKILLS,
    "experience": PipelineState.FETCH_EXPERIENCE,
    "education": PipelineState.FETCH_EDUCATION,
}


def build_section_result(summary: str) -> SectionResult:
    return SectionResult(
        summary=summary,
        recommendations=extract_recommendations_text(summary),
        score=score_section(summary),
    )


class AnalysisPipeline:
    """Runs the three section requests one after another and aggregates them.

    A pipeline object drives a single run; ``states`` records the transitions
    of that run.
    """

    def __init__(
        self,
        gateway: ServiceGateway,
        *,
        pacing_delay_s: float | None = None,
        sleep: Sleeper | None = None,
    ):
        self._gateway = gateway
        self._pacing_delay_s = settings.analysis_pacing_delay_s if pacing_delay_s is None else pacing_delay_s
        self._sleep = sleep or asyncio.sleep
        self.states: list[PipelineState] = [PipelineState.IDLE]

    @property
    def state(self) -> PipelineState:
        return self.states[-1]

    def _enter(self, state: PipelineState) -> None:
        self.states.append(state)
        logger.debug("analysis_pipeline_state state=%s", state.value)

    async def run(self, document: str, job_role: str) -> AnalysisReport:
        started = time.perf_counter()
        self._enter(PipelineState.SANITIZE_INPUT)
        content = sanitize_document(document)

        summaries: dict[SectionKind, str] = {}
        for index, kind in enumerate(SECTION_KINDS):
            if index > 0:
                self._enter(PipelineState.PAUSE)
                await self._sleep(self._pacing_delay_s)
            self._enter(_FETCH_STATES[kind])
            try:
                summaries[kind] = await self._gateway.call(build_prompt(kind, content, job_role))
            except ServiceError as exc:
                self._enter(PipelineState.FAILED)
                logger.warning(
                    "analysis_pipeline_failed section=%s kind=%s: %s", kind, exc.kind.value, exc
                )
                raise AnalysisFailedError() from exc

        self._enter(PipelineState.AGGREGATE)
        sections = {kind: build_section_result(summaries[kind]) for kind in SECTION_KINDS}
        report = AnalysisReport(
            job_role=job_role,
            overall_score=overall_score(
                sections["skills"].score,
                sections["experience"].score,
                sections["education"].score,
            ),
            generated_at=datetime.now(timezone.utc),
            **sections,
        )
        self._enter(PipelineState.DONE)
        logger.info(
            "analysis_pipeline_done role=%s overall_score=%s latency_ms=%s",
            job_role,
            report.overall_score,
            int((time.perf_counter() - started) * 1000),
        )
        return report


async def run_analysis(
    document: str,
    job_role: str,
    *,
    gateway: ServiceGateway,
    store: ReportChannel,
    sleep: Sleeper | None = None,
) -> AnalysisReport:
    if len(document) > settings.max_document_chars:
        raise AnalysisFailedError("The uploaded document is too large to analyze.", status_code=413)
    if not sanitize_document(document):
        raise AnalysisFailedError("The uploaded document is empty.", status_code=400)

    report = await AnalysisPipeline(gateway, sleep=sleep).run(document, job_role)
    store.submit(report)
    return report
