from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.ai.errors import ConfigurationError  # noqa: E402
from app.ai.factory import get_service_gateway  # noqa: E402
from app.analysis.parser import build_report_view  # noqa: E402
from app.core.report_store import InMemoryReportStore, SQLiteReportStore  # noqa: E402
from app.services.analysis_service import AnalysisFailedError, run_analysis  # noqa: E402

logger = logging.getLogger("analyze_cv")


def _print_view(view) -> None:
    print(f"Role: {view.job_role}")
    print(f"Overall score: {view.overall_score}%")
    for kind in ("skills", "experience", "education"):
        insights = getattr(view, kind)
        print(f"\n{kind.title()} ({insights.score}%)")
        for point in insights.key_points:
            print(f"  + {point}")
        for rec in insights.recommendations:
            print(f"  > {rec}")
    if view.technical_skills:
        print("\nTechnical skills:")
        for skill in view.technical_skills:
            suffix = f" ({skill.context})" if skill.context else ""
            print(f"  - {skill.name}{suffix}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a CV text file against a target role.")
    parser.add_argument("file", help="Path to a UTF-8 text or markdown CV")
    parser.add_argument("--role", required=True, help="Target job role")
    parser.add_argument("--json", action="store_true", help="Print the raw report as JSON.")
    parser.add_argument(
        "--store",
        action="store_true",
        help="Persist the report to the configured report store.",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        document = Path(args.file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read %s: %s", args.file, exc)
        return 2

    store = SQLiteReportStore() if args.store else InMemoryReportStore()

    try:
        gateway = get_service_gateway()
        report = asyncio.run(run_analysis(document, args.role, gateway=gateway, store=store))
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    except AnalysisFailedError as exc:
        logger.error("%s", exc)
        return 1

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        _print_view(build_report_view(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
