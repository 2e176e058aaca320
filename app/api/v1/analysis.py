import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from app.ai.errors import ConfigurationError
from app.ai.factory import get_service_gateway
from app.ai.gateway import ServiceGateway
from app.analysis.parser import build_report_view
from app.core.rate_limit import rate_limit
from app.core.report_store import ReportChannel, SQLiteReportStore
from app.schemas.analysis import AnalyzeRequest, AnalyzeResponse, ReportView, normalize_job_role
from app.services.analysis_service import AnalysisFailedError, run_analysis

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_UPLOAD_BYTES = 2 * 1024 * 1024  # 2 MB

ALLOWED_EXTENSIONS = {"txt", "md", "markdown", "text"}


@lru_cache(maxsize=1)
def get_report_store() -> ReportChannel:
    return SQLiteReportStore()


def get_gateway() -> ServiceGateway:
    try:
        return get_service_gateway()
    except ConfigurationError as exc:
        logger.error("analysis_not_configured: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Analysis service is not configured.",
        ) from exc


async def _analyze(document: str, job_role: str, gateway: ServiceGateway, store: ReportChannel) -> AnalyzeResponse:
    try:
        report = await run_analysis(document, job_role, gateway=gateway, store=store)
    except AnalysisFailedError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    return AnalyzeResponse(success=True, analysis=report)


@router.post("/analysis", response_model=AnalyzeResponse)
@rate_limit()
async def analysis_create(
    request: Request,
    payload: AnalyzeRequest,
    gateway: ServiceGateway = Depends(get_gateway),
    store: ReportChannel = Depends(get_report_store),
):
    _ = request
    return await _analyze(payload.document_text, payload.job_role, gateway, store)


@router.post("/analysis/upload", response_model=AnalyzeResponse)
@rate_limit()
async def analysis_upload(
    request: Request,
    file: UploadFile = File(...),
    job_role: str = Form(..., min_length=2, max_length=200),
    gateway: ServiceGateway = Depends(get_gateway),
    store: ReportChannel = Depends(get_report_store),
):
    _ = request
    try:
        role = normalize_job_role(job_role)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    filename = file.filename or "uploaded-file"
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type '.{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}.",
        )

    payload = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(payload) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum allowed size is {MAX_UPLOAD_BYTES // (1024 * 1024)} MB.",
        )
    try:
        document = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The uploaded file must be UTF-8 text.",
        ) from exc

    return await _analyze(document, role, gateway, store)


@router.get("/analysis/latest", response_model=ReportView)
async def analysis_latest(store: ReportChannel = Depends(get_report_store)):
    report = store.latest()
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No analysis results available.")
    return build_report_view(report)
