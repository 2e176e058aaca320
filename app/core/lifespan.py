from contextlib import asynccontextmanager
import logging

from app.ai.config import load_ai_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    from app.api.v1.analysis import get_report_store

    store = get_report_store()
    init = getattr(store, "init", None)
    if callable(init):
        init()

    cfg = load_ai_config()
    logger.info("analysis_service_ready provider=%s model=%s fallback=%s", cfg.provider, cfg.model, cfg.fallback_model)
    yield
    close = getattr(store, "close", None)
    if callable(close):
        close()
