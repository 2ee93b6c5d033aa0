import logging
import time
from typing import Any

from pydantic import ValidationError

from ..core.config import Settings
from ..core.errors import (
    ClientDisconnectedError,
    ConfigurationError,
    EmptyCompletionError,
    PayloadValidationError,
    UpstreamError,
)
from ..core.metrics import REPORT_OUTCOMES, UPSTREAM_LATENCY
from ..core.utils import Disconnectable, blank, run_until_disconnected
from ..models.base import ReportModel
from ..models.mock_model import MockReportModel
from ..models.openai_model import OpenAIReportModel
from ..prompts import build_messages
from ..schemas import ReportRequest

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("address", "notes", "property_type", "detail_level")

def build_model(settings: Settings) -> ReportModel | None:
    """
    Pick the writer based on settings. Returns None when the OpenAI provider
    has no key; the service then refuses every request with a 500.
    """
    provider = settings.MODEL_PROVIDER
    if provider == "mock":
        return MockReportModel()
    if provider != "openai":
        raise ValueError(f"Unknown MODEL_PROVIDER: {provider!r}")
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set; report generation will fail until it is configured")
        return None
    return OpenAIReportModel.from_settings(settings)

class ReportService:
    """
    Orchestrates one generation:
      configuration check → payload check → prompt → single model call
    No retries, no caching; every call goes to the model.
    """
    def __init__(self, model: ReportModel | None, disconnect_poll_seconds: float = 0.5):
        self.model = model
        self.disconnect_poll_seconds = disconnect_poll_seconds

    def ensure_configured(self) -> None:
        if self.model is None:
            REPORT_OUTCOMES.labels(outcome="unconfigured").inc()
            logger.error("report requested but no model is configured")
            raise ConfigurationError()

    def parse(self, data: Any) -> ReportRequest:
        """Turn a decoded JSON body into a request; anything unusable is a 400."""
        try:
            return ReportRequest.model_validate(data)
        except ValidationError as exc:
            REPORT_OUTCOMES.labels(outcome="invalid").inc()
            logger.info("rejected malformed report request: %d error(s)", exc.error_count())
            raise PayloadValidationError("Requête invalide.") from exc

    def validate(self, req: ReportRequest) -> None:
        missing = [name for name in REQUIRED_FIELDS if blank(getattr(req, name))]
        if missing:
            REPORT_OUTCOMES.labels(outcome="invalid").inc()
            logger.info("rejected report request, missing fields: %s", ",".join(missing))
            raise PayloadValidationError()

    async def generate(self, req: ReportRequest, request: Disconnectable | None = None) -> str:
        self.ensure_configured()
        self.validate(req)
        messages = build_messages(req)

        start = time.perf_counter()
        try:
            call = self.model.complete(messages)
            if request is not None:
                text = await run_until_disconnected(request, call, self.disconnect_poll_seconds)
            else:
                text = await call
        except ClientDisconnectedError:
            REPORT_OUTCOMES.labels(outcome="disconnected").inc()
            logger.info("client disconnected, model call cancelled")
            raise
        except Exception as exc:
            REPORT_OUTCOMES.labels(outcome="upstream_error").inc()
            logger.exception("model call failed")
            raise UpstreamError() from exc
        finally:
            UPSTREAM_LATENCY.observe(time.perf_counter() - start)

        if not text:
            REPORT_OUTCOMES.labels(outcome="empty").inc()
            logger.warning("model returned an empty completion")
            raise EmptyCompletionError()

        REPORT_OUTCOMES.labels(outcome="success").inc()
        logger.info("report generated (%d chars)", len(text))
        return text
