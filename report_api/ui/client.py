import logging
from dataclasses import dataclass

import httpx

from ..core.errors import GENERIC_FAILURE_MESSAGE
from ..core.utils import split_report
from .form import FormState

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate-report"
UNKNOWN_ERROR = "Erreur inconnue"
UNSPLIT_PLACEHOLDER = "_La synthèse n’a pas été séparée, voici le texte complet._"

@dataclass
class SubmitOutcome:
    report: str = ""
    market_summary: str = ""
    error: str = ""

    @property
    def market_pane(self) -> str:
        """What the market pane shows: the summary, or a note when it was not split out."""
        if self.market_summary:
            return self.market_summary
        return UNSPLIT_PLACEHOLDER if self.report else ""

class ReportClient:
    """
    Talks to the report endpoint on behalf of the form, one request per
    submit. Holds no per-user state, so one instance can serve every session.
    """
    def __init__(self, base_url: str, timeout: float | None = 180.0, transport: httpx.BaseTransport | None = None):
        self._http = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def submit(self, form: FormState) -> SubmitOutcome:
        outcome = SubmitOutcome()
        try:
            response = self._http.post(GENERATE_PATH, json=form.to_payload())
            data = response.json()
            if response.is_error:
                outcome.error = (data.get("error") if isinstance(data, dict) else None) or UNKNOWN_ERROR
                return outcome
            parts = split_report(data["result"])
            outcome.report = parts.report
            outcome.market_summary = parts.market_summary
        except (httpx.HTTPError, ValueError, KeyError, TypeError):
            logger.exception("report submission failed")
            outcome.report = ""
            outcome.market_summary = ""
            outcome.error = GENERIC_FAILURE_MESSAGE
        return outcome
