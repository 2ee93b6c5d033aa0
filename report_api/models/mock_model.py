from typing import Dict, List
from .base import ReportModel
from ..prompts import RESULT_SPLIT_SEPARATOR

class MockReportModel(ReportModel):
    """
    Deterministic offline writer. Echoes the user message back inside a
    report-shaped text so the UI can be exercised without an API key.
    """
    async def complete(self, messages: List[Dict[str, str]]) -> str | None:
        user = next((m["content"] for m in messages if m.get("role") == "user"), "")
        facts = [line for line in user.splitlines() if " : " in line]
        body = "\n".join(f"- {line}" for line in facts)
        return (
            "# Rapport d’expertise (démonstration)\n\n"
            "## Présentation du bien\n"
            f"{body}\n\n"
            "## Recommandation de valeur\n"
            "Estimation non disponible en mode démonstration.\n\n"
            f"{RESULT_SPLIT_SEPARATOR}\n\n"
            "## Synthèse de marché localisée\n"
            "Données de marché non disponibles en mode démonstration."
        )
