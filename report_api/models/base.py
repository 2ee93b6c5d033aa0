from typing import Protocol, List, Dict

class ReportModel(Protocol):
    async def complete(self, messages: List[Dict[str, str]]) -> str | None:
        """
        Send chat messages (system + user) and return the generated text,
        or None/"" when the model produced nothing.
        """
        ...
