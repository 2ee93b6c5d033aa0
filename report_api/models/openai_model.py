"""OpenAI-backed report writer."""

from __future__ import annotations

from typing import Any, Dict, List

from openai import AsyncOpenAI

from .base import ReportModel
from ..core.config import Settings


class OpenAIReportModel(ReportModel):
    def __init__(self, client: Any, model: str, temperature: float = 0.7):
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIReportModel":
        """Build the shared client once at startup.

        Retries are disabled: a failed generation is reported to the user,
        who resubmits by hand. The timeout stays at the client default.
        """
        if not settings.OPENAI_API_KEY:
            raise RuntimeError("OPENAI_API_KEY missing from settings")
        client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, max_retries=0)
        return cls(client, model=settings.OPENAI_MODEL, temperature=settings.OPENAI_TEMPERATURE)

    async def complete(self, messages: List[Dict[str, str]]) -> str | None:
        """Call the chat completion API once.

        Parameters
        ----------
        messages: List[Dict[str, str]]
            System and user messages, in order.

        Returns
        -------
        str | None
            Content of the first choice, None when there is none.
        """
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
        )
        if not completion.choices:
            return None
        return completion.choices[0].message.content
