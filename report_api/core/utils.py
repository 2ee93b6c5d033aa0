import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Protocol, TypeVar

from .errors import ClientDisconnectedError
from ..prompts import RESULT_SPLIT_SEPARATOR

T = TypeVar("T")

@dataclass(frozen=True)
class SplitReport:
    report: str
    market_summary: str

def split_report(text: str, separator: str = RESULT_SPLIT_SEPARATOR) -> SplitReport:
    """
    Cut model output into (report, market summary) at the FIRST separator.
    Anything after that, further separators included, stays in the market part.
    No separator → the whole text is the report and the market part is empty.
    """
    head, found, tail = (text or "").partition(separator)
    if not found:
        return SplitReport(report=head.strip(), market_summary="")
    return SplitReport(report=head.strip(), market_summary=tail.strip())

def blank(value: Any) -> bool:
    """True for None and for strings that are empty once stripped."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False

class Disconnectable(Protocol):
    async def is_disconnected(self) -> bool: ...

async def run_until_disconnected(request: Disconnectable, aw: Awaitable[T], poll_seconds: float = 0.5) -> T:
    """
    Await `aw` while watching the caller. If the client goes away first the
    pending work is cancelled and ClientDisconnectedError is raised.
    """
    task = asyncio.ensure_future(aw)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_seconds)
            if done:
                return task.result()
            if await request.is_disconnected():
                task.cancel()
                raise ClientDisconnectedError()
    finally:
        if not task.done():
            task.cancel()
