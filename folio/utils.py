import asyncio
import datetime
import inspect
import logging
import math
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def calculate_reading_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / 200) or 1
    return f"{minutes} min"


def format_date(value) -> str:
    """Format an index date as ``Jan 5, 2024``; unparseable values pass through."""
    if isinstance(value, datetime.datetime):
        value = value.date()
    if not isinstance(value, datetime.date):
        try:
            value = datetime.date.fromisoformat(str(value)[:10])
        except ValueError:
            logger.debug(f"Leaving unparseable date as-is: {value!r}")
            return str(value or "")
    return f"{MONTHS[value.month - 1]} {value.day}, {value.year}"


class Debouncer:
    """
    Collapse rapid calls so only the last one within ``wait`` seconds runs.

    Each call cancels the pending one and schedules a new one on the running
    event loop; the final call is always executed once things settle.
    """

    def __init__(self, func: Callable[..., Any], wait: float):
        self.func = func
        self.wait = wait
        self._pending: Optional[asyncio.Task] = None

    def __call__(self, *args, **kwargs) -> asyncio.Task:
        if self._pending and not self._pending.done():
            self._pending.cancel()
        self._pending = asyncio.get_running_loop().create_task(
            self._run_later(args, kwargs)
        )
        return self._pending

    async def _run_later(self, args, kwargs):
        await asyncio.sleep(self.wait)
        result = self.func(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    async def flush(self):
        """Wait for the pending call, if any, and return its result."""
        if self._pending is None:
            return None
        return await self._pending
