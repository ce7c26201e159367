"""QuoteService: time-bounded access to the quote source.

Every lookup is wrapped in ``asyncio.wait_for``; a feed that does not answer
in time raises QuoteUnavailableError instead of stalling a settlement.
"""

import asyncio
import logging

from src.pt_common.errors import QuoteUnavailableError, UnknownInstrumentError
from src.pt_quote.domain.models import Quote
from src.pt_quote.domain.source import QuoteSource

logger = logging.getLogger(__name__)


class QuoteService:
    def __init__(self, source: QuoteSource, timeout_seconds: float = 2.0) -> None:
        self._source = source
        self._timeout = timeout_seconds

    async def find(self, symbol: str) -> Quote | None:
        try:
            return await asyncio.wait_for(self._source.quote(symbol), self._timeout)
        except TimeoutError:
            logger.warning("Quote lookup timed out: symbol=%s", symbol)
            raise QuoteUnavailableError(symbol) from None

    async def require(self, symbol: str) -> Quote:
        quote = await self.find(symbol)
        if quote is None:
            raise UnknownInstrumentError(symbol)
        return quote

    async def list_quotes(self) -> list[Quote]:
        try:
            return await asyncio.wait_for(self._source.list_quotes(), self._timeout)
        except TimeoutError:
            raise QuoteUnavailableError("*") from None

    async def search(self, query: str) -> list[Quote]:
        try:
            return await asyncio.wait_for(self._source.search(query), self._timeout)
        except TimeoutError:
            raise QuoteUnavailableError(query) from None
