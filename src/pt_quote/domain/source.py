"""QuoteSource Protocol: the only thing the ledger needs from a price feed."""

from typing import Protocol

from src.pt_quote.domain.models import Quote


class QuoteSource(Protocol):
    async def quote(self, symbol: str) -> Quote | None: ...

    async def list_quotes(self) -> list[Quote]: ...

    async def search(self, query: str) -> list[Quote]: ...
