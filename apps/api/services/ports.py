"""Collaborator contracts consumed by the scan/publish pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from models.idea import Idea


Message = Dict[str, str]


class PageSource(ABC):
    @abstractmethod
    async def fetch(self, url: str) -> str:
        """Return the markup body of ``url`` or raise ``FetchFailedError``."""
        raise NotImplementedError


class CompletionClient(ABC):
    @abstractmethod
    async def complete(self, messages: Sequence[Message]) -> str:
        """Return the raw text of one completion or raise ``ModelCallFailedError``."""
        raise NotImplementedError


class PaymentLinkIssuer(ABC):
    """Creates a product, a recurring price under it and a shareable link for that price."""

    @abstractmethod
    async def create_product(self, name: str) -> str:
        raise NotImplementedError

    @abstractmethod
    async def create_price(
        self,
        product_id: str,
        *,
        unit_amount: int,
        currency: str,
        interval: str,
    ) -> str:
        raise NotImplementedError

    @abstractmethod
    async def create_link(self, price_id: str) -> str:
        raise NotImplementedError

    async def issue_link(
        self,
        product_name: str,
        *,
        unit_amount: int,
        currency: str,
        interval: str,
    ) -> str:
        product_id = await self.create_product(product_name)
        price_id = await self.create_price(
            product_id,
            unit_amount=unit_amount,
            currency=currency,
            interval=interval,
        )
        return await self.create_link(price_id)


class IdeaStore(ABC):
    @abstractmethod
    async def insert(self, *, source_url: str, competitor_name: str, weaknesses: List[str]) -> str:
        raise NotImplementedError

    @abstractmethod
    async def get(self, idea_id: str) -> Optional[Idea]:
        raise NotImplementedError

    @abstractmethod
    async def update(self, idea_id: str, **fields: Any) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def list(self) -> List[Idea]:
        raise NotImplementedError
