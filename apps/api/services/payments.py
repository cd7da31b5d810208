"""Stripe payment-link issuance over the REST API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from config import settings
from services.errors import PaymentLinkFailedError
from services.ports import PaymentLinkIssuer

logger = logging.getLogger(__name__)


class StripePaymentLinkIssuer(PaymentLinkIssuer):
    """Issues product -> recurring price -> payment link, one request each."""

    def __init__(
        self,
        *,
        secret_key: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.secret_key = (secret_key if secret_key is not None else settings.STRIPE_SECRET_KEY or "").strip()
        self.api_base = (api_base or settings.STRIPE_API_BASE).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def _post(self, path: str, data: Dict[str, Any]) -> Dict[str, Any]:
        if not self.secret_key:
            raise PaymentLinkFailedError("Stripe is not configured.")
        try:
            async with httpx.AsyncClient(
                base_url=self.api_base,
                timeout=self.timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    path,
                    data=data,
                    headers={"Authorization": f"Bearer {self.secret_key}"},
                )
        except httpx.HTTPError as exc:
            raise PaymentLinkFailedError(f"Stripe request to {path} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if response.status_code >= 400:
            message = (payload.get("error") or {}).get("message") if isinstance(payload, dict) else None
            raise PaymentLinkFailedError(
                f"Stripe {path} returned HTTP {response.status_code}: {message or response.text[:200]}"
            )
        if not isinstance(payload, dict):
            raise PaymentLinkFailedError(f"Stripe {path} returned an unexpected payload")
        return payload

    @staticmethod
    def _require(payload: Dict[str, Any], key: str, path: str) -> str:
        value = str(payload.get(key) or "").strip()
        if not value:
            raise PaymentLinkFailedError(f"Stripe {path} response is missing '{key}'")
        return value

    async def create_product(self, name: str) -> str:
        payload = await self._post("/products", {"name": name})
        return self._require(payload, "id", "/products")

    async def create_price(
        self,
        product_id: str,
        *,
        unit_amount: int,
        currency: str,
        interval: str,
    ) -> str:
        payload = await self._post(
            "/prices",
            {
                "product": product_id,
                "unit_amount": int(unit_amount),
                "currency": currency,
                "recurring[interval]": interval,
            },
        )
        return self._require(payload, "id", "/prices")

    async def create_link(self, price_id: str) -> str:
        payload = await self._post(
            "/payment_links",
            {
                "line_items[0][price]": price_id,
                "line_items[0][quantity]": 1,
            },
        )
        url = self._require(payload, "url", "/payment_links")
        logger.info("Issued Stripe payment link %s for price %s", payload.get("id"), price_id)
        return url
