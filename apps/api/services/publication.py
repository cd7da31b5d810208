"""Landing page publication stage for stored ideas."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from config import price_label, settings
from services.collaborators import get_completion_client, get_payment_issuer
from services.errors import PaymentLinkFailedError, RecordNotFoundError
from services.markup_injector import CtaPolicy, inject_payment_link
from services.ports import CompletionClient, IdeaStore, Message, PaymentLinkIssuer
from services.structured_response import strip_code_fences

logger = logging.getLogger(__name__)


@dataclass
class PublicationResult:
    idea_id: str
    destination_url: str
    monetized: bool

    def as_response(self) -> Dict[str, Any]:
        return {
            "idea_id": self.idea_id,
            "payment_url": self.destination_url,
            "monetized": self.monetized,
        }


def product_name_for(competitor_name: str) -> str:
    return f"Solution for {competitor_name} users"


def build_landing_page_messages(
    competitor_name: str,
    weaknesses: List[str],
    *,
    placeholder: Optional[str] = None,
) -> List[Message]:
    token = placeholder or settings.PAYMENT_PLACEHOLDER
    prompt = (
        f'Create a Tailwind CSS LP (HTML) for SaaS solving: "{", ".join(weaknesses)}". '
        f"Competitor: {competitor_name}. Price: {price_label()}. "
        f"Button Link: {token} (use it as the href of every purchase button)."
    )
    return [{"role": "user", "content": prompt}]


async def resolve_payment_destination(product_name: str, payments: PaymentLinkIssuer) -> tuple[str, bool]:
    """Issue a payment link, falling back to the sentinel destination on failure."""
    try:
        url = await payments.issue_link(
            product_name,
            unit_amount=settings.PRICE_UNIT_AMOUNT,
            currency=settings.PRICE_CURRENCY,
            interval=settings.PRICE_INTERVAL,
        )
        return url, True
    except PaymentLinkFailedError as exc:
        logger.warning("Payment link issuance failed for %r: %s", product_name, exc.detail)
    except Exception:
        logger.exception("Unexpected payment link error for %r", product_name)
    return settings.PAYMENT_SENTINEL_URL, False


async def publish_idea(
    idea_id: str,
    *,
    store: IdeaStore,
    completion: Optional[CompletionClient] = None,
    payments: Optional[PaymentLinkIssuer] = None,
    policy: Optional[CtaPolicy] = None,
) -> PublicationResult:
    """
    Generate and store the landing page for ``idea_id``.

    Payment failures degrade to the sentinel destination; a missing record or
    a failed model call aborts without touching the record. Re-publishing
    overwrites the previous markup and issues a new payment link.
    """
    idea = await store.get(idea_id)
    if not idea:
        raise RecordNotFoundError(f"Idea {idea_id} not found")

    competitor_name = idea.competitor_name
    weaknesses = list(idea.weaknesses or [])
    active_policy = policy or CtaPolicy()

    destination, monetized = await resolve_payment_destination(
        product_name_for(competitor_name),
        payments or get_payment_issuer(),
    )

    client = completion or get_completion_client()
    raw = await client.complete(
        build_landing_page_messages(competitor_name, weaknesses, placeholder=active_policy.placeholder)
    )
    markup = inject_payment_link(strip_code_fences(raw), destination, policy=active_policy)

    if not await store.update(idea.id, published_markup=markup):
        raise RecordNotFoundError(f"Idea {idea.id} disappeared before publication")
    logger.info("Published landing page for idea %s (monetized=%s)", idea.id, monetized)
    return PublicationResult(idea_id=idea.id, destination_url=destination, monetized=monetized)
