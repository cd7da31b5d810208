"""Default collaborator adapters built from settings."""

from services.llm import OpenAICompletionClient
from services.payments import StripePaymentLinkIssuer
from services.ports import CompletionClient, PageSource, PaymentLinkIssuer
from services.scraper import HttpPageSource


def get_page_source() -> PageSource:
    return HttpPageSource()


def get_completion_client() -> CompletionClient:
    return OpenAICompletionClient()


def get_payment_issuer() -> PaymentLinkIssuer:
    return StripePaymentLinkIssuer()
