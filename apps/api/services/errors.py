"""Pipeline error taxonomy shared by the analysis and publication stages."""

from __future__ import annotations

from typing import Any, Dict


class PipelineError(RuntimeError):
    """Base class for errors surfaced by the scan/publish pipeline."""

    kind = "pipeline_error"

    def __init__(self, detail: str = "") -> None:
        self.detail = str(detail or "")
        super().__init__(self.detail or self.kind)

    def as_payload(self) -> Dict[str, Any]:
        return {"error": self.kind, "details": self.detail}


class FetchFailedError(PipelineError):
    """Raised when the competitor page cannot be retrieved."""

    kind = "fetch_failed"


class ModelCallFailedError(PipelineError):
    """Raised when the completion service is unreachable or errors."""

    kind = "model_call_failed"


class NoStructuredDataFoundError(PipelineError):
    """Raised when model output contains no opening/closing bracket pair."""

    kind = "no_structured_data_found"


class MalformedStructuredDataError(PipelineError):
    """Raised when the bracketed span in model output is not valid JSON."""

    kind = "malformed_structured_data"


class MissingRequiredFieldError(PipelineError):
    """Raised when parsed model output lacks a required field."""

    kind = "missing_required_field"


class RecordNotFoundError(PipelineError):
    """Raised when an idea id does not exist in the store."""

    kind = "record_not_found"


class PaymentLinkFailedError(PipelineError):
    """Raised by payment-link issuance. Publication degrades instead of aborting."""

    kind = "payment_link_failed"
