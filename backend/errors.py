"""Error taxonomy for the fetch -> extract -> score pipeline.

Every failure that ends an analysis is an AnalysisError. Subclasses carry
the HTTP status the API answers with; the base class itself stands for
the "unknown" bucket.
"""

from config import MAX_RESPONSE_BYTES


def format_size(num_bytes: int) -> str:
    """Render a byte limit as whole MB when exact, otherwise in bytes."""
    mb = 1024 * 1024
    if num_bytes >= mb and num_bytes % mb == 0:
        return f"{num_bytes // mb}MB"
    return f"{num_bytes} bytes"


class AnalysisError(Exception):
    """Terminal failure of a single analysis request."""

    status_code = 500
    default_message = "Failed to analyze URL"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidSchemeError(AnalysisError):
    status_code = 400
    default_message = "Only HTTP and HTTPS URLs are supported"


class BlockedHostError(AnalysisError):
    status_code = 400
    default_message = "Private and local addresses are not allowed"


class UnsupportedContentTypeError(AnalysisError):
    status_code = 400
    default_message = "URL does not return HTML content"


class PayloadTooLargeError(AnalysisError):
    status_code = 500
    default_message = f"Response size exceeds {format_size(MAX_RESPONSE_BYTES)} limit"


class FetchTimeoutError(AnalysisError):
    status_code = 502
    default_message = "Request timeout: URL took too long to respond"


class UnreachableError(AnalysisError):
    status_code = 502
    default_message = "Unable to reach URL: Please check the URL and try again"


class FetchFailedError(AnalysisError):
    """Non-2xx response from the target site."""

    status_code = 500

    def __init__(self, status: int, reason: str = "") -> None:
        self.status = status
        self.reason = reason or ""
        super().__init__(f"Failed to fetch URL: {status} {self.reason}".rstrip())
