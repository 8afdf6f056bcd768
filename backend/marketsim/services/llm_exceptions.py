"""Tagged exceptions for the text generation client."""
from typing import Optional


class LLMClientError(Exception):
    """Base exception for all generation client errors."""

    code = "UNKNOWN_ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LLMAuthenticationError(LLMClientError):
    """Raised when the API key is missing or rejected (HTTP 401/403)."""

    code = "INVALID_API_KEY"
    http_status = 401


class LLMRateLimitError(LLMClientError):
    """Raised when the API rate limit is exceeded (HTTP 429)."""

    code = "RATE_LIMIT_EXCEEDED"
    http_status = 429

    def __init__(self, message: str, retry_after: Optional[int] = None):
        """
        Initialize rate limit error.

        Args:
            message: Error message
            retry_after: Seconds to wait before retry (from Retry-After header)
        """
        super().__init__(message)
        self.retry_after = retry_after


class LLMServiceError(LLMClientError):
    """Raised when the upstream service fails (HTTP 5xx)."""

    code = "SERVICE_ERROR"
    http_status = 503

    def __init__(self, message: str, status_code: int = 500, response_body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class LLMTimeoutError(LLMClientError):
    """Raised when a generation request times out."""

    code = "TIMEOUT"
    http_status = 504


class LLMAPIError(LLMClientError):
    """Raised for other API errors (4xx) and unusable responses."""

    code = "API_ERROR"
    http_status = 500

    def __init__(self, message: str, status_code: int, response_body: Optional[str] = None):
        """
        Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code
            response_body: Response body from API
        """
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class LLMUnknownError(LLMClientError):
    """Raised for failures that fit no other category."""

    code = "UNKNOWN_ERROR"
    http_status = 500
