"""
Errors raised by the AI advisor.

Every failure reaches the caller as one of these; nothing is logged or
swallowed inside the dispatcher.
"""


class AdvisorError(Exception):
    """Base class for Section 2 errors."""


class ConfigurationError(AdvisorError):
    """A prerequisite (such as the API key) is missing."""


class GeminiTransportError(AdvisorError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""


class GeminiAPIError(AdvisorError):
    """
    The Gemini endpoint answered with a non-success status, or with a
    success status whose body is not JSON.

    Attributes:
        status_code: HTTP status of the final response
        body: Raw response body text
        attempts: Number of requests made before giving up
        retry_state: Dispatcher bookkeeping (delays slept, final state)
    """

    def __init__(self, status_code: int, body: str, attempts: int = 1, retry_state=None):
        self.status_code = status_code
        self.body = body
        self.attempts = attempts
        self.retry_state = retry_state
        super().__init__(f"Gemini API error: {status_code} - {body}")

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500
