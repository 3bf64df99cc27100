"""
Exceptions raised by the Concept Insights client.

Two kinds of failure exist:
    - InvalidArgument: raised before any request is sent, when a required
      value is missing or empty.
    - ServiceError: raised when the remote call fails (non-2xx status,
      transport failure or a body that cannot be read as the expected model).
"""

from typing import Any, Dict, Optional, Type


class ConceptInsightsError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(ConceptInsightsError, ValueError):
    """A required parameter is missing, empty or out of range."""


class ServiceError(ConceptInsightsError):
    """
    The remote service rejected the call or answered with something unreadable.

    Attributes:
        status_code: HTTP status, or None when no response was received
        body: raw response text as returned by the server
        error: the server's own error message when the body is JSON
        url: the requested URL
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        error: Optional[str] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.error = error
        self.url = url

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class BadRequest(ServiceError):
    pass


class Unauthorized(ServiceError):
    pass


class Forbidden(ServiceError):
    pass


class NotFound(ServiceError):
    pass


class Conflict(ServiceError):
    pass


class RequestTooLarge(ServiceError):
    pass


class UnsupportedMediaType(ServiceError):
    pass


class TooManyRequests(ServiceError):
    pass


class InternalServerError(ServiceError):
    pass


class ServiceUnavailable(ServiceError):
    pass


STATUS_ERRORS: Dict[int, Type[ServiceError]] = {
    400: BadRequest,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    409: Conflict,
    413: RequestTooLarge,
    415: UnsupportedMediaType,
    429: TooManyRequests,
    500: InternalServerError,
    503: ServiceUnavailable,
}


def _server_error_message(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    for key in ("error", "error_message", "message", "description"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
        # some endpoints nest the message: {"error": {"message": "..."}}
        if isinstance(value, dict) and isinstance(value.get("message"), str):
            return value["message"]
    return None


def error_from_response(response) -> ServiceError:
    """
    Builds the ServiceError matching an HTTP error response.

    Args:
        response: a requests.Response with a 4xx/5xx status

    Returns:
        An instance of the status-specific ServiceError subclass, or
        ServiceError itself for statuses without a dedicated class.
    """
    body = response.text
    try:
        payload = response.json()
    except ValueError:
        payload = None
    error = _server_error_message(payload)
    message = error or response.reason or f"HTTP {response.status_code} error"
    error_cls = STATUS_ERRORS.get(response.status_code, ServiceError)
    return error_cls(
        message,
        status_code=response.status_code,
        body=body,
        error=error,
        url=response.url,
    )
