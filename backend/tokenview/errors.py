from typing import Any, Dict, Optional


class TokenViewError(Exception):
    """An error that is reported to the caller as an ErrorResponse."""

    status_code = 500

    def __init__(self, error: str, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(error)
        self.error = error
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidRequestError(TokenViewError):
    status_code = 400


class MissingConfigError(TokenViewError):
    status_code = 500


class UpstreamError(TokenViewError):
    """Primary provider failure: relayed status, GraphQL error, or missing token."""
