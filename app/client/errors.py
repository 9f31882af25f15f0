from typing import List, Optional


class ClientError(Exception):
    """A failed API call, contained to the screen that made it."""

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


class ValidationFailed(ClientError):
    """Field-level problems, shown inline next to each field."""

    @property
    def field_errors(self) -> dict:
        return {e.get("field"): e.get("message") for e in self.errors}


class RequestFailed(ClientError):
    pass


class AuthorizationFailed(ClientError):
    pass
