"""Exception taxonomy shared by the core and web layers."""

from __future__ import annotations


class EduportalError(Exception):
    """Base class for application errors."""


class AuthError(EduportalError):
    """Bad credentials or an expired/invalid session."""


class StoreError(EduportalError):
    """A query or mutation against the backend store failed.

    The message is the store's own message and is shown to the user verbatim.
    """

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class FormValidationError(EduportalError):
    """A required form field is missing. Raised before any store call."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BackendConfigError(EduportalError):
    """The backend URL or key is not configured."""
