"""
Error types for the contact form workflow.

Validation errors are answered with HTTP 400, persistence errors with HTTP 500.
Notifier failures never leave the notifier; see NotifierResult.
"""


class ContactValidationError(Exception):
    """Submitted form data was rejected before any side effect."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingField(ContactValidationError):
    pass


class InvalidFormat(ContactValidationError):
    pass


class PersistenceError(Exception):
    """The record store failed. `message` is the store's own description."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotifierFailure(Exception):
    """Raised inside the notifier for non-2xx replies, recorded and never propagated."""
