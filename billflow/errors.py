"""
Error taxonomy shared by the store, the entity services and the API.

Services raise these; the application registers handlers that turn them
into JSON error responses.
"""


class BillingError(Exception):
    """Base class for every error raised by billflow."""
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(BillingError):
    """An entity id has no match in the store."""
    status_code = 404


class ValidationError(BillingError):
    """A create/update payload or a requested transition is not allowed."""
    status_code = 400


class BackendUnavailableError(BillingError):
    """The store failed to read or write for infrastructure reasons."""
    status_code = 503
