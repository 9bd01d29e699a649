"""
Domain exceptions raised by the service layer.

Routes translate these into HTTP responses; services never raise HTTPException.
"""


class BudgetWiseError(Exception):
    """Base exception for service-level errors."""
    pass


class ValidationError(BudgetWiseError):
    """Input was rejected before anything was persisted."""
    pass


class NotFoundError(BudgetWiseError):
    """A book, collaborator, transaction or lookup entry does not exist."""
    pass


class PermissionDeniedError(BudgetWiseError):
    """The current user may not perform this action on the book."""
    pass


class ConflictError(BudgetWiseError):
    """Duplicate entry or a concurrent modification of the same row."""
    pass


class ConfigurationError(BudgetWiseError):
    """A provider is not configured (missing credentials)."""
    pass


class ExternalServiceError(BudgetWiseError):
    """An external provider (image hosting, email) failed."""
    pass
