"""Errors raised by the billing period engine."""


class BillingPeriodError(ValueError):
    """Base class for billing period errors."""

    pass


class MissingDateError(BillingPeriodError):
    """Raised when a required date of the billing context is absent."""

    pass


class InvalidContextError(BillingPeriodError):
    """Raised when the billing context is internally inconsistent."""

    pass


class InvalidPeriodError(BillingPeriodError):
    """Raised when a computed window ends before it starts."""

    pass
