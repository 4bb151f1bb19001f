"""
errors.py — Exception Types Raised by the Payment Allocator

All errors are fatal for the current run: nothing is retried.
"""


class PaymentAllocatorError(Exception):
    """Base class for every error raised by this package."""


class LoadError(PaymentAllocatorError):
    """An input source is missing, unreadable, or does not match the expected shape."""


class ConfigurationError(PaymentAllocatorError):
    """The payment method catalog violates a precondition (empty, no points method)."""


class AllocationError(PaymentAllocatorError):
    """The engine could not finish a run, e.g. the points upgrade loop did not converge."""
