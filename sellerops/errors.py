"""
Exception types raised across SellerOps.
"""


class SellerOpsError(Exception):
    """Base class for all SellerOps errors."""


class ClassifierError(SellerOpsError):
    """The classifier could not be reached or returned an unusable payload."""


class PlatformError(SellerOpsError):
    """A platform read operation failed."""


class NoPendingCommandError(SellerOpsError):
    """Confirm or edit was requested with no command awaiting confirmation."""
