"""vaultscan — breadth-first snapshot listing of hidden vault folders."""

__version__ = "0.1.0"


class VaultscanError(Exception):
    """User-facing CLI error.

    Raised for invalid arguments, missing directories, and other
    recoverable input errors. The message is printed to stderr
    and the process exits with code 1.
    """


class ListingError(VaultscanError):
    """Fatal failure while listing a configuration folder.

    Raised when a path cannot be stat'ed or a file carries no usable
    modification time. The whole listing is abandoned.
    """
