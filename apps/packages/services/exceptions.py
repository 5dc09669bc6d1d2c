"""
Domain-specific exceptions for packages app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class PackagesServiceError(Exception):
    """Base exception for all packages service errors."""
    pass


class PackageNotFoundError(PackagesServiceError):
    """Raised when a package does not exist or is not for sale."""
    pass


class PackageAlreadyOwnedError(PackagesServiceError):
    """Raised when a user buys a package they already hold."""
    pass
