# backend/app/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO HTTP knowledge.
The application layer (app/main.py) maps them to HTTP responses.

The pure calculators (valuation ledger, session metrics, statistics
aggregator) never raise: degenerate inputs fall back to neutral values.
Only the service shell raises, for things the caller asked for that do
not exist or cannot be interpreted.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   ├── InvalidFilterError
    │   └── UnsupportedCurrencyError
    └── NotFoundError
        └── PlatformNotFoundError
"""


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when input validation fails.

    This is for programmatic validation errors (filter combinations that
    cannot be interpreted), NOT for request shape validation which is
    handled by Pydantic.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidFilterError(ValidationError):
    """
    Raised when a date filter or session filter cannot be built.

    Examples:
    - period=custom without start_date/end_date
    - scope=platform without platform_id
    - start_date after end_date
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, field=field)


class UnsupportedCurrencyError(ValidationError):
    """Raised when a currency code is not in SUPPORTED_CURRENCIES."""

    def __init__(self, currency: str) -> None:
        self.currency = currency
        super().__init__(f"Unsupported currency: '{currency}'", field="currency")


# =============================================================================
# NOT FOUND ERRORS
# =============================================================================


class NotFoundError(ServiceError):
    """
    Base exception for resource not found errors.

    Attributes:
        resource_type: Type of resource (e.g., "Platform")
        resource_id: Identifier of the resource
    """

    def __init__(
            self,
            message: str,
            resource_type: str | None = None,
            resource_id: int | str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message)


class PlatformNotFoundError(NotFoundError):
    """
    Raised when a platform cannot be found.

    Attributes:
        platform_id: ID of the platform that was not found
    """

    def __init__(self, platform_id: int) -> None:
        self.platform_id = platform_id
        super().__init__(
            f"Platform {platform_id} not found",
            resource_type="Platform",
            resource_id=platform_id,
        )


__all__ = [
    "ServiceError",
    "ValidationError",
    "InvalidFilterError",
    "UnsupportedCurrencyError",
    "NotFoundError",
    "PlatformNotFoundError",
]
