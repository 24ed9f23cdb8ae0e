"""
Catalog service exception classes
"""
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Error codes surfaced to API callers."""
    PRODUCT_NOT_FOUND = "ERR_101"
    DISCOUNT_ALREADY_APPLIED = "ERR_102"
    DATABASE_OPERATION_FAILED = "ERR_103"
    OPERATION_FAILED = "ERR_104"
    INVALID_DISCOUNT = "ERR_105"
    INVALID_PRODUCT_ID = "ERR_106"
    INVALID_COUNTRY = "ERR_107"
    MALFORMED_REQUEST = "ERR_108"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    @property
    def description(self) -> str:
        return _ERROR_DESCRIPTIONS[self]


_ERROR_DESCRIPTIONS = {
    ErrorCode.PRODUCT_NOT_FOUND: "Product Not Found",
    ErrorCode.DISCOUNT_ALREADY_APPLIED: "Discount already exists",
    ErrorCode.DATABASE_OPERATION_FAILED: "Database operation failed",
    ErrorCode.OPERATION_FAILED: "Failed to complete the operation",
    ErrorCode.INVALID_DISCOUNT: "Invalid Discount Value",
    ErrorCode.INVALID_PRODUCT_ID: "Invalid ProductId Value",
    ErrorCode.INVALID_COUNTRY: "Invalid Country Code",
    ErrorCode.MALFORMED_REQUEST: "Malformed request body",
    ErrorCode.CONFIGURATION_ERROR: "Invalid configuration",
}


class CatalogError(Exception):
    """Base exception for the catalog service"""

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None):
        """
        Args:
            message: Error message
            error_code: Error code (optional)
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class CatalogValidationError(CatalogError):
    """Caller-correctable input error. Raised before any storage access."""


class InvalidDiscountError(CatalogValidationError):
    """Discount percent or identifier is out of range or blank"""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid discount: {reason}",
            error_code=ErrorCode.INVALID_DISCOUNT,
        )
        self.reason = reason


class InvalidProductIdError(CatalogValidationError):
    """Product identifier is blank, missing or too long"""

    def __init__(self, product_id: Optional[str], reason: str = "is blank"):
        super().__init__(
            f"Invalid product ID: {product_id!r} {reason}",
            error_code=ErrorCode.INVALID_PRODUCT_ID,
        )
        self.product_id = product_id


class InvalidCountryError(CatalogValidationError):
    """
    Country code is missing, blank or not in the VAT registry.

    Null, blank and unknown codes share this class; only the message differs.
    """

    def __init__(self, country_code: Optional[str]):
        if country_code is None or not country_code.strip():
            message = f"Invalid country code: country is null or empty: {country_code!r}"
        else:
            message = f"Invalid country code: unknown country: {country_code}"
        super().__init__(message, error_code=ErrorCode.INVALID_COUNTRY)
        self.country_code = country_code


UnknownCountryError = InvalidCountryError


class ProductNotFoundError(CatalogError):
    """Product does not exist"""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            error_code=ErrorCode.PRODUCT_NOT_FOUND,
        )
        self.product_id = product_id


class DiscountAlreadyAppliedError(CatalogError):
    """
    Discount with the same identifier is already on the product.

    Expected under concurrent duplicate requests; callers may treat it as
    success-equivalent.
    """

    def __init__(self, product_id: str, discount_id: str):
        super().__init__(
            f"Discount already applied: productId: {product_id}, discountId: {discount_id}",
            error_code=ErrorCode.DISCOUNT_ALREADY_APPLIED,
        )
        self.product_id = product_id
        self.discount_id = discount_id


class DatabaseOperationError(CatalogError):
    """Storage layer fault (connection, timeout, driver error)"""

    def __init__(self, operation: str, reason: str, cause: Optional[BaseException] = None):
        """
        Args:
            operation: Storage operation that failed (e.g. 'find_by_country')
            reason: Failure description
            cause: Lower-level exception, kept for logs
        """
        super().__init__(
            f"Database operation failed ({operation}): {reason}",
            error_code=ErrorCode.DATABASE_OPERATION_FAILED,
        )
        self.operation = operation
        self.reason = reason
        self.cause = cause


class ConfigurationError(CatalogError):
    """Configuration error"""

    def __init__(self, config_key: str, reason: str):
        """
        Args:
            config_key: Settings key
            reason: Why the value was rejected
        """
        message = f"Configuration error ({config_key}): {reason}"
        super().__init__(message, error_code=ErrorCode.CONFIGURATION_ERROR)
        self.config_key = config_key
        self.reason = reason
