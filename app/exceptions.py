from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for expected, user-recoverable service failures.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, stock info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Service error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"


class NotFoundError(ServiceError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    """Raised when the request conflicts with the current state of a resource."""

    http_status = 409
    default_message = "Conflict"


class UnauthorizedError(ServiceError):
    """Raised when authentication or authorization fails."""

    http_status = 401
    default_message = "Unauthorized"


class InsufficientStockError(ConflictError):
    """Raised when a stock decrement batch cannot be applied.

    The whole batch is rolled back; ``details`` names the first product that
    could not cover its requested quantity.
    """

    def __init__(self, product_id: str, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for {product_id}: "
            f"available={available}, requested={requested}",
            details={
                "product_id": product_id,
                "available": available,
                "requested": requested,
            },
            code="INSUFFICIENT_STOCK",
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested
