"""Domain exceptions for the contentflow application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class ContentFlowException(Exception):
    """Base exception for all contentflow application errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging. Presentation layer maps these to HTTP
    responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ContentFlowException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(ContentFlowException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(ContentFlowException):
    """Raised when the user lacks required permissions for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'plan', 'job').
            action: Optional action that was attempted (e.g. 'create').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(ContentFlowException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'flow', 'state').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ResourceAlreadyExistsException(ContentFlowException):
    """Raised when a unique field (name, email) is already taken."""

    def __init__(self, resource_type: str, field: str, value: str) -> None:
        super().__init__(
            f"{resource_type} with {field} '{value}' already exists",
            "ALREADY_EXISTS",
            {"resource_type": resource_type, "field": field, "value": value},
        )


class ResourceInUseException(ContentFlowException):
    """Raised when deleting a record that other records still depend on."""

    def __init__(self, resource_type: str, resource_id: str, dependents: str) -> None:
        """Initialize with the blocked resource and the dependent collection.

        Args:
            resource_type: Type of the resource being deleted (e.g. 'flow').
            resource_id: Its ID.
            dependents: Name of the dependent records (e.g. 'states').
        """
        super().__init__(
            f"Cannot delete the {resource_type}: some {dependents} depend on it. "
            f"Delete or update those {dependents} and try again.",
            "RESOURCE_IN_USE",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "dependents": dependents,
            },
        )


class InvalidApproverException(ContentFlowException):
    """Raised when someone other than the designated approver tries to approve."""

    def __init__(self, approval_system_id: str) -> None:
        super().__init__(
            "Only the designated approver can approve this content",
            "INVALID_USER",
            {"approval_system_id": approval_system_id},
        )


class UnprocessableStateException(ContentFlowException):
    """Raised when the instance is not in the approval system's pre-state."""

    def __init__(
        self, approval_system_id: str, expected_state_id: str, actual_state_id: str
    ) -> None:
        super().__init__(
            "Content is not in the state this approval starts from",
            "UNPROCESSABLE_STATE",
            {
                "approval_system_id": approval_system_id,
                "expected_state_id": expected_state_id,
                "actual_state_id": actual_state_id,
            },
        )


class AlreadyApprovedException(ContentFlowException):
    """Raised when approving (or editing) an approval system that is already approved."""

    def __init__(self, approval_system_id: str) -> None:
        super().__init__(
            "Approval system is already approved",
            "ALREADY_APPROVED",
            {"approval_system_id": approval_system_id},
        )


class WrongAmountException(ContentFlowException):
    """Raised when a paid amount matches neither the monthly nor the yearly plan price."""

    def __init__(self, plan_id: str, amount: int) -> None:
        super().__init__(
            "Paid amount does not match the plan's monthly or yearly price",
            "WRONG_AMOUNT",
            {"plan_id": plan_id, "amount": amount},
        )


class PaymentGatewayException(ContentFlowException):
    """Raised when the payment gateway lookup fails or returns an unusable payload."""

    def __init__(self, message: str, transaction_id: str | None = None) -> None:
        details = {"transaction_id": transaction_id} if transaction_id else {}
        super().__init__(message, "PAYMENT_GATEWAY_ERROR", details)


class SqlNotConfiguredException(ContentFlowException):
    """Raised when an operation requires the database but no engine is configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class UnknownJobKindException(ContentFlowException):
    """Raised when a job is enqueued or claimed with no registered handler."""

    def __init__(self, kind: str) -> None:
        super().__init__(
            f"No handler registered for job kind '{kind}'",
            "UNKNOWN_JOB_KIND",
            {"kind": kind},
        )
