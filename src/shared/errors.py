"""Error taxonomy raised by domain code and mapped to HTTP responses.

Malformed input is reported with protean's ``ValidationError`` (a dict of
field -> messages), the same way aggregates report broken invariants. The
classes below cover everything else a caller needs to tell apart.
"""


class DomainError(Exception):
    """Base class for errors that are safe to show to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, errors: dict | None = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class NotFoundError(DomainError):
    """The entity does not exist, or does not belong to the caller."""

    status_code = 404
    default_message = "Resource not found"


class AuthenticationError(DomainError):
    status_code = 401
    default_message = "Access token required"


class AuthorizationError(DomainError):
    status_code = 403
    default_message = "Access forbidden"


class ConflictError(DomainError):
    """A business rule rejects the request in the entity's current state."""

    status_code = 400
    default_message = "Request conflicts with current state"


class DuplicateResource(ConflictError):
    status_code = 409
    default_message = "Resource already exists"


class EmptyCart(ConflictError):
    default_message = "Cart is empty"


class InsufficientStock(ConflictError):
    default_message = "Insufficient stock"

    def __init__(self, item_name: str, requested: int, available: int):
        self.item_name = item_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {item_name}: requested {requested}, available {available}",
            errors={"stock": [f"insufficient stock for {item_name}"]},
        )


class InvalidTransition(ConflictError):
    default_message = "Invalid status transition"


class CategoryHasChildren(ConflictError):
    default_message = "Cannot delete a category that has child categories"


class CategoryHasProducts(ConflictError):
    default_message = "Cannot delete a category that has products"


class CannotDeleteOnlyDefault(ConflictError):
    default_message = "Cannot delete the only default address"


class SelfLockout(ConflictError):
    default_message = "Admins cannot revoke their own access"
