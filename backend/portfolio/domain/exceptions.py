"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class UnknownEntityTypeError(Exception):
    """Raised when no descriptor is registered for an entity name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown entity type '{name}'")


class UnknownFieldError(Exception):
    """Raised when a draft is given a field its descriptor does not define."""

    def __init__(self, entity_type: str, field: str):
        self.entity_type = entity_type
        self.field = field
        super().__init__(f"{entity_type} has no editable field '{field}'")


class InvalidFieldValueError(Exception):
    """Raised when a draft value cannot be converted into its write type."""

    def __init__(self, field: str, value: object, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"Field '{field}' expects {expected}, got {value!r}")


class InvalidStateError(Exception):
    """Raised when a form operation is not allowed in the current state."""

    def __init__(self, operation: str, state: object):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while form is {state}")


class GatewayError(Exception):
    """Error reported by the remote table gateway or object store.

    Gateways hand these back inside a ``GatewayResult`` instead of raising;
    ``GatewayResult.unwrap()`` raises them for callers that prefer exceptions.
    """

    def __init__(self, operation: str, target: str, message: str, status_code: int | None = None):
        self.operation = operation
        self.target = target
        self.message = message
        self.status_code = status_code
        super().__init__(f"[{operation} {target}] {message}")


class AuthError(Exception):
    """Raised when the auth provider rejects credentials or a session."""

    def __init__(self, message: str, status_code: int = 401):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
