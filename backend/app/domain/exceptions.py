"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: str, message: str | None = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message or f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str, message: str | None = None):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(message or f"{entity_type} with {field}='{value}' already exists")


class ValidationError(Exception):
    """Raised when a request payload is missing or carries invalid fields."""


class BodyParseError(Exception):
    """Raised by the transport when a request body is not a JSON object."""
