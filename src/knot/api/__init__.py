"""Things service API modules.

Classes:
    ThingsClient: aiohttp client for the things service (device registry)
    ErrorSanitizer: Redacts credentials from errors published to clients

Exceptions:
    KnotError: Base exception for all thing service errors
    MissingInputError: A required command argument was not provided
    SchemaInvalidError / SensorInvalidError / DataInvalidError: Validation failures
    NoSchemaError: The thing has not registered a schema yet
    RegistryError: Things service failures
    PublishError / NotificationError: Message bus failures
"""
from .client import ThingsClient
from .error_sanitizer import (
    ErrorSanitizer,
    SanitizationResult,
    get_sanitizer,
    sanitize_error_message,
)
from .exceptions import (
    AuthNotProvidedError,
    ConfigurationError,
    DataInvalidError,
    DataNotProvidedError,
    IDNotProvidedError,
    KnotError,
    MissingInputError,
    NoSchemaError,
    NotificationError,
    PublishError,
    RegistryConnectionError,
    RegistryError,
    RegistryServerError,
    RegistryTimeoutError,
    RegistryValidationError,
    SchemaInvalidError,
    SchemaNotProvidedError,
    SensorInvalidError,
    SensorsNotProvidedError,
    ThingNotFoundError,
    UnauthorizedError,
)

__all__ = [
    # Client
    "ThingsClient",
    # Sanitization
    "ErrorSanitizer",
    "SanitizationResult",
    "get_sanitizer",
    "sanitize_error_message",
    # Exceptions
    "KnotError",
    "ConfigurationError",
    "MissingInputError",
    "AuthNotProvidedError",
    "IDNotProvidedError",
    "SchemaNotProvidedError",
    "SensorsNotProvidedError",
    "DataNotProvidedError",
    "SchemaInvalidError",
    "SensorInvalidError",
    "DataInvalidError",
    "NoSchemaError",
    "RegistryError",
    "UnauthorizedError",
    "ThingNotFoundError",
    "RegistryValidationError",
    "RegistryServerError",
    "RegistryConnectionError",
    "RegistryTimeoutError",
    "PublishError",
    "NotificationError",
]
