#!/usr/bin/env python3
"""Exception Hierarchy for the KNoT thing command service.

This module provides a structured exception hierarchy for every failure the
thing use cases can report: missing inputs, schema and sensor validation,
registry (things service) failures and message publishing failures.

Design Principles:
    - All exceptions inherit from KnotError base class
    - Exceptions preserve context (original error, timestamps, details)
    - Exceptions are categorized by recoverability
    - Registry errors are raised by adapters and passed through use cases untouched

Exception Hierarchy:
    KnotError (base)
    ├── ConfigurationError (unrecoverable - fix config)
    ├── MissingInputError (unrecoverable - fix request)
    │   ├── AuthNotProvidedError
    │   ├── IDNotProvidedError
    │   ├── SchemaNotProvidedError
    │   ├── SensorsNotProvidedError
    │   └── DataNotProvidedError
    ├── SchemaInvalidError
    ├── SensorInvalidError
    ├── DataInvalidError
    ├── NoSchemaError
    ├── RegistryError (may be recoverable - retry)
    │   ├── UnauthorizedError
    │   ├── ThingNotFoundError
    │   ├── RegistryValidationError
    │   ├── RegistryServerError
    │   ├── RegistryConnectionError
    │   └── RegistryTimeoutError
    └── PublishError (recoverable - retry)
        └── NotificationError
"""
from datetime import datetime, timezone
from typing import Any, Optional

# ============================================
# Base Exception
# ============================================

class KnotError(Exception):
    """Base exception for all thing service errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "SCHEMA_INVALID")
        details: Additional context as a dictionary
        timestamp: When the error occurred
        cause: The original exception that caused this error
        recoverable: Whether this error might be recoverable with retry
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)
        self.cause = cause
        self.recoverable = recoverable

        if cause:
            self.__cause__ = cause

    def __str__(self) -> str:
        parts = [self.message]
        if self.code:
            parts.insert(0, f"[{self.code}]")
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "recoverable": self.recoverable,
            "cause": str(self.cause) if self.cause else None,
        }


# ============================================
# Configuration Errors (Unrecoverable)
# ============================================

class ConfigurationError(KnotError):
    """Raised when configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        missing_keys: Optional[list[str]] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if missing_keys:
            details["missing_keys"] = missing_keys
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details=details,
            recoverable=False,
            **kwargs,
        )


# ============================================
# Input Errors
# ============================================

class MissingInputError(KnotError):
    """Base class for a required use case argument that was not provided.

    Always raised before any registry or publisher call.
    """

    def __init__(self, message: str, field: str, **kwargs):
        details = kwargs.pop("details", {})
        details["field"] = field
        kwargs.setdefault("code", "MISSING_INPUT")
        super().__init__(message, details=details, recoverable=False, **kwargs)
        self.field = field


class AuthNotProvidedError(MissingInputError):
    """Raised when the authorization token is empty."""

    def __init__(self, message: str = "authorization key not provided", **kwargs):
        super().__init__(message, field="authorization", code="AUTH_NOT_PROVIDED", **kwargs)


class IDNotProvidedError(MissingInputError):
    """Raised when the thing id is empty."""

    def __init__(self, message: str = "thing's id not provided", **kwargs):
        super().__init__(message, field="thing_id", code="ID_NOT_PROVIDED", **kwargs)


class SchemaNotProvidedError(MissingInputError):
    """Raised when the schema list is None."""

    def __init__(self, message: str = "thing's schema not provided", **kwargs):
        super().__init__(message, field="schema", code="SCHEMA_NOT_PROVIDED", **kwargs)


class SensorsNotProvidedError(MissingInputError):
    """Raised when the sensor id selection is None."""

    def __init__(self, message: str = "sensors not provided", **kwargs):
        super().__init__(message, field="sensor_ids", code="SENSORS_NOT_PROVIDED", **kwargs)


class DataNotProvidedError(MissingInputError):
    """Raised when the data list is None."""

    def __init__(self, message: str = "data not provided", **kwargs):
        super().__init__(message, field="data", code="DATA_NOT_PROVIDED", **kwargs)


# ============================================
# Validation Errors
# ============================================

class SchemaInvalidError(KnotError):
    """Raised when a schema list fails the type/value/unit rule table."""

    def __init__(
        self,
        message: str = "invalid schema",
        sensor_id: Optional[int] = None,
        field: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if sensor_id is not None:
            details["sensor_id"] = sensor_id
        if field:
            details["field"] = field
        super().__init__(
            message,
            code="SCHEMA_INVALID",
            details=details,
            recoverable=False,
            **kwargs,
        )
        self.sensor_id = sensor_id
        self.field = field


class SensorInvalidError(KnotError):
    """Raised when a sensor id is not part of the thing's registered schema."""

    def __init__(
        self,
        message: str = "invalid sensor id",
        sensor_id: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if sensor_id is not None:
            details["sensor_id"] = sensor_id
        super().__init__(
            message,
            code="SENSOR_INVALID",
            details=details,
            recoverable=False,
            **kwargs,
        )
        self.sensor_id = sensor_id


class DataInvalidError(KnotError):
    """Raised when a data value does not match its sensor's value type."""

    def __init__(
        self,
        message: str = "invalid data value",
        sensor_id: Optional[int] = None,
        value_type: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if sensor_id is not None:
            details["sensor_id"] = sensor_id
        if value_type is not None:
            details["value_type"] = value_type
        super().__init__(
            message,
            code="DATA_INVALID",
            details=details,
            recoverable=False,
            **kwargs,
        )
        self.sensor_id = sensor_id
        self.value_type = value_type


class NoSchemaError(KnotError):
    """Raised when a command targets a thing that has not registered a schema."""

    def __init__(self, thing_id: str, **kwargs):
        super().__init__(
            f"thing {thing_id} has no schema yet",
            code="NO_SCHEMA",
            details={"thing_id": thing_id},
            recoverable=False,
            **kwargs,
        )
        self.thing_id = thing_id


# ============================================
# Registry Errors
# ============================================

class RegistryError(KnotError):
    """Base class for things service (registry) failures.

    Attributes:
        status_code: HTTP status code, if the service answered
        endpoint: Endpoint that was called
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        response_body: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if status_code is not None:
            details["status_code"] = status_code
        if endpoint:
            details["endpoint"] = endpoint
        if response_body:
            details["response_body"] = response_body[:500]

        kwargs.setdefault("recoverable", status_code in (429, 500, 502, 503, 504))
        kwargs.setdefault("code", f"REGISTRY_ERROR_{status_code}" if status_code else "REGISTRY_ERROR")

        super().__init__(message, details=details, **kwargs)
        self.status_code = status_code
        self.endpoint = endpoint
        self.response_body = response_body


class UnauthorizedError(RegistryError):
    """Raised when the things service rejects the authorization token (401/403)."""

    def __init__(self, message: str = "thing authorization rejected", **kwargs):
        kwargs.setdefault("status_code", 401)
        super().__init__(message, code="UNAUTHORIZED", recoverable=False, **kwargs)


class ThingNotFoundError(RegistryError):
    """Raised when the thing does not exist in the registry (404)."""

    def __init__(self, thing_id: str, **kwargs):
        kwargs.setdefault("status_code", 404)
        details = kwargs.pop("details", {})
        details["thing_id"] = thing_id
        super().__init__(
            f"thing '{thing_id}' not found",
            code="THING_NOT_FOUND",
            details=details,
            recoverable=False,
            **kwargs,
        )
        self.thing_id = thing_id


class RegistryValidationError(RegistryError):
    """Raised when the things service refuses the request body (400/422)."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("status_code", 400)
        super().__init__(message, code="REGISTRY_VALIDATION_ERROR", recoverable=False, **kwargs)


class RegistryServerError(RegistryError):
    """Raised when the things service returns a 5xx error."""

    def __init__(self, message: str = "things service error", **kwargs):
        kwargs.setdefault("status_code", 500)
        super().__init__(message, code="REGISTRY_SERVER_ERROR", recoverable=True, **kwargs)


class RegistryConnectionError(RegistryError):
    """Raised when the things service cannot be reached."""

    def __init__(self, message: str = "failed to connect to things service", **kwargs):
        super().__init__(message, code="REGISTRY_CONNECTION_ERROR", recoverable=True, **kwargs)


class RegistryTimeoutError(RegistryError):
    """Raised when a things service request times out."""

    def __init__(
        self,
        message: str = "things service request timed out",
        timeout_seconds: Optional[float] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if timeout_seconds:
            details["timeout_seconds"] = timeout_seconds
        super().__init__(
            message,
            code="REGISTRY_TIMEOUT",
            details=details,
            recoverable=True,
            **kwargs,
        )


# ============================================
# Publishing Errors
# ============================================

class PublishError(KnotError):
    """Raised when a message cannot be published to the bus.

    Attributes:
        exchange: Exchange the message was addressed to
        routing_key: Routing key of the message
    """

    def __init__(
        self,
        message: str,
        exchange: Optional[str] = None,
        routing_key: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if exchange:
            details["exchange"] = exchange
        if routing_key:
            details["routing_key"] = routing_key
        kwargs.setdefault("code", "PUBLISH_ERROR")
        kwargs.setdefault("recoverable", True)
        super().__init__(message, details=details, **kwargs)
        self.exchange = exchange
        self.routing_key = routing_key


class NotificationError(PublishError):
    """A client notification failed while reporting another error.

    Carries both failures: ``cause`` is the send failure and ``original`` is
    the error the notification was describing.
    """

    def __init__(self, send_error: Exception, original: Exception, **kwargs):
        super().__init__(
            f"error sending response to client: {send_error}: {original}",
            code="NOTIFICATION_ERROR",
            cause=send_error,
            details={"original_error": type(original).__name__},
            **kwargs,
        )
        self.send_error = send_error
        self.original = original


__all__ = [
    # Base
    "KnotError",
    # Configuration
    "ConfigurationError",
    # Input
    "MissingInputError",
    "AuthNotProvidedError",
    "IDNotProvidedError",
    "SchemaNotProvidedError",
    "SensorsNotProvidedError",
    "DataNotProvidedError",
    # Validation
    "SchemaInvalidError",
    "SensorInvalidError",
    "DataInvalidError",
    "NoSchemaError",
    # Registry
    "RegistryError",
    "UnauthorizedError",
    "ThingNotFoundError",
    "RegistryValidationError",
    "RegistryServerError",
    "RegistryConnectionError",
    "RegistryTimeoutError",
    # Publishing
    "PublishError",
    "NotificationError",
]
