"""Custom exception hierarchy for the Atlas Cortex rules core.

This module defines the exceptions raised across the rules core. All
exceptions inherit from AtlasCortexError, enabling unified error handling
at the application boundary while preserving domain-specific context.

Lookup failures inside the stat mapper and the normalizer are recovered
locally and surface only as UnknownStatWarning; everything else in this
module is raised to the caller.

Example:
    >>> from atlas_cortex.core.exceptions import UnknownEngineSchemaError
    >>> raise UnknownEngineSchemaError("Engine not found", engine_id="steampunk")
"""

from __future__ import annotations

from typing import Any


class AtlasCortexError(Exception):
    """Base exception for all Atlas Cortex errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(AtlasCortexError):
    """Raised when application configuration is invalid.

    This includes missing required settings, invalid values, or
    incompatible configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Validation Exceptions
# =============================================================================


class ValidationError(AtlasCortexError):
    """Raised when data validation fails.

    This includes constraint violations in user input during character
    creation and type mismatches in externally supplied data.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class CharacterValidationError(ValidationError):
    """Raised when a character cannot be finalized.

    Carries every missing required field id and every other constraint
    violation found, so the creation flow can show them all at once.
    """

    def __init__(
        self,
        message: str,
        *,
        missing_fields: list[str] | None = None,
        errors: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize character validation error.

        Args:
            message: Human-readable error description.
            missing_fields: Ids of required form fields without a value.
            errors: Other validation messages (e.g. stat range violations).
            details: Optional dictionary containing additional error context.
        """
        self.missing_fields = list(missing_fields or [])
        self.errors = list(errors or [])
        combined_details = details or {}
        if self.missing_fields:
            combined_details["missing_fields"] = self.missing_fields
        if self.errors:
            combined_details["errors"] = self.errors
        super().__init__(message, details=combined_details)


# =============================================================================
# Rules Engine Exceptions
# =============================================================================


class RulesEngineError(AtlasCortexError):
    """Base exception for rule system (engine schema) errors."""

    def __init__(
        self,
        message: str,
        *,
        engine_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize rules engine error with engine context.

        Args:
            message: Human-readable error description.
            engine_id: Identifier of the engine schema involved.
            details: Optional dictionary containing additional error context.
        """
        self.engine_id = engine_id
        combined_details = details or {}
        if engine_id:
            combined_details["engine_id"] = engine_id
        super().__init__(message, details=combined_details)


class UnknownEngineSchemaError(RulesEngineError):
    """Raised when no engine schema exists for the requested id.

    Fatal to the creation or display flow that requested it; callers
    surface it as an "engine not found" state instead of crashing.
    """


class EngineSchemaError(RulesEngineError):
    """Raised when an engine schema document fails validation."""


class UnknownDefinitionError(RulesEngineError, LookupError):
    """Raised when a stat, resource or form field id is not in a schema."""

    kind = "definition"

    def __init__(
        self,
        message: str,
        *,
        definition_id: str,
        engine_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize unknown definition error.

        Args:
            message: Human-readable error description.
            definition_id: The id that could not be resolved.
            engine_id: Identifier of the engine schema searched.
            details: Optional dictionary containing additional error context.
        """
        self.definition_id = definition_id
        combined_details = details or {}
        combined_details[f"{self.kind}_id"] = definition_id
        super().__init__(message, engine_id=engine_id, details=combined_details)


class UnknownStatError(UnknownDefinitionError):
    """Raised when a stat id is not declared by the schema."""

    kind = "stat"


class UnknownResourceError(UnknownDefinitionError):
    """Raised when a resource id is not declared by the schema."""

    kind = "resource"


class UnknownFieldError(UnknownDefinitionError):
    """Raised when a creation form field id is not declared by the schema."""

    kind = "field"


# =============================================================================
# Warnings
# =============================================================================


class UnknownStatWarning(UserWarning):
    """Issued when a stat name cannot be mapped or found.

    Gameplay continues with a fallback value, so this is never raised.
    """


__all__ = [
    # Base exception
    "AtlasCortexError",
    # Configuration
    "ConfigurationError",
    # Validation
    "ValidationError",
    "CharacterValidationError",
    # Rules engine
    "RulesEngineError",
    "UnknownEngineSchemaError",
    "EngineSchemaError",
    "UnknownDefinitionError",
    "UnknownStatError",
    "UnknownResourceError",
    "UnknownFieldError",
    # Warnings
    "UnknownStatWarning",
]
