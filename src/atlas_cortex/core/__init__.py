"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        AtlasCortexError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.
        CharacterValidationError: Character creation validation errors.
        UnknownEngineSchemaError: Requested engine schema does not exist.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from atlas_cortex.core.config import (
    CatalogSettings,
    CreationSettings,
    Settings,
    ShareSettings,
    clear_settings_cache,
    get_settings,
)
from atlas_cortex.core.exceptions import (
    AtlasCortexError,
    CharacterValidationError,
    ConfigurationError,
    EngineSchemaError,
    RulesEngineError,
    UnknownDefinitionError,
    UnknownEngineSchemaError,
    UnknownFieldError,
    UnknownResourceError,
    UnknownStatError,
    UnknownStatWarning,
    ValidationError,
)
from atlas_cortex.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "AtlasCortexError",
    # Configuration exceptions
    "ConfigurationError",
    # Validation exceptions
    "ValidationError",
    "CharacterValidationError",
    # Rules engine exceptions
    "RulesEngineError",
    "UnknownEngineSchemaError",
    "EngineSchemaError",
    "UnknownDefinitionError",
    "UnknownStatError",
    "UnknownResourceError",
    "UnknownFieldError",
    "UnknownStatWarning",
    # Configuration
    "Settings",
    "CatalogSettings",
    "CreationSettings",
    "ShareSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
