from __future__ import annotations


class IdleCoreError(Exception):
    """Base class for idlecore errors."""


class ConfigurationError(IdleCoreError, ValueError):
    """Raised when catalog content is invalid. Fatal at load time."""


class PersistenceError(IdleCoreError):
    """Raised when a save record cannot be read, decoded or migrated."""
