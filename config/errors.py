"""
Configuration loading errors.

Every failure of ``load_config`` is a subclass of ``ConfigError`` so callers
can abort startup on the base class and still tell the kinds apart.
"""

from typing import Any, Optional


class ConfigError(Exception):
    """Base class for all configuration loading errors."""


class ConfigIOError(ConfigError):
    """The configuration file could not be read."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"unable to read config file {path}: {cause}")


class MalformedDocumentError(ConfigError):
    """The document is not valid YAML or its root is not a mapping."""


class SchemaDecodeError(ConfigError):
    """A recognized top-level section does not match its schema."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class MalformedSectionError(ConfigError):
    """A strategy section is present but is not a list."""

    def __init__(self, section: str, value: Any):
        self.section = section
        super().__init__(
            f"expecting list in {section}, given: {type(value).__name__}"
        )


class NoExtensionsRegisteredError(ConfigError):
    """A strategy section is present but its registry is empty."""

    def __init__(self, section: str, kind: str):
        self.section = section
        self.kind = kind
        super().__init__(
            f"{section} is defined but no {kind.replace('_', ' ')} strategy is registered"
        )


class MalformedEntryError(ConfigError):
    """An item of a strategy section is not a mapping."""

    def __init__(self, section: str, index: int, entry: Any):
        self.section = section
        self.index = index
        self.entry = entry
        super().__init__(
            f"{section}[{index}]: strategy config should be a map, "
            f"given: {type(entry).__name__} {entry!r}"
        )


class ExtensionDecodeError(ConfigError):
    """The payload of a registered strategy does not decode into its class."""

    def __init__(self, identifier: str, payload: str, cause: Optional[Exception] = None):
        self.identifier = identifier
        self.payload = payload
        self.cause = cause
        super().__init__(
            f"unable to decode strategy '{identifier}': {cause}, given payload: {payload}"
        )


class UnknownExtensionError(ConfigError):
    """Strict mode only: a strategy entry key is not a registered identifier."""

    def __init__(self, section: str, index: int, identifier: Any):
        self.section = section
        self.index = index
        self.identifier = identifier
        super().__init__(
            f"{section}[{index}]: unknown strategy identifier {identifier!r}"
        )


class ExtensionImportError(ConfigError):
    """A module listed under ``imports`` could not be imported."""

    def __init__(self, module: str, cause: Exception):
        self.module = module
        self.cause = cause
        super().__init__(f"unable to import strategy module {module}: {cause}")


__all__ = [
    "ConfigError",
    "ConfigIOError",
    "MalformedDocumentError",
    "SchemaDecodeError",
    "MalformedSectionError",
    "NoExtensionsRegisteredError",
    "MalformedEntryError",
    "ExtensionDecodeError",
    "UnknownExtensionError",
    "ExtensionImportError",
]
