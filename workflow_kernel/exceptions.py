"""
Typed exception hierarchy for workflow export.

Every exception carries a ``code`` class attribute (machine-readable) and
structured attributes for the values that caused it, so callers catch by
type and report by field instead of parsing messages.

    WorkflowExportError (base)
    |
    +-- DefinitionError
    |   +-- InvalidDefinitionError      root is not a JSON object
    |   +-- MalformedDefinitionError    unit unreadable or not valid JSON
    |
    +-- SourceError
    |   +-- SourceNotFoundError
    |   +-- UnsupportedSourceError
    |
    +-- BatchAbortedError               a unit failed under the abort policy
    |
    +-- ConfigError
        +-- InvalidConfigError

Only the load and configuration layers raise. Index builders and text
synthesizers are total over their inputs: missing fields and unresolved
references degrade to placeholder text, never to an exception.
"""

from __future__ import annotations


class WorkflowExportError(Exception):
    """
    Base exception for all workflow export errors.

    All subclasses must define a ``code`` class attribute.
    """

    code: str = "WORKFLOW_EXPORT_ERROR"


# Definition errors


class DefinitionError(WorkflowExportError):
    """Base exception for definitions that cannot be turned into records."""

    code: str = "DEFINITION_ERROR"


class InvalidDefinitionError(DefinitionError):
    """The parsed definition root is not an object."""

    code: str = "INVALID_DEFINITION"

    def __init__(self, received_type: str, source_name: str | None = None):
        self.received_type = received_type
        self.source_name = source_name
        where = f" in {source_name}" if source_name else ""
        super().__init__(f"Workflow definition must be an object, got {received_type}{where}")


class MalformedDefinitionError(DefinitionError):
    """A definition unit could not be read or parsed at all (e.g. invalid JSON)."""

    code: str = "MALFORMED_DEFINITION"

    def __init__(self, source_name: str, reason: str):
        self.source_name = source_name
        self.reason = reason
        super().__init__(f"Malformed definition {source_name}: {reason}")


# Source errors


class SourceError(WorkflowExportError):
    """Base exception for definition sources (files and archives)."""

    code: str = "SOURCE_ERROR"


class SourceNotFoundError(SourceError):
    """The source path does not exist."""

    code: str = "SOURCE_NOT_FOUND"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Source not found: {path}")


class UnsupportedSourceError(SourceError):
    """No adapter handles the source's file type."""

    code: str = "UNSUPPORTED_SOURCE"

    def __init__(self, path: str, suffix: str):
        self.path = path
        self.suffix = suffix
        super().__init__(f"Unsupported source type {suffix or '(none)'!r} for {path}; expected .json or .zip")


# Batch errors


class BatchAbortedError(WorkflowExportError):
    """A unit failed and the batch policy is to abort."""

    code: str = "BATCH_ABORTED"

    def __init__(self, source_name: str, cause_code: str, reason: str):
        self.source_name = source_name
        self.cause_code = cause_code
        self.reason = reason
        super().__init__(f"Batch aborted at {source_name} ({cause_code}): {reason}")


# Config errors


class ConfigError(WorkflowExportError):
    """Base exception for export configuration problems."""

    code: str = "CONFIG_ERROR"


class InvalidConfigError(ConfigError):
    """A configuration key is unknown or its value is out of range."""

    code: str = "INVALID_CONFIG"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid config {key!r}: {reason}")
