"""
Workflow Kernel - pure domain layer for workflow export.

Typed views over exported workflow definitions, identifier normalization,
the exception hierarchy, and structured logging. No file I/O.
"""

__version__ = "0.1.0"
