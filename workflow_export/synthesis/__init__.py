"""Per-parameter and per-task column text builders. Total functions: no raises."""

from workflow_export.synthesis.automation import automation_text
from workflow_export.synthesis.dependencies import dependencies_text, executor_lock_text
from workflow_export.synthesis.filters import filters_text
from workflow_export.synthesis.validations import validations_text

__all__ = [
    "automation_text",
    "dependencies_text",
    "executor_lock_text",
    "filters_text",
    "validations_text",
]
