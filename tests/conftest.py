"""
Pytest fixtures for the workflow export test suite.

Provides:
- Raw workflow definitions (plain dicts, as parsed from JSON)
- Parsed definitions and their lookup indexes
- A clean logging state for every test
"""

import copy

import pytest

from workflow_config.schema import ExportConfig
from workflow_export.indexing import build_reference_index, build_task_index
from workflow_kernel.domain import parse_definition
from workflow_kernel.logging_config import LogContext, reset_logging

HEX_PROPERTY_ID = "692559bba9de4d179f65af5b"
HEX_OPTION_ID = "5f1e0a2b3c4d5e6f7a8b9c0d"
HEX_UNKNOWN_ID = "aaaaaaaaaaaaaaaaaaaaaaaa"

_INTAKE_DEFINITION = {
    "name": "Intake Workflow",
    "stageRequests": [
        {
            "name": "Intake",
            "orderTree": 1,
            "taskRequests": [
                {
                    "id": "t1",
                    "name": "Collect Info",
                    "orderTree": 1,
                    "parameterRequests": [
                        {
                            "id": "p1",
                            "label": "Notes",
                            "type": "SINGLE_LINE",
                            "mandatory": True,
                            "verificationType": "NONE",
                        },
                        {
                            "id": "p2",
                            "label": "Approved?",
                            "type": "SINGLE_SELECT",
                            "mandatory": False,
                            "verificationType": "SELF",
                            "data": [
                                {"id": "o1", "name": "Yes"},
                                {"id": "o2", "name": "No"},
                            ],
                        },
                    ],
                    "automationRequests": [
                        {
                            "displayName": "Notify",
                            "triggerType": "TASK_COMPLETED",
                            "actionType": "SEND_NOTIFICATION",
                            "actionDetails": {"objectTypeDisplayName": "Equipment"},
                        }
                    ],
                }
            ],
        }
    ],
}

_RICH_DEFINITION = {
    "name": "Batch Release",
    "objects": [
        {
            "properties": [
                {
                    "id": HEX_PROPERTY_ID,
                    "displayName": "Batch Status",
                    "choices": [{"id": HEX_OPTION_ID, "displayName": "Released"}],
                }
            ]
        }
    ],
    "parameterRequests": [
        {"id": "cf1", "label": "Batch Number", "type": "SINGLE_LINE", "mandatory": True},
    ],
    "stageRequests": [
        {
            "name": "Preparation",
            "taskRequests": [
                {
                    "id": 101,
                    "name": "Select Batch",
                    "parameterRequests": [
                        {
                            "id": "r1",
                            "label": "Batch",
                            "type": "RESOURCE",
                            "mandatory": True,
                            "verificationType": "PEER",
                            "data": {
                                "collection": "batches",
                                "objectTypeDisplayName": "Batch",
                                "propertyFilters": {
                                    "fields": [
                                        {
                                            "field": f"searchable.{HEX_PROPERTY_ID}",
                                            "op": "EQ",
                                            "selector": "CONSTANT",
                                            "values": [HEX_OPTION_ID, HEX_UNKNOWN_ID],
                                        }
                                    ]
                                },
                            },
                        },
                        {
                            "id": "q1",
                            "label": "Passed QC",
                            "type": "YES_NO",
                            "data": {"choices": [{"id": "y", "name": "Yes"}, {"id": "n", "name": "No"}]},
                            "rules": [{"input": ["y"], "show": {"parameters": ["q2"]}}],
                        },
                        {
                            "id": "q2",
                            "label": "Reviewer Comment",
                            "type": "MULTI_LINE",
                        },
                    ],
                },
            ],
        },
        {
            "name": "Release",
            "taskRequests": [
                {
                    "id": "102",
                    "name": "Sign Off",
                    "prerequisiteTaskIds": ["101", "999"],
                    "taskExecutorLock": {
                        "hasToBeExecutorId": 101,
                        "cannotBeExecutorIds": ["missing"],
                    },
                    "parameterRequests": [
                        {
                            "id": "s1",
                            "label": "Temperature",
                            "type": "NUMBER",
                            "mandatory": True,
                            "verificationType": "BOTH",
                            "validations": [
                                {
                                    "exceptionApprovalType": "SOFT_EXCEPTION",
                                    "criteriaValidations": [
                                        {
                                            "constraint": "LTE",
                                            "selector": "CONSTANT",
                                            "value": 25,
                                            "errorMessage": "Too warm",
                                        }
                                    ],
                                }
                            ],
                        }
                    ],
                }
            ],
        },
    ],
}


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def intake_raw():
    """One stage, one task, two parameters, one automation."""
    return copy.deepcopy(_INTAKE_DEFINITION)


@pytest.fixture
def rich_raw():
    """Two stages with filters, visibility rules, dependencies, validations, and a creation form."""
    return copy.deepcopy(_RICH_DEFINITION)


@pytest.fixture
def rich_definition(rich_raw):
    return parse_definition(rich_raw)


@pytest.fixture
def rich_index(rich_definition):
    return build_reference_index(rich_definition)


@pytest.fixture
def rich_tasks(rich_definition):
    return build_task_index(rich_definition)


@pytest.fixture
def export_config():
    return ExportConfig()
