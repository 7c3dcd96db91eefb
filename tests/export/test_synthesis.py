"""Tests for the column text synthesizers (workflow_export/synthesis)."""

from workflow_export.indexing import build_reference_index, build_task_index
from workflow_export.synthesis import (
    automation_text,
    dependencies_text,
    executor_lock_text,
    filters_text,
    validations_text,
)
from workflow_export.synthesis.automation import automation_object_type, find_parameter
from workflow_kernel.domain import Parameter, Task, parse_definition

HEX_PROPERTY_ID = "692559bba9de4d179f65af5b"
HEX_OPTION_ID = "5f1e0a2b3c4d5e6f7a8b9c0d"
HEX_UNKNOWN_ID = "aaaaaaaaaaaaaaaaaaaaaaaa"


def _param(rich_definition, param_id):
    return next(p for p in rich_definition.iter_parameters() if p.id == param_id)


def _single_param_index(raw_param):
    definition = parse_definition({"parameterRequests": [raw_param]})
    return definition.parameters[0], build_reference_index(definition)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class TestFiltersText:

    def test_resolved_field_and_values(self, rich_definition, rich_index):
        text = filters_text(_param(rich_definition, "r1"), rich_index)
        assert text == (
            "Filter 1:\n"
            "  Field: Batch Status\n"
            "  Condition: equals\n"
            "  Selector: Constant\n"
            "  Values: Released"
        )

    def test_unresolved_hex_value_dropped(self, rich_definition, rich_index):
        text = filters_text(_param(rich_definition, "r1"), rich_index)
        assert HEX_UNKNOWN_ID not in text

    def test_no_values_line_when_every_value_unresolved(self):
        param, index = _single_param_index({"id": "r", "data": {"collection": "c", "propertyFilters": {"fields": [
            {"field": "status", "op": "EQ", "selector": "CONSTANT", "values": [HEX_UNKNOWN_ID]},
        ]}}})
        text = filters_text(param, index)
        assert text == "Filter 1:\n  Field: status\n  Condition: equals\n  Selector: Constant"

    def test_parameter_selector_has_no_values_line(self):
        param, index = _single_param_index({"id": "r", "data": {"collection": "c", "propertyFilters": {"fields": [
            {"field": "status", "selector": "PARAMETER", "values": ["open"], "referencedParameterId": "r"},
        ]}}})
        text = filters_text(param, index)
        assert "Values:" not in text
        assert "Selector: Parameter" in text

    def test_referenced_parameter_resolved(self):
        param, index = _single_param_index({"id": "r", "label": "Room", "data": {"collection": "c", "propertyFilters": {"fields": [
            {"field": "status", "referencedParameterId": "r"},
        ]}}})
        assert "Referenced Parameter: Room" in filters_text(param, index)

    def test_unresolved_key_has_no_field_line(self):
        param, index = _single_param_index({"id": "r", "data": {"collection": "c", "propertyFilters": {"fields": [
            {"field": "searchable.deadbeef", "fieldType": "propertyField"},
        ]}}})
        assert filters_text(param, index) == "Filter 1:\n  Type: Property field"

    def test_blocks_numbered_and_separated(self):
        param, index = _single_param_index({"id": "r", "data": {"collection": "c", "propertyFilters": {"fields": [
            {"field": "a", "values": [1], "selector": "CONSTANT"},
            {"field": "b", "values": [True], "selector": "CONSTANT"},
        ]}}})
        blocks = filters_text(param, index).split("\n\n")
        assert blocks[0].startswith("Filter 1:\n  Field: a")
        assert blocks[0].endswith("Values: 1")
        assert blocks[1].endswith("Values: true")

    def test_no_filters_placeholder(self, rich_definition, rich_index):
        assert filters_text(_param(rich_definition, "q1"), rich_index) == "N/A"
        assert filters_text(_param(rich_definition, "q1"), rich_index, placeholder="-") == "-"


# ---------------------------------------------------------------------------
# Validations
# ---------------------------------------------------------------------------


class TestValidationsText:

    def test_criteria_block(self, rich_definition, rich_index):
        assert validations_text(_param(rich_definition, "s1"), rich_index) == (
            "Criteria Validation 1:\n"
            "  Exception Type: Soft Exception\n"
            "  Condition: is less than or equal to\n"
            "  Selector: Constant\n"
            "  Value: 25\n"
            '  Error Message: "Too warm"'
        )

    def test_no_validations_placeholder(self, rich_definition, rich_index):
        assert validations_text(_param(rich_definition, "q1"), rich_index) == "N/A"

    def test_missing_exception_type_reads_default(self):
        param, index = _single_param_index({"id": "p", "validations": [{"criteriaValidations": [{"constraint": "GT"}]}]})
        assert "Exception Type: Default" in validations_text(param, index)

    def test_constant_hex_value_resolved(self, rich_index):
        param = Parameter.from_raw({"validations": [{"propertyValidations": [
            {"selector": "CONSTANT", "value": HEX_OPTION_ID, "propertyId": HEX_PROPERTY_ID},
        ]}]})
        text = validations_text(param, rich_index)
        assert "  Value: Released" in text
        assert "  Property: Batch Status" in text

    def test_unresolved_hex_value_kept_raw(self, rich_index):
        param = Parameter.from_raw({"validations": [{"criteriaValidations": [
            {"selector": "CONSTANT", "value": HEX_UNKNOWN_ID},
        ]}]})
        assert f"  Value: {HEX_UNKNOWN_ID}" in validations_text(param, rich_index)

    def test_unresolved_hex_property_omitted(self, rich_index):
        param = Parameter.from_raw({"validations": [{"propertyValidations": [{"propertyId": HEX_UNKNOWN_ID}]}]})
        assert "Property:" not in validations_text(param, rich_index)

    def test_kinds_in_fixed_order_and_numbered(self):
        param, index = _single_param_index({"id": "p", "validations": [{
            "propertyValidations": [{"constraint": "EQ"}],
            "dateTimeParameterValidations": [{"dateUnit": "DAYS", "value": 3}, {"dateUnit": "HOURS"}],
        }]})
        titles = [block.split("\n")[0] for block in validations_text(param, index).split("\n\n")]
        assert titles == ["Date/Time Validation 1:", "Date/Time Validation 2:", "Property Validation 1:"]

    def test_min_max_and_zero(self):
        param, index = _single_param_index({"id": "p", "validations": [{"criteriaValidations": [
            {"minValue": 0, "maxValue": 10.0},
        ]}]})
        text = validations_text(param, index)
        assert "  Min Value: 0" in text
        assert "  Max Value: 10" in text

    def test_custom_mapping(self):
        param, index = _single_param_index({"id": "p", "validations": [{
            "exceptionApprovalType": "WARNING",
            "customValidations": {"maxLength": 10, "pattern": "^A"},
        }]})
        assert validations_text(param, index) == (
            "Custom Validation:\n"
            "  Exception Type: Warning Only\n"
            "  Max length: 10\n"
            '  Pattern: "^A"'
        )

    def test_custom_list_and_scalar(self):
        param, index = _single_param_index({"id": "p", "validations": [
            {"customValidations": ["x"]},
            {"customValidations": "check manually"},
        ]})
        blocks = validations_text(param, index).split("\n\n")
        assert blocks[0].endswith('  0: "x"')
        assert blocks[1].endswith("  Details: check manually")

    def test_custom_text_keeps_non_ascii_characters(self):
        param, index = _single_param_index({"id": "p", "validations": [
            {"customValidations": {"message": "café ✓", "rule": {"unit": "°C"}}},
        ]})
        lines = validations_text(param, index).splitlines()
        assert '  Message: "café ✓"' in lines
        assert '  Rule: {"unit": "°C"}' in lines


# ---------------------------------------------------------------------------
# Dependencies and executor lock
# ---------------------------------------------------------------------------


class TestDependenciesText:

    def test_resolved_and_unresolved(self, rich_definition, rich_tasks):
        sign_off = rich_definition.stages[1].tasks[0]
        assert dependencies_text(sign_off, rich_tasks) == (
            "Tasks that need to be executed before this task:\n"
            "Stage 1: Preparation\n"
            "  → Task 1.1: Select Batch\n"
            "Task ID: 999 (not found in workflow)"
        )

    def test_no_prerequisites_placeholder(self, rich_definition, rich_tasks):
        assert dependencies_text(rich_definition.stages[0].tasks[0], rich_tasks, placeholder="") == ""


class TestExecutorLockText:

    def test_both_constraints(self, rich_definition, rich_tasks):
        sign_off = rich_definition.stages[1].tasks[0]
        assert executor_lock_text(sign_off, rich_tasks) == (
            "Must be executed by same person as:\n"
            "  Task 1.1: Select Batch (Preparation)\n"
            "\n"
            "Cannot be executed by same person as:\n"
            "  Task ID: missing"
        )

    def test_unresolved_has_to_be(self, rich_tasks):
        task = Task.from_raw({"taskExecutorLock": {"hasToBeExecutorId": "404"}})
        assert executor_lock_text(task, rich_tasks) == "Must be executed by same person as: Task ID 404"

    def test_empty_lock_placeholder(self, rich_tasks):
        task = Task.from_raw({"taskExecutorLock": {"hasToBeExecutorId": "", "cannotBeExecutorIds": []}})
        assert executor_lock_text(task, rich_tasks) == "N/A"
        assert executor_lock_text(Task(), rich_tasks) == "N/A"


# ---------------------------------------------------------------------------
# Automation
# ---------------------------------------------------------------------------


class TestAutomationText:

    def test_block(self, intake_raw):
        definition = parse_definition(intake_raw)
        task = definition.stages[0].tasks[0]
        assert automation_text(task, definition, build_reference_index(definition)) == (
            "Automation: Notify\n"
            "Trigger: task completed\n"
            "Action: send notification\n"
            "Object Type: Equipment"
        )

    def test_no_rules_is_empty_not_placeholder(self, rich_definition, rich_index):
        assert automation_text(rich_definition.stages[0].tasks[0], rich_definition, rich_index) == ""

    def test_object_type_from_referenced_parameter(self, rich_definition, rich_index):
        task = Task.from_raw({"automationRequests": [{
            "triggerType": "START",
            "actionType": "CREATE_OBJECT",
            "actionDetails": {
                "referencedParameterId": "r1",
                "configuration": [
                    {"parameterLabel": "Label Wins", "parameterId": "x"},
                    {"parameterId": HEX_PROPERTY_ID},
                    {"parameterId": HEX_UNKNOWN_ID},
                ],
            },
        }]})
        text = automation_text(task, rich_definition, rich_index)
        assert text == (
            "Automation: Unnamed Automation\n"
            "Trigger: start\n"
            "Action: create object\n"
            "Object Type: batches\n"
            "Parameters to be automated:\n"
            "• Label Wins\n"
            "• Batch Status"
        )

    def test_unknown_object_type(self, rich_definition):
        task = Task.from_raw({"automationRequests": [{"actionDetails": {"referencedParameterId": "nope"}}]})
        assert automation_object_type(task.automations[0], rich_definition) == "Unknown Object Type"

    def test_find_parameter_prefers_creation_form(self):
        definition = parse_definition({
            "parameterRequests": [{"id": 5, "label": "Top"}],
            "stageRequests": [{"taskRequests": [{"parameterRequests": [{"id": "5", "label": "Nested"}]}]}],
        })
        assert find_parameter(definition, "5").label == "Top"
        assert find_parameter(definition, None) is None

    def test_rule_blocks_separated_by_blank_line(self, rich_definition, rich_index):
        task = Task.from_raw({"automationRequests": [{"displayName": "A"}, {"displayName": "B"}]})
        blocks = automation_text(task, rich_definition, rich_index).split("\n\n")
        assert [b.split("\n")[0] for b in blocks] == ["Automation: A", "Automation: B"]
