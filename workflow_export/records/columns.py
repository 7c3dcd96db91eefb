"""Fixed column order of a flat record."""

from __future__ import annotations

STAGE_NAME = "Stage Name"
ACTIVITY_NAME = "Activity Name"
PERFORMER = "Performer"
DESCRIPTION = "Activity Description in detail"
INSTRUCTION_TITLE = "Instruction Title"
OPTIONS = "Options / Values"
FIELD_TYPE = "Field Type"
PARAMETER_TYPE = "Activity / Parameter Type"
DEPENDENCIES = "Dependencies"
EXECUTOR_LOCK = "Executor Lock"
BRANCHING = "Branching"
FILTERS = "Filters"
VALIDATIONS = "Validations"
AUTOMATION = "Automation Details"
FEASIBILITY = "Configuration Feasibility"
FEASIBILITY_NOTES = "Configuration Feasibility Notes"
STATUS = "Configuration Status"
SELF_VERIFICATION = "IS SELF VERIFICATION PRESENT?"
TESTER_COMMENTS = "Tester Comments"
PEER_VERIFICATION = "IS PEER VERIFICATION PRESENT?"
TESTER_COMMENTS_B = "Tester Comments (B)"

COLUMNS: tuple[str, ...] = (
    STAGE_NAME,
    ACTIVITY_NAME,
    PERFORMER,
    DESCRIPTION,
    INSTRUCTION_TITLE,
    OPTIONS,
    FIELD_TYPE,
    PARAMETER_TYPE,
    DEPENDENCIES,
    EXECUTOR_LOCK,
    BRANCHING,
    FILTERS,
    VALIDATIONS,
    AUTOMATION,
    FEASIBILITY,
    FEASIBILITY_NOTES,
    STATUS,
    SELF_VERIFICATION,
    TESTER_COMMENTS,
    PEER_VERIFICATION,
    TESTER_COMMENTS_B,
)

# Columns that carry task-level information (last parameter of a task only)
TASK_LEVEL_COLUMNS: tuple[str, ...] = (DEPENDENCIES, EXECUTOR_LOCK, AUTOMATION)

# One record per (stage, task, parameter); keys are exactly COLUMNS, in order
FlatRecord = dict[str, str]
