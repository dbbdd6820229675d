"""Per-record field validation.

Each validator takes one record and its 0-based row index and returns the
issues found in that record alone. Validators never raise: malformed JSON
becomes an error record with a remediation suggestion.
"""

import logging

from dataalchemist.models import (
    Client,
    DecodedPhases,
    EntityType,
    Severity,
    Task,
    ValidationIssue,
    Worker,
)

logger = logging.getLogger(__name__)

PRIORITY_MIN = 1
PRIORITY_MAX = 5


def _issue(
    entity_type: EntityType,
    row_index: int,
    field: str,
    message: str,
    suggestion: str,
    severity: Severity = Severity.ERROR,
) -> ValidationIssue:
    return ValidationIssue(
        entity_type=entity_type,
        row_index=row_index,
        field=field,
        message=message,
        severity=severity,
        suggestion=suggestion,
    )


def _check_required(
    entity_type: EntityType,
    row_index: int,
    field: str,
    value: str,
    suggestion: str,
) -> list[ValidationIssue]:
    if value and value.strip():
        return []
    return [_issue(entity_type, row_index, field, f"{field} is required", suggestion)]


def _check_at_least_one(
    entity_type: EntityType,
    row_index: int,
    field: str,
    value: int,
    suggestion: str,
) -> list[ValidationIssue]:
    if value >= 1:
        return []
    return [
        _issue(entity_type, row_index, field, f"{field} must be at least 1 (got {value})", suggestion)
    ]


def _check_phase_array(
    entity_type: EntityType,
    row_index: int,
    field: str,
    decoded: DecodedPhases,
) -> list[ValidationIssue]:
    """Check a JSON array of phase numbers. Empty fields are not checked."""
    if not decoded.provided:
        return []
    if decoded.error is not None:
        return [
            _issue(
                entity_type,
                row_index,
                field,
                f"{field} must be a valid JSON array ({decoded.error})",
                "Format as a JSON array of phase numbers, e.g. [1,2,3]",
            )
        ]
    if decoded.invalid_entries:
        bad = ", ".join(repr(v) for v in decoded.invalid_entries)
        return [
            _issue(
                entity_type,
                row_index,
                field,
                f"{field} must contain only positive integers (invalid: {bad})",
                "Ensure all phase numbers are positive integers, e.g. [1,2,3]",
            )
        ]
    return []


def validate_client(client: Client, row_index: int) -> list[ValidationIssue]:
    """Validate a single client record."""
    kind = EntityType.CLIENTS
    issues: list[ValidationIssue] = []

    issues += _check_required(
        kind, row_index, "ClientID", client.client_id,
        "Provide a unique identifier for the client",
    )
    issues += _check_required(
        kind, row_index, "ClientName", client.client_name,
        "Provide a descriptive name for the client",
    )

    if not PRIORITY_MIN <= client.priority_level <= PRIORITY_MAX:
        issues.append(
            _issue(
                kind,
                row_index,
                "PriorityLevel",
                f"PriorityLevel must be between {PRIORITY_MIN} and {PRIORITY_MAX} "
                f"(got {client.priority_level})",
                "Set priority level to a value between 1 (low) and 5 (high)",
            )
        )

    attributes = client.attributes
    if attributes.error is not None:
        issues.append(
            _issue(
                kind,
                row_index,
                "AttributesJSON",
                f"AttributesJSON contains invalid JSON ({attributes.error})",
                'Ensure the JSON is properly formatted, e.g. {"budget": 5000}',
            )
        )

    return issues


def validate_worker(worker: Worker, row_index: int) -> list[ValidationIssue]:
    """Validate a single worker record."""
    kind = EntityType.WORKERS
    issues: list[ValidationIssue] = []

    issues += _check_required(
        kind, row_index, "WorkerID", worker.worker_id,
        "Provide a unique identifier for the worker",
    )
    issues += _check_required(
        kind, row_index, "WorkerName", worker.worker_name,
        "Provide the worker's name",
    )
    issues += _check_at_least_one(
        kind, row_index, "MaxLoadPerPhase", worker.max_load_per_phase,
        "Set a positive number for maximum workload per phase",
    )

    slots = worker.slots
    issues += _check_phase_array(kind, row_index, "AvailableSlots", slots)

    # Feasibility only makes sense once the array itself parsed
    if slots.is_usable and worker.max_load_per_phase > slots.length:
        issues.append(
            _issue(
                kind,
                row_index,
                "MaxLoadPerPhase",
                f"MaxLoadPerPhase ({worker.max_load_per_phase}) exceeds the number "
                f"of available slots ({slots.length})",
                f"Reduce MaxLoadPerPhase to {slots.length} or add more available slots",
                severity=Severity.WARNING,
            )
        )

    return issues


def validate_task(task: Task, row_index: int) -> list[ValidationIssue]:
    """Validate a single task record.

    Skill coverage needs the worker collection and is checked in
    cross_reference.check_skill_coverage instead.
    """
    kind = EntityType.TASKS
    issues: list[ValidationIssue] = []

    issues += _check_required(
        kind, row_index, "TaskID", task.task_id,
        "Provide a unique identifier for the task",
    )
    issues += _check_required(
        kind, row_index, "TaskName", task.task_name,
        "Provide a descriptive name for the task",
    )
    issues += _check_at_least_one(
        kind, row_index, "Duration", task.duration,
        "Set task duration to a positive number of phases",
    )
    issues += _check_at_least_one(
        kind, row_index, "MaxConcurrent", task.max_concurrent,
        "Set maximum concurrent assignments to a positive number",
    )
    issues += _check_phase_array(kind, row_index, "PreferredPhases", task.phases)

    return issues
