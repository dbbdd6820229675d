"""Whole-dataset checks that need more than one record or collection.

- Duplicate IDs per collection (hard error, reported once per collection)
- Clients requesting tasks that do not exist (warning, per client row)
- Tasks requiring skills no worker has (warning, per task row)

Referential and coverage gaps are warnings only: an imperfect dataset can
still be allocated.
"""

import logging
from collections.abc import Iterable, Sequence

from dataalchemist.models import (
    DATASET_ROW,
    ID_FIELDS,
    Client,
    Entity,
    EntityType,
    Severity,
    Task,
    ValidationIssue,
    Worker,
)

logger = logging.getLogger(__name__)


def find_duplicate_ids(ids: Iterable[str]) -> list[str]:
    """Return every ID seen more than once, each listed once in first-seen order.

    Blank IDs are ignored; they are reported as missing by field validation.
    """
    first_seen: dict[str, int] = {}
    duplicates: list[str] = []
    for index, raw in enumerate(ids):
        entity_id = raw.strip()
        if not entity_id:
            continue
        if entity_id not in first_seen:
            first_seen[entity_id] = index
        elif entity_id not in duplicates:
            duplicates.append(entity_id)
    return duplicates


def _duplicate_issue(entity_type: EntityType, records: Sequence[Entity]) -> list[ValidationIssue]:
    duplicates = find_duplicate_ids(r.entity_id for r in records)
    if not duplicates:
        return []
    field = ID_FIELDS[entity_type]
    logger.debug("Duplicate %s: %s", field, duplicates)
    return [
        ValidationIssue(
            entity_type=entity_type,
            row_index=DATASET_ROW,
            field=field,
            message=f"Duplicate {field}s found: {', '.join(duplicates)}",
            severity=Severity.ERROR,
            suggestion=f"Ensure all {field}s are unique",
        )
    ]


def check_duplicate_ids(
    clients: Sequence[Client],
    workers: Sequence[Worker],
    tasks: Sequence[Task],
) -> list[ValidationIssue]:
    """Report duplicated IDs, at most one issue per collection."""
    return (
        _duplicate_issue(EntityType.CLIENTS, clients)
        + _duplicate_issue(EntityType.WORKERS, workers)
        + _duplicate_issue(EntityType.TASKS, tasks)
    )


def check_requested_tasks(
    clients: Sequence[Client],
    tasks: Sequence[Task],
) -> list[ValidationIssue]:
    """Warn for each client referencing task IDs missing from the task table."""
    known = {t.task_id.strip() for t in tasks}
    issues: list[ValidationIssue] = []

    for row_index, client in enumerate(clients):
        missing: list[str] = []
        for task_id in client.requested_tasks:
            if task_id not in known and task_id not in missing:
                missing.append(task_id)
        if missing:
            issues.append(
                ValidationIssue(
                    entity_type=EntityType.CLIENTS,
                    row_index=row_index,
                    field="RequestedTaskIDs",
                    message=f"Referenced task IDs not found: {', '.join(missing)}",
                    severity=Severity.WARNING,
                    suggestion="Remove invalid task IDs or ensure the referenced tasks exist",
                )
            )

    return issues


def check_skill_coverage(
    workers: Sequence[Worker],
    tasks: Sequence[Task],
) -> list[ValidationIssue]:
    """Warn for each task requiring skills that no worker possesses.

    Skipped entirely when there are no workers yet (nothing to compare against).
    """
    if not workers:
        return []

    available = {skill for w in workers for skill in w.skill_tags}
    issues: list[ValidationIssue] = []

    for row_index, task in enumerate(tasks):
        uncovered = [s for s in dict.fromkeys(task.required_skill_tags) if s not in available]
        if uncovered:
            issues.append(
                ValidationIssue(
                    entity_type=EntityType.TASKS,
                    row_index=row_index,
                    field="RequiredSkills",
                    message=f"No workers have required skills: {', '.join(uncovered)}",
                    severity=Severity.WARNING,
                    suggestion="Add workers with these skills or modify skill requirements",
                )
            )

    return issues


def validate_cross_references(
    clients: Sequence[Client],
    workers: Sequence[Worker],
    tasks: Sequence[Task],
) -> list[ValidationIssue]:
    """Run all cross-collection checks."""
    return (
        check_duplicate_ids(clients, workers, tasks)
        + check_requested_tasks(clients, tasks)
        + check_skill_coverage(workers, tasks)
    )
