"""Validation entry point.

Runs field validation over every record, then the cross-reference checks,
and numbers the resulting issues. Output order is deterministic: clients,
workers, tasks (each in row order), then dataset-wide checks.
"""

import logging
from collections.abc import Sequence

from dataalchemist.models import (
    Client,
    EntityType,
    Severity,
    Task,
    ValidationIssue,
    ValidationSummary,
    Worker,
)
from dataalchemist.validation.cross_reference import validate_cross_references
from dataalchemist.validation.fields import validate_client, validate_task, validate_worker

logger = logging.getLogger(__name__)


def validate(
    clients: Sequence[Client],
    workers: Sequence[Worker],
    tasks: Sequence[Task],
) -> list[ValidationIssue]:
    """Validate the three collections.

    Args:
        clients: Client records in upload order.
        workers: Worker records in upload order.
        tasks: Task records in upload order.

    Returns:
        All issues found, with ids ``issue_1``, ``issue_2``, ... in output order.
    """
    issues: list[ValidationIssue] = []

    for row_index, client in enumerate(clients):
        issues.extend(validate_client(client, row_index))
    for row_index, worker in enumerate(workers):
        issues.extend(validate_worker(worker, row_index))
    for row_index, task in enumerate(tasks):
        issues.extend(validate_task(task, row_index))

    issues.extend(validate_cross_references(clients, workers, tasks))

    numbered = [
        issue.model_copy(update={"id": f"issue_{n}"})
        for n, issue in enumerate(issues, start=1)
    ]

    summary = summarize_issues(numbered)
    logger.info(
        "Validated %d records: %d errors, %d warnings",
        len(clients) + len(workers) + len(tasks),
        summary.error_count,
        summary.warning_count,
    )
    return numbered


def summarize_issues(issues: Sequence[ValidationIssue]) -> ValidationSummary:
    """Count issues by severity and entity type."""
    by_entity: dict[EntityType, int] = {}
    errors = 0
    for issue in issues:
        by_entity[issue.entity_type] = by_entity.get(issue.entity_type, 0) + 1
        if issue.severity == Severity.ERROR:
            errors += 1
    return ValidationSummary(
        error_count=errors,
        warning_count=len(issues) - errors,
        by_entity=by_entity,
    )


def group_issues(
    issues: Sequence[ValidationIssue],
) -> dict[EntityType, dict[int, list[ValidationIssue]]]:
    """Group issues by entity type, then by row (dataset-level issues under -1).

    Rows are sorted ascending so dataset-level issues come first.
    """
    grouped: dict[EntityType, dict[int, list[ValidationIssue]]] = {}
    for issue in issues:
        rows = grouped.setdefault(issue.entity_type, {})
        rows.setdefault(issue.row_index, []).append(issue)
    return {
        entity_type: dict(sorted(rows.items()))
        for entity_type, rows in grouped.items()
    }
