"""Data Alchemist validation: per-record field checks and cross-reference checks."""

from dataalchemist.validation.cross_reference import (
    check_duplicate_ids,
    check_requested_tasks,
    check_skill_coverage,
    find_duplicate_ids,
    validate_cross_references,
)
from dataalchemist.validation.engine import group_issues, summarize_issues, validate
from dataalchemist.validation.fields import validate_client, validate_task, validate_worker

__all__ = [
    "check_duplicate_ids",
    "check_requested_tasks",
    "check_skill_coverage",
    "find_duplicate_ids",
    "group_issues",
    "summarize_issues",
    "validate",
    "validate_client",
    "validate_cross_references",
    "validate_task",
    "validate_worker",
]
