"""CSV export for cleaned datasets and validation reports."""

import csv
import io
import logging
from collections.abc import Sequence

from dataalchemist.models import Entity, ValidationIssue

logger = logging.getLogger(__name__)


def export_entities_csv(records: Sequence[Entity]) -> bytes:
    """Export clients, workers or tasks with their external column names.

    Args:
        records: Records of a single entity type.

    Returns:
        CSV content as bytes (UTF-8 encoded); empty for no records.
    """
    if not records:
        return b""

    rows = [r.to_row() for r in records]
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=list(rows[0]), lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)

    logger.info("Exported %d %s rows to CSV", len(rows), type(records[0]).__name__)
    return output.getvalue().encode("utf-8")


def export_issues_csv(issues: Sequence[ValidationIssue]) -> bytes:
    """Export a validation report.

    Row numbers are 1-based for spreadsheet users; dataset-level issues
    have an empty row.
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")

    writer.writerow(
        ["ID", "Entity", "Row", "Field", "Severity", "Message", "Suggestion"]
    )
    for issue in issues:
        writer.writerow(
            [
                issue.id,
                issue.entity_type.value,
                "" if issue.is_dataset_level else issue.row_index + 1,
                issue.field,
                issue.severity.value,
                issue.message,
                issue.suggestion or "",
            ]
        )

    logger.info("Exported %d validation issues to CSV", len(issues))
    return output.getvalue().encode("utf-8")
