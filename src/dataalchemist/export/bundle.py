"""Assemble the set of files a user downloads at the end of a session."""

import logging
from dataclasses import dataclass

from pydantic import BaseModel

from dataalchemist.exceptions import ExportError
from dataalchemist.export.csv_export import export_entities_csv
from dataalchemist.export.excel_export import export_entities_xlsx
from dataalchemist.export.json_export import (
    export_entities_json,
    export_profile_json,
    export_rules_json,
)
from dataalchemist.models import EntityType
from dataalchemist.workspace import Workspace

logger = logging.getLogger(__name__)

MIME_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "json": "application/json",
}


class ExportConfiguration(BaseModel):
    """What to include in an export.

    format overrides the file type of the cleaned datasets; when None each
    dataset is written in the format it was uploaded in (csv for samples).
    """

    include_cleaned_data: bool = True
    include_rules: bool = True
    include_prioritization: bool = True
    format: str | None = None


@dataclass
class ExportFile:
    filename: str
    content: bytes
    mime_type: str


def export_entities(records, file_format: str) -> bytes:
    """Serialize one dataset in the given format.

    Raises:
        ExportError: If the format is not csv, xlsx or json.
    """
    if file_format == "csv":
        return export_entities_csv(records)
    if file_format == "xlsx":
        return export_entities_xlsx(records)
    if file_format == "json":
        return export_entities_json(records)
    raise ExportError(
        message=f"Unsupported export format: {file_format}",
        format=file_format,
        user_message=f"'{file_format}' is not a supported export format. Use csv, xlsx or json.",
    )


def build_export(config: ExportConfiguration, workspace: Workspace) -> list[ExportFile]:
    """Build every file selected by the configuration.

    Empty datasets are skipped. Rules export only enabled rules; the
    prioritization export uses the workspace's active profile.
    """
    files: list[ExportFile] = []

    if config.include_cleaned_data:
        for entity_type in EntityType:
            records = workspace.records(entity_type)
            if not records:
                continue
            file_format = config.format or workspace.original_formats.get(entity_type, "csv")
            files.append(
                ExportFile(
                    filename=f"{entity_type.value}_cleaned.{file_format}",
                    content=export_entities(records, file_format),
                    mime_type=MIME_TYPES[file_format],
                )
            )

    if config.include_rules:
        files.append(
            ExportFile("rules.json", export_rules_json(workspace.rules), MIME_TYPES["json"])
        )

    if config.include_prioritization:
        files.append(
            ExportFile(
                "prioritization.json",
                export_profile_json(workspace.active_profile),
                MIME_TYPES["json"],
            )
        )

    logger.info("Built export with %d files", len(files))
    return files
