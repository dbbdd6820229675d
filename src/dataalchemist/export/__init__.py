"""Data Alchemist export functionality."""

from dataalchemist.export.bundle import (
    ExportConfiguration,
    ExportFile,
    build_export,
    export_entities,
)
from dataalchemist.export.csv_export import (
    export_entities_csv,
    export_issues_csv,
)
from dataalchemist.export.excel_export import export_entities_xlsx
from dataalchemist.export.json_export import (
    export_entities_json,
    export_profile_json,
    export_rules_json,
)

__all__ = [
    "ExportConfiguration",
    "ExportFile",
    "build_export",
    "export_entities",
    "export_entities_csv",
    "export_entities_json",
    "export_entities_xlsx",
    "export_issues_csv",
    "export_profile_json",
    "export_rules_json",
]
