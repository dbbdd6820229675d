"""Data ingestion module for Data Alchemist.

Provides loaders for CSV and Excel uploads with forgiving header mapping.

Example usage:
    >>> from dataalchemist.ingestion import load_csv, load_excel, load_file
    >>> from dataalchemist.models import EntityType
    >>>
    >>> clients = load_csv("clients.csv", EntityType.CLIENTS)
    >>> workers = load_excel("workers.xlsx", EntityType.WORKERS, sheet_name="Workers")
    >>>
    >>> # From a Streamlit upload
    >>> tasks, file_format = load_file(upload.name, upload.getvalue(), EntityType.TASKS)
"""

from dataalchemist.ingestion.csv_loader import (
    load_csv,
    load_csv_from_bytes,
)
from dataalchemist.ingestion.excel_loader import (
    list_sheets,
    load_excel,
    load_excel_from_bytes,
)
from dataalchemist.ingestion.field_mapping import (
    FIELD_ALIASES,
    FIELD_DEFAULTS,
    clean_list_field,
    clean_phase_field,
    frame_to_entities,
    resolve_columns,
)
from dataalchemist.ingestion.uploads import (
    SUPPORTED_EXTENSIONS,
    detect_format,
    load_file,
)

__all__ = [
    "FIELD_ALIASES",
    "FIELD_DEFAULTS",
    "SUPPORTED_EXTENSIONS",
    "clean_list_field",
    "clean_phase_field",
    "detect_format",
    "frame_to_entities",
    "list_sheets",
    "load_csv",
    "load_csv_from_bytes",
    "load_excel",
    "load_excel_from_bytes",
    "load_file",
    "resolve_columns",
]
