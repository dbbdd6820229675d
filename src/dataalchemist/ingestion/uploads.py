"""Dispatch an uploaded file to the right loader by extension."""

import logging
from pathlib import Path

from dataalchemist.exceptions import ExtractionError
from dataalchemist.ingestion.csv_loader import load_csv
from dataalchemist.ingestion.excel_loader import load_excel
from dataalchemist.models import Entity, EntityType

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".csv": "csv", ".xlsx": "xlsx"}


def detect_format(filename: str) -> str:
    """Return "csv" or "xlsx" for a filename.

    Raises:
        ExtractionError: If the extension is not supported.
    """
    suffix = Path(filename).suffix.lower()
    file_format = SUPPORTED_EXTENSIONS.get(suffix)
    if file_format is None:
        raise ExtractionError(
            message=f"Unsupported file type: {suffix or filename}",
            source=filename,
            user_message=f"'{filename}' is not supported. Upload a .csv or .xlsx file.",
        )
    return file_format


def load_file(filename: str, data: bytes, entity_type: EntityType) -> tuple[list[Entity], str]:
    """Load an uploaded file's bytes.

    Returns:
        (records, file_format) where file_format is "csv" or "xlsx".
    """
    file_format = detect_format(filename)
    logger.info("Loading upload %s as %s %s", filename, file_format, entity_type.value)
    if file_format == "csv":
        return load_csv(data, entity_type), file_format
    return load_excel(data, entity_type), file_format
