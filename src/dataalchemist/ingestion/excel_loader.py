"""Excel file loader for Data Alchemist.

Loads client, worker or task records from .xlsx workbooks into entity models.
Uses pandas with the openpyxl engine; header mapping is shared with csv_loader.
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

import pandas as pd

from dataalchemist.exceptions import ExtractionError
from dataalchemist.ingestion.csv_loader import check_row_limit, read_source_bytes
from dataalchemist.ingestion.field_mapping import frame_to_entities
from dataalchemist.models import Entity, EntityType

logger = logging.getLogger(__name__)


def load_excel(
    source: str | Path | BinaryIO | bytes,
    entity_type: EntityType,
    sheet_name: str | int = 0,
) -> list[Entity]:
    """Load clients, workers or tasks from an Excel sheet.

    Args:
        source: File path, file object, or raw Excel bytes.
        entity_type: Which collection the sheet holds.
        sheet_name: Sheet name or index to read (default: first sheet).

    Returns:
        One entity model per data row, in sheet order.

    Raises:
        ExtractionError: If the workbook cannot be read or the sheet is empty/too large.
        SchemaError: If no expected column can be recognized.

    Example:
        >>> tasks = load_excel("tasks.xlsx", EntityType.TASKS, sheet_name="Tasks")
    """
    logger.info("Loading %s Excel from %s", entity_type.value, type(source).__name__)

    excel_source = BytesIO(read_source_bytes(source))

    try:
        df = pd.read_excel(
            excel_source,
            sheet_name=sheet_name,
            engine="openpyxl",
            dtype=str,
        )
        logger.debug("Read Excel with %d rows, %d columns", len(df), len(df.columns))

    except ValueError as e:
        # Sheet not found, invalid file, etc.
        raise ExtractionError(
            message=f"Failed to read Excel: {e}",
            source="excel",
            user_message=f"Could not read the Excel file: {e}",
        ) from e
    except Exception as e:
        # openpyxl raises its own zipfile/xml errors for corrupt workbooks
        raise ExtractionError(
            message=f"Excel parsing error: {e}",
            source="excel",
            user_message="The Excel file could not be parsed. Ensure it's a valid .xlsx file.",
        ) from e

    df.columns = [str(c).strip() for c in df.columns]
    df = df.dropna(how="all")
    check_row_limit(df, "excel")

    records = frame_to_entities(df.reset_index(drop=True), entity_type)
    logger.info("Successfully loaded %d %s from Excel", len(records), entity_type.value)
    return records


def load_excel_from_bytes(
    data: bytes,
    entity_type: EntityType,
    sheet_name: str | int = 0,
) -> list[Entity]:
    """Convenience function for loading Excel from bytes (e.g., Streamlit file upload)."""
    return load_excel(data, entity_type, sheet_name=sheet_name)


def list_sheets(source: str | Path | BinaryIO | bytes) -> list[str]:
    """List available sheet names in an Excel file.

    Example:
        >>> list_sheets("alchemy.xlsx")
        ['Clients', 'Workers', 'Tasks']
    """
    excel_source = BytesIO(read_source_bytes(source))
    try:
        xl = pd.ExcelFile(excel_source, engine="openpyxl")
        return [str(name) for name in xl.sheet_names]
    except Exception as e:
        raise ExtractionError(
            message=f"Failed to read Excel sheets: {e}",
            source="excel",
            user_message="Could not read the Excel file structure.",
        ) from e
