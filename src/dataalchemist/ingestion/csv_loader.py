"""CSV file loader for Data Alchemist.

Loads client, worker or task records from CSV files into entity models.
Handles common issues: encoding, header variations, missing columns.
"""

import logging
from io import StringIO
from pathlib import Path
from typing import BinaryIO

import pandas as pd

from dataalchemist.config import settings
from dataalchemist.exceptions import ExtractionError
from dataalchemist.ingestion.field_mapping import frame_to_entities
from dataalchemist.models import Entity, EntityType

logger = logging.getLogger(__name__)


def read_source_bytes(source: str | Path | BinaryIO | bytes) -> bytes:
    """Read raw bytes from a path, file object or bytes.

    Raises:
        ExtractionError: If a path does not exist.
    """
    if isinstance(source, str | Path):
        path = Path(source)
        if not path.exists():
            raise ExtractionError(
                message=f"File not found: {path}",
                source=str(path),
                user_message=f"The file '{path.name}' was not found.",
            )
        return path.read_bytes()
    if isinstance(source, bytes):
        return source

    file_obj: BinaryIO = source
    content = file_obj.read()
    file_obj.seek(0)
    if not isinstance(content, bytes):
        content = (
            bytes(content)
            if isinstance(content, bytearray | memoryview)
            else content.encode("utf-8")
        )
    return content


def check_row_limit(df: pd.DataFrame, source: str) -> None:
    """Reject uploads that are empty or larger than the configured limit."""
    if df.empty:
        raise ExtractionError(
            message=f"{source} has no data rows",
            source=source,
            user_message="The file has headers but no data rows.",
        )
    if len(df) > settings.max_upload_rows:
        raise ExtractionError(
            message=f"{source} has {len(df)} rows (limit {settings.max_upload_rows})",
            source=source,
            user_message=f"The file has {len(df)} rows; the maximum is {settings.max_upload_rows}.",
        )


def _parse_csv_content(
    content: str | bytes,
    delimiter: str | None = ",",
    encoding: str = "utf-8",
) -> pd.DataFrame:
    """Parse CSV content into DataFrame with error handling.

    Args:
        content: CSV content as string or bytes.
        delimiter: CSV delimiter. If None, pandas will sniff it.
        encoding: Character encoding for bytes content.

    Raises:
        ExtractionError: If parsing fails.
    """
    try:
        if isinstance(content, bytes):
            content = content.decode(encoding)
        # Excel-exported CSVs often start with a BOM
        content = content.lstrip("\ufeff")

        df = pd.read_csv(
            StringIO(content),
            sep=delimiter,
            engine="python" if delimiter is None else "c",
            on_bad_lines="warn",
            skip_blank_lines=True,
            dtype=str,
            keep_default_na=False,
        )

        logger.debug("Parsed CSV with %d rows, %d columns", len(df), len(df.columns))
        return df

    except pd.errors.EmptyDataError as e:
        raise ExtractionError(
            message=f"CSV file is empty: {e}",
            source="csv",
            user_message="The CSV file is empty. Please provide a file with data.",
        ) from e
    except pd.errors.ParserError as e:
        raise ExtractionError(
            message=f"Failed to parse CSV: {e}",
            source="csv",
            user_message="The CSV file could not be parsed. Check that it's properly formatted "
            "with consistent delimiters and quoted JSON values.",
        ) from e
    except UnicodeDecodeError as e:
        raise ExtractionError(
            message=f"Encoding error: {e}",
            source="csv",
            user_message=f"The file encoding is not {encoding}. Try saving the file as UTF-8.",
        ) from e


def load_csv(
    source: str | Path | BinaryIO | bytes,
    entity_type: EntityType,
    delimiter: str | None = ",",
    encoding: str = "utf-8",
) -> list[Entity]:
    """Load clients, workers or tasks from a CSV file or content.

    Args:
        source: File path, file object, or raw CSV bytes.
        entity_type: Which collection the file holds.
        delimiter: CSV delimiter (sniffed if None).
        encoding: Character encoding (default: utf-8).

    Returns:
        One entity model per data row, in file order.

    Raises:
        ExtractionError: If the file cannot be read or is empty/too large.
        SchemaError: If no expected column can be recognized.

    Example:
        >>> workers = load_csv("workers.csv", EntityType.WORKERS)
        >>> print(f"Loaded {len(workers)} workers")
    """
    logger.info("Loading %s CSV from %s", entity_type.value, type(source).__name__)

    content = read_source_bytes(source)
    df = _parse_csv_content(content, delimiter=delimiter, encoding=encoding)

    df.columns = [str(c).strip() for c in df.columns]
    # Rows where every cell is blank are spreadsheet leftovers
    if not df.empty:
        df = df[df.apply(lambda row: any(str(v).strip() for v in row), axis=1)]
    check_row_limit(df, "csv")

    records = frame_to_entities(df.reset_index(drop=True), entity_type)
    logger.info("Successfully loaded %d %s from CSV", len(records), entity_type.value)
    return records


def load_csv_from_bytes(data: bytes, entity_type: EntityType) -> list[Entity]:
    """Convenience function for loading CSV from bytes (e.g., Streamlit file upload)."""
    return load_csv(data, entity_type)
